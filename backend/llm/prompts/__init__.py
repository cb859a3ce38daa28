"""LLM prompts for various use cases."""

from llm.prompts.document_qa import (
    DOCUMENT_QA_PROMPT,
    NOT_FOUND_ANSWER,
    build_document_qa_prompt,
)

__all__ = [
    "DOCUMENT_QA_PROMPT",
    "NOT_FOUND_ANSWER",
    "build_document_qa_prompt",
]
