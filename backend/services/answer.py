"""Grounded answer generation.

Answers a question using only the aggregated document context. Backend
failures never propagate: the user gets a fixed apology instead.
"""

import logging

from llm import BaseLLMService, LLMError
from llm.prompts import build_document_qa_prompt

logger = logging.getLogger(__name__)

NO_DOCUMENTS_ANSWER = (
    "I can't answer questions without any documents. "
    "Please upload one or more files first."
)
GENERATION_FAILED_ANSWER = (
    "I'm sorry, but I encountered an unexpected error while trying to generate "
    "a response. Please try again."
)


class AnswerGenerator:
    """Generates answers grounded in a document context."""

    def __init__(self, llm: BaseLLMService, model: str | None = None) -> None:
        self.llm = llm
        self.model = model or llm.model

    async def answer(self, context: str, question: str) -> str:
        """Answer a question from the given context.

        Returns the refusal message without contacting the backend when the
        context is blank, and the apology message on any backend failure.
        """
        if not context.strip():
            return NO_DOCUMENTS_ANSWER

        prompt = build_document_qa_prompt(context, question)

        try:
            response = await self.llm.generate(prompt, model=self.model)
            return response.strip()
        except LLMError as e:
            logger.error("Error generating answer: %s", e)
        except Exception:
            logger.exception("Unexpected error generating answer")

        return GENERATION_FAILED_ANSWER
