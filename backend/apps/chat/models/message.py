"""API schemas for transcript messages and conversation state."""

from pydantic import BaseModel, Field

from services import ConversationController, Message


class MessageSchema(BaseModel):
    """A transcript message in API responses."""

    id: str = Field(..., description="Message ID")
    text: str = Field(..., description="Message text")
    sender: str = Field(..., description="Message author: 'user' or 'bot'")

    @classmethod
    def from_message(cls, message: Message) -> "MessageSchema":
        return cls(id=message.id, text=message.text, sender=message.sender.value)


class ConversationState(BaseModel):
    """Snapshot of the conversation as presented to the client."""

    status: str = Field(..., description="IDLE, PROCESSING, READY or ERROR")
    is_bot_replying: bool = Field(..., description="Whether a reply is in flight")
    messages: list[MessageSchema] = Field(
        ..., description="Transcript, or the greeting when empty"
    )

    @classmethod
    def from_controller(cls, controller: ConversationController) -> "ConversationState":
        return cls(
            status=controller.status.value,
            is_bot_replying=controller.is_bot_replying,
            messages=[
                MessageSchema.from_message(m) for m in controller.display_messages()
            ],
        )
