"""Chat proxy schemas."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Prompt for the completion API."""
    prompt: str = Field(min_length=1)


class ChatReply(BaseModel):
    """Completion text."""
    text: str
