"""Response models for the chat API."""

from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """The model's reply returned to the caller."""

    reply: str = Field(..., description="Trimmed completion text.")


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    ``error`` is a short category string and never contains upstream
    payloads or tracebacks.
    """

    error: str
