"""Request model for the chat API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from ..config.llm_config import DEFAULT_MODEL


class ChatRequest(BaseModel):
    """Represents a request payload for a chat message.

    ``message`` and ``user_id`` are required and must be non-empty
    strings.  ``model`` is optional; when it is absent, ``null`` or empty
    the default model is used.  The default can be supplied through the
    validation context under ``default_model``, otherwise
    :data:`DEFAULT_MODEL` applies.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str = Field(
        ...,
        min_length=1,
        description="The user's message content."
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        min_length=1,
        description="Identifier of the completion model to use."
    )
    user_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the user the transcript belongs to."
    )

    @model_validator(mode="before")
    @classmethod
    def apply_default_model(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict) or data.get("model") not in (None, ""):
            return data
        context = info.context or {}
        return {**data, "model": context.get("default_model") or DEFAULT_MODEL}
