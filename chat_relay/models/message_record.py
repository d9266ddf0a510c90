"""Model representing a persisted transcript row."""

from pydantic import BaseModel, ConfigDict

from .enums import MessageRole


class MessageRecord(BaseModel):
    """One row of the message table.

    Each successful relay produces exactly two records, the user's
    message followed by the bot's reply, written in a single insert.
    Records are never updated or deleted by the relay.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: MessageRole
    message: str
    model: str
    user_id: str
