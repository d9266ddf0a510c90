"""Enumerations used across models."""

from enum import Enum


class MessageRole(str, Enum):
    """Author of a persisted transcript message.

    ``USER`` marks the client's prompt and ``BOT`` the completion reply.
    The values are stored verbatim in the ``role`` column.
    """

    USER = "user"
    BOT = "bot"
