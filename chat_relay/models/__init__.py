"""Expose commonly used model classes at the package level.

Importing these classes here allows consumers to write concise imports like::

    from chat_relay.models import ChatRequest, ChatResponse, MessageRecord

These names refer to the underlying Pydantic models defined in their
respective modules.
"""

from .chat_request import ChatRequest  # noqa: F401
from .chat_response import ChatResponse, ErrorResponse  # noqa: F401
from .completion import CompletionPayload, CompletionResult  # noqa: F401
from .message_record import MessageRecord  # noqa: F401
from .enums import MessageRole  # noqa: F401
