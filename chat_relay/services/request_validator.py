"""Validation of inbound chat requests.

The validator works on the raw method and body so that the route can
accept every method and still answer non-POST requests with a 405 that
lists the allowed methods.
"""

from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from ..config.llm_config import DEFAULT_MODEL
from ..models.chat_request import ChatRequest
from ..utils.error_handler import InvalidJSONBody, InvalidRequest, MethodNotAllowed

ALLOWED_METHODS: tuple[str, ...] = ("POST",)


def ensure_method_allowed(method: str) -> None:
    """Raise :class:`MethodNotAllowed` unless ``method`` is accepted."""
    if method.upper() not in ALLOWED_METHODS:
        raise MethodNotAllowed(method.upper(), ALLOWED_METHODS)


def validate_request(
    method: str,
    body: bytes | str,
    default_model: str = DEFAULT_MODEL,
) -> ChatRequest:
    """Check the method and decode ``body`` into a :class:`ChatRequest`.

    Raises
    ------
    MethodNotAllowed
        If the method is anything other than POST.
    InvalidJSONBody
        If the body is not a JSON object.
    InvalidRequest
        If ``message`` or ``user_id`` is missing, empty or not a string.
    """
    ensure_method_allowed(method)
    try:
        return ChatRequest.model_validate_json(
            body or b"",
            context={"default_model": default_model},
        )
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_input=False)
        logger.debug("Chat request rejected: {}", errors)
        # Errors without a location concern the body as a whole.
        if any(not error["loc"] for error in errors):
            raise InvalidJSONBody("Request body is not a JSON object") from exc
        fields = sorted({str(error["loc"][0]) for error in errors if error["loc"]})
        raise InvalidRequest(f"Invalid fields: {', '.join(fields)}") from exc
