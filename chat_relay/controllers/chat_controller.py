"""API controller for the chat relay endpoint.

The route is registered for every common method so that the request
validator, not the router, decides which methods are rejected.
"""

from fastapi import APIRouter, Depends, Request
from loguru import logger

from ..models.chat_response import ChatResponse, ErrorResponse
from ..services.relay_service import RelayService, get_relay_service
from ..services.request_validator import validate_request
from ..utils.error_handler import InternalError, RelayError

ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter(prefix="/api", tags=["Chat"])


@router.api_route(
    "/chat",
    methods=ROUTED_METHODS,
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat_endpoint(
    request: Request,
    service: RelayService = Depends(get_relay_service),
) -> ChatResponse:
    """Relay a chat message to the completion API and store the transcript.

    Expects a JSON body ``{"message": ..., "user_id": ..., "model": ...}``
    where ``model`` is optional.  Returns ``{"reply": ...}`` once both the
    user's message and the reply have been saved.
    """
    try:
        body = await request.body() if request.method == "POST" else b""
        chat_request = validate_request(request.method, body, service.default_model)
        logger.info("Received chat request from user={}", chat_request.user_id)
        return await service.relay(chat_request)
    except RelayError:
        raise
    except Exception as exc:
        logger.exception("Unhandled exception during chat relay")
        raise InternalError(f"{type(exc).__name__}: {exc}") from exc
