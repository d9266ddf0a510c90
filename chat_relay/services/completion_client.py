"""Client for the upstream chat completion API.

Sends the user's message as a single-turn conversation to an
OpenAI-compatible ``/chat/completions`` endpoint and extracts the text of
the first choice.  Each way the call can fail is raised as its own
:class:`~chat_relay.utils.error_handler.RelayError` subclass so the
handler can answer deterministically.
"""

from __future__ import annotations

import json

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config.llm_config import LlmConfig
from ..models.completion import CompletionPayload, CompletionResult
from ..utils.api_client import post_json
from ..utils.error_handler import (
    UpstreamError,
    UpstreamFormatError,
    UpstreamInvalidResponse,
    UpstreamUnreachable,
)


class CompletionClient:
    """Calls the completion API with the configured bearer credential.

    Parameters
    ----------
    llm_config: LlmConfig
        Endpoint, API key and timeout.  The config is read-only; one
        instance is shared by every request.
    client: httpx.AsyncClient, optional
        Client used for the call.  When omitted a client is opened per
        request.
    """

    def __init__(self, llm_config: LlmConfig, client: httpx.AsyncClient | None = None) -> None:
        self.llm_config = llm_config
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.llm_config.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, message: str, model: str) -> CompletionResult:
        """Return the trimmed reply for ``message``.

        Raises
        ------
        UpstreamUnreachable
            On a transport failure or timeout.
        UpstreamError
            If the API answers with a non-2xx status.
        UpstreamInvalidResponse
            If a 2xx body is not JSON.
        UpstreamFormatError
            If the JSON body has no non-empty ``choices`` array.
        """
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": message}],
        }
        logger.debug("Requesting completion: model={} chars={}", model, len(message))
        try:
            response = await post_json(
                self.llm_config.completions_url,
                payload,
                headers=self._headers(),
                timeout=self.llm_config.timeout,
                client=self._client,
            )
        except httpx.RequestError as exc:
            logger.error("Completion API request failed: {!r}", exc)
            raise UpstreamUnreachable(f"{type(exc).__name__}: {exc}") from exc

        text = response.text
        if not response.is_success:
            logger.error(
                "Completion API error: status={} body={}",
                response.status_code,
                text,
            )
            raise UpstreamError(response.status_code, text)

        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.error("Failed to parse completion response: {}", text)
            raise UpstreamInvalidResponse("Completion body is not JSON") from exc

        try:
            decoded = CompletionPayload.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected completion response shape: {}", data)
            raise UpstreamFormatError("Completion body has no usable choices") from exc

        reply = decoded.first_content.strip()
        logger.info("Completion received: model={} reply_chars={}", model, len(reply))
        return CompletionResult(reply=reply)
