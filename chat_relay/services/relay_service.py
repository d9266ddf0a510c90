"""Orchestration of the relay pipeline.

The RelayService asks the completion API for a reply and then persists
the user's message together with the reply.  The reply is returned only
once the transcript has been written; a failed insert therefore hides an
otherwise successful completion from the caller.
"""

from __future__ import annotations

from fastapi import Request
from loguru import logger

from ..config.llm_config import DEFAULT_MODEL, LlmConfig, get_llm_config
from ..config.store_config import StoreConfig, get_store_config
from ..models.chat_request import ChatRequest
from ..models.chat_response import ChatResponse
from ..utils.logger import mask_secret
from .completion_client import CompletionClient
from .transcript_writer import TranscriptWriter


class RelayService:
    """Runs completion and persistence in sequence.

    Both collaborators are passed in at construction so tests can
    substitute them.  The service holds no per-request state.
    """

    def __init__(
        self,
        completion_client: CompletionClient,
        transcript_writer: TranscriptWriter,
        default_model: str = DEFAULT_MODEL,
    ) -> None:
        self.completion_client = completion_client
        self.transcript_writer = transcript_writer
        self.default_model = default_model

    async def relay(self, chat_request: ChatRequest) -> ChatResponse:
        """Return the model's reply after persisting the transcript.

        Any :class:`~chat_relay.utils.error_handler.RelayError` raised by
        a collaborator propagates unchanged; nothing is written unless the
        completion succeeded.
        """
        logger.info(
            "Relaying chat message: user={} model={}",
            chat_request.user_id,
            chat_request.model,
        )
        completion = await self.completion_client.complete(
            chat_request.message, chat_request.model
        )
        await self.transcript_writer.write(chat_request, completion)
        logger.info("Transcript saved for user={}", chat_request.user_id)
        return ChatResponse(reply=completion.reply)


def build_relay_service(
    llm_config: LlmConfig | None = None,
    store_config: StoreConfig | None = None,
) -> RelayService:
    """Construct a RelayService from explicit or environment configuration.

    Missing credentials raise a ``ValidationError`` here, at startup.
    """
    llm_config = llm_config or get_llm_config()
    store_config = store_config or get_store_config()
    logger.info(
        "Relay configured: completions_url={} api_key={} store_url={} service_key={} table={}",
        llm_config.completions_url,
        mask_secret(llm_config.api_key),
        store_config.url,
        mask_secret(store_config.service_key),
        store_config.table,
    )
    return RelayService(
        completion_client=CompletionClient(llm_config),
        transcript_writer=TranscriptWriter(store_config),
        default_model=llm_config.model,
    )


def get_relay_service(request: Request) -> RelayService:
    """Dependency returning the service bound to the running application."""
    return request.app.state.relay_service
