"""Persistence of chat transcripts.

After a completion succeeds the user's message and the bot's reply are
inserted into the message table as one batch through Supabase's
PostgREST interface.  PostgREST inserts an array body in a single
statement, so either both rows are stored or neither is.
"""

from __future__ import annotations

import httpx
from loguru import logger

from ..config.store_config import StoreConfig
from ..models.chat_request import ChatRequest
from ..models.completion import CompletionResult
from ..models.enums import MessageRole
from ..models.message_record import MessageRecord
from ..utils.api_client import post_json
from ..utils.error_handler import PersistenceError


def build_records(chat_request: ChatRequest, completion: CompletionResult) -> list[MessageRecord]:
    """Return the user record followed by the bot record."""
    return [
        MessageRecord(
            role=MessageRole.USER,
            message=chat_request.message,
            model=chat_request.model,
            user_id=chat_request.user_id,
        ),
        MessageRecord(
            role=MessageRole.BOT,
            message=completion.reply,
            model=chat_request.model,
            user_id=chat_request.user_id,
        ),
    ]


class TranscriptWriter:
    """Writes message records to the configured table."""

    def __init__(self, store_config: StoreConfig, client: httpx.AsyncClient | None = None) -> None:
        self.store_config = store_config
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.store_config.service_key,
            "Authorization": f"Bearer {self.store_config.service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    async def write(self, chat_request: ChatRequest, completion: CompletionResult) -> None:
        """Insert the transcript pair.

        Raises
        ------
        PersistenceError
            If the store cannot be reached, times out or rejects the insert.
        """
        records = build_records(chat_request, completion)
        rows = [record.model_dump(mode="json") for record in records]
        logger.debug(
            "Saving transcript: table={} user={} rows={}",
            self.store_config.table,
            chat_request.user_id,
            len(rows),
        )
        try:
            response = await post_json(
                self.store_config.insert_url,
                rows,
                headers=self._headers(),
                timeout=self.store_config.timeout,
                client=self._client,
            )
        except httpx.RequestError as exc:
            logger.error("Store insert request failed: {!r}", exc)
            raise PersistenceError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            logger.error(
                "Store insert error: status={} body={}",
                response.status_code,
                response.text,
            )
            raise PersistenceError(f"Store returned HTTP {response.status_code}")
