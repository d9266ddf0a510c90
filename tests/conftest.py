from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

# chat_relay.main builds an application at import time from the environment.
os.environ.setdefault("OPENAI_API_KEY", "sk-env-key")
os.environ.setdefault("SUPABASE_URL", "https://env-project.supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "env-service-role-key")

from chat_relay.config.llm_config import LlmConfig
from chat_relay.config.store_config import StoreConfig
from chat_relay.main import create_app
from chat_relay.services.completion_client import CompletionClient
from chat_relay.services.relay_service import RelayService
from chat_relay.services.transcript_writer import TranscriptWriter


class FakeEndpoint:
    """Stand-in for a remote HTTP endpoint, used as an httpx.MockTransport handler.

    Every request is recorded.  The endpoint answers with ``status`` and
    either a JSON or a raw text body, or raises ``error`` to simulate a
    transport failure.
    """

    def __init__(
        self,
        status: int = 200,
        json_body: Any = None,
        text: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status = status
        self.json_body = json_body
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        if self.json_body is not None:
            return httpx.Response(self.status, json=self.json_body)
        return httpx.Response(self.status)

    @property
    def bodies(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def completion_body(content: Any) -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


@pytest.fixture
def llm_config() -> LlmConfig:
    return LlmConfig(api_key="sk-test-key", base_url="https://llm.test/v1", timeout=5)


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(
        url="https://project.supabase.test",
        service_key="service-role-key",
        table="messages",
        timeout=5,
    )


@pytest.fixture
def completion_api() -> FakeEndpoint:
    return FakeEndpoint(200, json_body=completion_body("  Hi there  "))


@pytest.fixture
def store_api() -> FakeEndpoint:
    return FakeEndpoint(201)


@pytest.fixture
def relay_service(
    llm_config: LlmConfig,
    store_config: StoreConfig,
    completion_api: FakeEndpoint,
    store_api: FakeEndpoint,
) -> RelayService:
    return RelayService(
        completion_client=CompletionClient(llm_config, client=completion_api.client()),
        transcript_writer=TranscriptWriter(store_config, client=store_api.client()),
        default_model=llm_config.model,
    )


@pytest.fixture
def client(relay_service: RelayService) -> Iterator[TestClient]:
    with TestClient(create_app(relay_service)) as test_client:
        yield test_client
