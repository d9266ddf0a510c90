from __future__ import annotations

import asyncio

import httpx
import pytest

from chat_relay.config.llm_config import LlmConfig
from chat_relay.services.completion_client import CompletionClient
from chat_relay.utils.error_handler import (
    UpstreamError,
    UpstreamFormatError,
    UpstreamInvalidResponse,
    UpstreamUnreachable,
)
from conftest import FakeEndpoint, completion_body


def complete(llm_config: LlmConfig, endpoint: FakeEndpoint, message: str = "Hi", model: str = "gpt-4o"):
    client = CompletionClient(llm_config, client=endpoint.client())
    return asyncio.run(client.complete(message, model))


def test_reply_is_first_choice_trimmed(llm_config: LlmConfig) -> None:
    body = completion_body("  first  ")
    body["choices"].append({"message": {"content": "second"}})
    endpoint = FakeEndpoint(200, json_body=body)

    result = complete(llm_config, endpoint)

    assert result.reply == "first"


def test_request_carries_bearer_credential_and_single_user_turn(llm_config: LlmConfig) -> None:
    endpoint = FakeEndpoint(200, json_body=completion_body("ok"))

    complete(llm_config, endpoint, message="What is 2+2?", model="gpt-4o")

    request = endpoint.requests[0]
    assert request.method == "POST"
    assert str(request.url) == llm_config.completions_url
    assert request.headers["authorization"] == "Bearer sk-test-key"
    assert endpoint.bodies == [
        {"model": "gpt-4o", "messages": [{"role": "user", "content": "What is 2+2?"}]}
    ]


def test_null_content_yields_empty_reply(llm_config: LlmConfig) -> None:
    endpoint = FakeEndpoint(200, json_body=completion_body(None))

    assert complete(llm_config, endpoint).reply == ""


@pytest.mark.parametrize(
    "error",
    [httpx.ConnectError("refused"), httpx.ReadTimeout("timed out"), httpx.RemoteProtocolError("eof")],
)
def test_transport_failures_raise_unreachable(llm_config: LlmConfig, error: Exception) -> None:
    with pytest.raises(UpstreamUnreachable):
        complete(llm_config, FakeEndpoint(error=error))


def test_error_status_keeps_upstream_detail(llm_config: LlmConfig) -> None:
    endpoint = FakeEndpoint(401, json_body={"error": {"message": "Incorrect API key"}})

    with pytest.raises(UpstreamError) as exc_info:
        complete(llm_config, endpoint)

    assert exc_info.value.upstream_status == 401
    assert "Incorrect API key" in exc_info.value.upstream_body
    assert exc_info.value.public_message == "Completion API error"


def test_error_status_with_non_json_body_is_upstream_error(llm_config: LlmConfig) -> None:
    with pytest.raises(UpstreamError):
        complete(llm_config, FakeEndpoint(502, text="Bad Gateway"))


def test_non_json_success_body_raises_invalid_response(llm_config: LlmConfig) -> None:
    with pytest.raises(UpstreamInvalidResponse):
        complete(llm_config, FakeEndpoint(200, text="definitely not json"))


@pytest.mark.parametrize(
    "body",
    [
        {"id": "chatcmpl-1"},
        {"choices": []},
        {"choices": [{"index": 0}]},
        {"choices": [{"message": "text"}]},
        ["choices"],
    ],
)
def test_missing_choices_raise_format_error(llm_config: LlmConfig, body) -> None:
    with pytest.raises(UpstreamFormatError):
        complete(llm_config, FakeEndpoint(200, json_body=body))


def test_trailing_slash_in_base_url_is_ignored() -> None:
    config = LlmConfig(api_key="k", base_url="https://proxy.test/openai/v1/")

    assert config.completions_url == "https://proxy.test/openai/v1/chat/completions"
