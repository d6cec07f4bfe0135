"""
Pytest configuration and shared fixtures.

Upstream services are faked with httpx.MockTransport: every fixture here
returns a transport plus the list of requests it received, so tests can
assert both on the response handling and on what was sent.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from proposal_digest.config import LLMConfig, Settings
from proposal_digest.llm_client import LLMClient

TEST_LLM_BASE_URL = "https://llm.test/v1"


def chat_completion(content: str | None, model: str = "gpt-4o-mini") -> dict[str, Any]:
    """Build a minimal chat completions response body."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1_700_000_000,
        "model": model,
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
        "usage": {"prompt_tokens": 120, "completion_tokens": 80, "total_tokens": 200},
    }


class RecordingTransport:
    """MockTransport wrapper that records every request it serves."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def last_json(self) -> Any:
        """Decoded JSON body of the last request."""
        return json.loads(self.requests[-1].content)


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    """Factory for RecordingTransport instances."""
    return RecordingTransport


@pytest.fixture
def llm_config() -> LLMConfig:
    """Backend configuration pointing at a fake endpoint."""
    return LLMConfig(api_key="test-key", base_url=TEST_LLM_BASE_URL, timeout=5.0)


@pytest.fixture
def make_llm_client(llm_config) -> Callable[[RecordingTransport], LLMClient]:
    """Build an LLMClient whose HTTP traffic goes to a RecordingTransport."""

    def _make(recorder: RecordingTransport) -> LLMClient:
        http_client = httpx.AsyncClient(transport=recorder.transport)
        return LLMClient(llm_config, http_client=http_client)

    return _make


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the process environment and .env files."""
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        openai_base_url=TEST_LLM_BASE_URL,
        request_timeout_seconds=5.0,
    )


@pytest.fixture(name="chat_completion")
def chat_completion_fixture() -> Callable[..., dict[str, Any]]:
    """Builder for chat completions response bodies."""
    return chat_completion
