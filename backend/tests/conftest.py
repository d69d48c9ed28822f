"""
Notes AI Proxy - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   The Groq API is replaced by an httpx.MockTransport so tests can script
       upstream replies and count how many upstream calls were made.

Fixtures:
    ├── upstream: scriptable fake Groq endpoint (records every request)
    ├── test_settings: Settings with a non-placeholder test key
    ├── groq_service / executor: real service objects on the fake transport
    └── test_client: HTTPX AsyncClient with dependencies overridden
"""

import os

# Set before any app import so the cached Settings never sees a real key
os.environ["GROQ_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

import json
from typing import Any, Callable, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.services.groq_service import GroqService
from app.services.task_executor import TaskExecutor, get_task_executor


def completion_body(content: Optional[str]) -> dict:
    """Minimal Groq chat-completion response carrying `content`."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "llama-3.1-8b-instant",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeUpstream:
    """
    Stand-in for the Groq endpoint.

    Usage:
        upstream.reply("alpha, beta")              # 200 with that completion
        upstream.fail(401, "Invalid API Key")      # OpenAI-style error body
        upstream.handler = lambda req: ...         # anything custom
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json=completion_body("ok"))
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_payload(self) -> Any:
        return json.loads(self.requests[-1].content)

    def reply(self, content: Optional[str]) -> None:
        self.handler = lambda request: httpx.Response(200, json=completion_body(content))

    def fail(self, status: int, message: Optional[str] = None) -> None:
        body = {"error": {"message": message, "type": "invalid_request_error"}} if message else {}
        self.handler = lambda request: httpx.Response(status, json=body)

    def raise_error(self, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = handler

    def transport(self) -> httpx.MockTransport:
        def dispatch(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.handler(request)

        return httpx.MockTransport(dispatch)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(groq_api_key="test-key-not-real", log_level="WARNING")


@pytest.fixture
def groq_service(test_settings, upstream) -> GroqService:
    return GroqService(test_settings, transport=upstream.transport())


@pytest.fixture
def executor(groq_service) -> TaskExecutor:
    return TaskExecutor(groq_service)


@pytest_asyncio.fixture
async def test_client(test_settings, executor):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Tests can replace `app.dependency_overrides[get_settings]` to simulate a
    missing key; the override table is cleared afterwards.
    """
    from app.main import app

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_task_executor] = lambda: executor
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
