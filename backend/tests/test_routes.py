"""
Notes AI Proxy - HTTP Endpoint Tests
====================================

What:  End-to-end tests through the FastAPI app with the fake Groq upstream.
Why:   The response bodies are consumed by an existing frontend, so status
       codes, messages and field names are asserted exactly.
"""

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings, get_settings
from app.services.task_executor import get_task_executor


def _no_key_settings() -> Settings:
    return Settings(groq_api_key="", log_level="WARNING")


class TestInfoAndHealth:
    """Tests for GET / and GET /api/health."""

    @pytest.mark.asyncio
    async def test_root_info(self, test_client):
        """Server info carries the banner, version and a UTC timestamp."""
        response = await test_client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "running"
        assert body["version"] == "1.0.0"
        assert body["message"] == "Shareable Notes AI Proxy Server ✅"
        assert body["timestamp"].endswith("Z")
        datetime.fromisoformat(body["timestamp"][:-1])

    @pytest.mark.asyncio
    async def test_health_with_key(self, test_client):
        """A configured key reports the service as ready."""
        response = await test_client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "apiKeyConfigured": True,
            "message": "AI service ready",
        }

    @pytest.mark.asyncio
    async def test_health_without_key(self, test_client):
        """A missing key is reported, still with status ok."""
        from app.main import app

        app.dependency_overrides[get_settings] = _no_key_settings
        response = await test_client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "apiKeyConfigured": False,
            "message": "API key not configured",
        }

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        """Client request IDs are echoed, otherwise one is generated."""
        response = await test_client.get("/", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

        generated = await test_client.get("/")
        assert len(generated.headers["X-Request-ID"]) == 8


class TestAITaskSuccess:
    """Tests for successful POST /api/ai calls."""

    @pytest.mark.asyncio
    async def test_summarize(self, test_client, upstream):
        """Summaries come back in the success envelope."""
        upstream.reply("A concise summary.")
        response = await test_client.post("/api/ai", json={"task": "summarize", "content": "Long note"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "task": "summarize", "data": "A concise summary."}
        assert upstream.call_count == 1

    @pytest.mark.asyncio
    async def test_tags(self, test_client, upstream):
        """Tags are normalized before being returned."""
        upstream.reply("alpha, beta ,gamma,,delta, epsilon, zeta")
        response = await test_client.post("/api/ai", json={"task": "tags", "content": "note"})
        assert response.status_code == 200
        assert response.json()["data"] == ["alpha", "beta", "gamma", "delta", "epsilon"]

    @pytest.mark.asyncio
    async def test_glossary(self, test_client, upstream):
        """Glossary entries serialize as term and definition objects."""
        upstream.reply('```json\n[{"term":"x","definition":"y"}]\n```')
        response = await test_client.post("/api/ai", json={"task": "glossary", "content": "note"})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "task": "glossary",
            "data": [{"term": "x", "definition": "y"}],
        }

    @pytest.mark.asyncio
    async def test_malformed_glossary_is_still_success(self, test_client, upstream):
        """A glossary fallback is a success with empty data."""
        upstream.reply("I could not find any terms.")
        response = await test_client.post("/api/ai", json={"task": "glossary", "content": "note"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "task": "glossary", "data": []}

    @pytest.mark.asyncio
    async def test_content_at_limit_is_accepted(self, test_client, upstream):
        """Exactly 50,000 characters is within the limit."""
        upstream.reply("ok")
        response = await test_client.post("/api/ai", json={"task": "grammar", "content": "a" * 50_000})
        assert response.status_code == 200


class TestAITaskRejections:
    """Tests for requests rejected before the upstream call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"content": "note"},
            {"task": "summarize"},
            {"task": "", "content": "note"},
            {"task": "summarize", "content": ""},
            {},
        ],
    )
    async def test_missing_fields(self, test_client, upstream, body):
        """Absent or empty task or content is a 400."""
        response = await test_client.post("/api/ai", json=body)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Missing required fields: task and content",
        }
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_content_too_large(self, test_client, upstream):
        """One character over the limit is a 400."""
        response = await test_client.post("/api/ai", json={"task": "summarize", "content": "a" * 50_001})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Content too large. Maximum 50,000 characters allowed.",
        }
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("task", ["translate", "SUMMARIZE", "grammar_errors"])
    async def test_unknown_task(self, test_client, upstream, task):
        """Names outside the four tasks are a 400."""
        response = await test_client.post("/api/ai", json={"task": task, "content": "note"})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": f"Unknown task: {task}. Valid tasks are: summarize, tags, grammar, glossary",
        }
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_no_key_fails_before_network(self, test_client, upstream):
        """A missing key is a 500 with no upstream call."""
        from app.main import app

        app.dependency_overrides[get_settings] = _no_key_settings
        response = await test_client.post("/api/ai", json={"task": "summarize", "content": "note"})
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "AI service not configured. Please set GROQ_API_KEY in environment variables.",
        }
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_placeholder_key_fails_before_network(self, test_client, upstream):
        """The .env.example placeholder is treated as a missing key."""
        from app.main import app

        app.dependency_overrides[get_settings] = lambda: Settings(groq_api_key="your_groq_api_key_here")
        response = await test_client.post("/api/ai", json={"task": "tags", "content": "note"})
        assert response.status_code == 500
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_body_not_json(self, test_client, upstream):
        """A non-JSON body gets the error envelope."""
        response = await test_client.post(
            "/api/ai", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_content_wrong_type(self, test_client, upstream):
        """A non-string content field is a 400."""
        response = await test_client.post("/api/ai", json={"task": "tags", "content": 12345})
        assert response.status_code == 400
        assert upstream.call_count == 0


class TestAITaskFailures:
    """Tests for upstream failures surfacing as 500s."""

    @pytest.mark.asyncio
    async def test_upstream_failure_echoes_task(self, test_client, upstream):
        """The upstream message and the task are echoed back."""
        upstream.fail(401, "Invalid API Key")
        response = await test_client.post("/api/ai", json={"task": "grammar", "content": "note"})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Invalid API Key", "task": "grammar"}
        assert upstream.call_count == 1

    @pytest.mark.asyncio
    async def test_malformed_upstream_payload(self, test_client, upstream):
        """A null completion becomes the generic AI service error."""
        upstream.reply(None)
        response = await test_client.post("/api/ai", json={"task": "summarize", "content": "note"})
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "AI service error", "task": "summarize"}


class TestFallbackHandlers:
    """Tests for 404 and unhandled-exception envelopes."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        """Unmatched paths get the 404 envelope."""
        response = await test_client.get("/api/notes")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Endpoint not found"}

    @pytest.mark.asyncio
    async def test_wrong_method(self, test_client):
        """A wrong method on a known path is reported as not found."""
        response = await test_client.get("/api/ai")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Endpoint not found"}

    @pytest.mark.asyncio
    async def test_unhandled_exception_is_generic_500(self, test_settings):
        """Unexpected exceptions hide their details behind a generic 500."""
        from app.main import app

        def broken_executor():
            raise RuntimeError("wiring failure")

        app.dependency_overrides[get_settings] = lambda: test_settings
        app.dependency_overrides[get_task_executor] = broken_executor
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.post("/api/ai", json={"task": "tags", "content": "note"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}
