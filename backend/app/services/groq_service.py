"""
Notes AI Proxy - Groq Completion Service
========================================

What:  LLMService implementation for Groq's OpenAI-compatible chat
       completions endpoint.
Why:   The only outbound call the proxy makes. Every task goes through here.
How:   One httpx POST per call with the task's system prompt and the note as
       the user message. The first choice's message content is returned.

Failure handling:
    There is no retry and no circuit breaker. Any failure (transport error,
    timeout, non-2xx status, body without choices[0].message.content) is
    turned into UpstreamError immediately. When Groq returns an error body,
    its `error.message` becomes the error shown to the client.
"""

import logging
import time
import uuid
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.exceptions import UpstreamError
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_ERROR = "AI service error"
ERROR_BODY_LOG_LIMIT = 2000


def _upstream_error_message(response: httpx.Response) -> Optional[str]:
    """Pull `error.message` out of an OpenAI-style error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def _extract_content(body: Any) -> str:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise ValueError("response did not contain choices[0].message.content") from None
    if not isinstance(content, str):
        raise ValueError("choices[0].message.content is not a string")
    return content


class GroqService(LLMService):
    """
    Groq chat-completions client.

    Args:
        settings:  Source of credential, endpoint, model and sampling values.
        transport: Optional httpx transport; tests pass an httpx.MockTransport.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def is_configured(self) -> bool:
        return self.settings.api_key_configured

    def build_payload(self, instruction: str, content: str) -> Dict[str, Any]:
        return {
            "model": self.settings.groq_model,
            "messages": [
                {"role": "system", "content": instruction},
                {"role": "user", "content": content},
            ],
            "temperature": self.settings.llm_temperature,
            "max_tokens": self.settings.llm_max_tokens,
            "top_p": self.settings.llm_top_p,
            "stream": False,
        }

    async def complete(self, instruction: str, content: str) -> str:
        call_id = str(uuid.uuid4())[:8]
        headers = {
            "Authorization": f"Bearer {self.settings.groq_api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(instruction, content)
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.upstream_timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    self.settings.groq_api_url, json=payload, headers=headers
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "[%s] Groq API Error: status=%d body=%s",
                call_id,
                e.response.status_code,
                e.response.text[:ERROR_BODY_LOG_LIMIT],
            )
            raise UpstreamError(
                message=_upstream_error_message(e.response) or DEFAULT_UPSTREAM_ERROR,
                status=e.response.status_code,
                context={"call_id": call_id},
            ) from e
        except httpx.HTTPError as e:
            logger.error("[%s] Groq API Error: %s: %s", call_id, type(e).__name__, e)
            raise UpstreamError(
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e
        except ValueError as e:
            logger.error("[%s] Groq API Error: response body is not JSON", call_id)
            raise UpstreamError(context={"call_id": call_id}) from e

        try:
            completion = _extract_content(body)
        except ValueError as e:
            logger.error("[%s] Groq API Error: %s", call_id, e)
            raise UpstreamError(context={"call_id": call_id, "reason": str(e)}) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "[%s] Groq completion model=%s in %.0fms, %d chars",
            call_id,
            self.settings.groq_model,
            duration_ms,
            len(completion),
        )
        return completion
