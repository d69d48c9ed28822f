"""
Notes AI Proxy - Request ID Middleware
======================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
Why:   Ties together the access log line, the task log lines and any upstream
       error logged while serving the same request.
How:   Reuses a client-sent X-Request-ID, otherwise generates a short UUID.
       The ID lives in a ContextVar so log calls anywhere in the request can
       read it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local; concurrent requests share one thread.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var and request.state.request_id for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
