"""
Notes AI Proxy - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Middleware, exception handlers, routes and lifecycle live in one place.
How:   create_app() returns a configured FastAPI instance; `app` is the
       module-level instance uvicorn serves (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  GET /   │ │ GET /api/health │ │ POST /api/ai │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers (uniform {success:false,...}):  │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Config→500 │ Upstream→500    │  │
    │  │ unmatched→404  │ anything else→500            │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import NotesProxyError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import ai, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Third-party loggers that log every request are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, report configuration, print the banner.
    Shutdown: log it. No resources are held between requests.
    """
    setup_logging()
    logger.info("=" * 50)
    logger.info("Shareable Notes AI Proxy Server v%s", __version__)
    logger.info("=" * 50)

    # Missing key is not fatal: /api/health reports it and /api/ai answers 500
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server running on: http://%s:%d", settings.host, settings.port)
    logger.info(
        "AI Service: %s (model=%s)",
        "Configured" if settings.api_key_configured else "Not configured",
        settings.groq_model,
    )
    logger.info("=" * 50)

    yield

    logger.info("Notes AI Proxy shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(message: str, task=None) -> dict:
    body = {"success": False, "error": message}
    if task is not None:
        body["task"] = task
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the {success: false, error[, task]} envelope.

    Handler hierarchy:
        NotesProxyError (and subclasses) → exc.status_code
        RequestValidationError           → 400 (body not JSON / wrong types)
        HTTPException 404/405            → 404 Endpoint not found
        Exception (fallback)             → 500 Internal server error
    """

    @app.exception_handler(NotesProxyError)
    async def handle_app_error(request: Request, exc: NotesProxyError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] AI Error: %s | Task: %s | Context: %s",
                rid, exc.message, exc.task, exc.context,
            )
        else:
            logger.warning("[%s] Rejected request: %s", rid, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.task),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request body: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_body("Invalid request body. Expected JSON with task and content strings."),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=error_body("Endpoint not found"))
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log only, never to the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Server Error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=error_body("Internal server error"))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Notes AI Proxy",
        description=(
            "Proxy between the Shareable Notes frontend and the Groq API. "
            "Summarizes notes, suggests tags, fixes grammar and builds glossaries."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(ai.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
