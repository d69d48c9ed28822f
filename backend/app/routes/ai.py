"""
Notes AI Proxy - AI Task Route
==============================

What:  Handles POST /api/ai, the single entry point for note tasks.
Why:   The frontend sends {task, content}; this route checks the request,
       runs the task and wraps the result.
How:   Preconditions are checked here in a fixed order, then TaskExecutor
       does the work. Errors are raised, never returned, so the global
       handlers in main.py produce the error envelope.

Check order:
    1. task and content present      → 400 ValidationError
    2. GROQ_API_KEY configured       → 500 ConfigurationError
    3. content within size ceiling   → 400 ValidationError
    4. task is a known TaskKind      → 400 UnknownTaskError
    Only then is the upstream API called.
"""

import logging

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.exceptions import ConfigurationError, ValidationError
from app.schemas.ai import AITaskRequest, AITaskResponse, ErrorResponse
from app.services.prompts import parse_task_kind
from app.services.task_executor import TaskExecutor, get_task_executor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["AI"])


@router.post(
    "/ai",
    response_model=AITaskResponse,
    responses={
        200: {"description": "Task completed", "model": AITaskResponse},
        400: {"description": "Missing fields, content too large, or unknown task", "model": ErrorResponse},
        500: {"description": "AI service not configured or upstream failure", "model": ErrorResponse},
    },
    summary="Run an AI task on note content",
    description=(
        "Runs one of summarize, tags, grammar or glossary on the given note text "
        "(max 50,000 characters) using the Groq chat-completions API."
    ),
)
async def run_task(
    request: AITaskRequest,
    settings: Settings = Depends(get_settings),
    executor: TaskExecutor = Depends(get_task_executor),
) -> AITaskResponse:
    task, content = request.task, request.content

    if not task or not content:
        raise ValidationError(message="Missing required fields: task and content")

    if not settings.api_key_configured:
        raise ConfigurationError()

    if len(content) > settings.max_content_length:
        raise ValidationError(
            message=f"Content too large. Maximum {settings.max_content_length:,} characters allowed.",
            field="content",
            context={"content_length": len(content)},
        )

    parse_task_kind(task)

    logger.info("AI Request - Task: %s, Content length: %d", task, len(content))

    data = await executor.execute(task, content)

    logger.info("AI Response - Task: %s, Success: true", task)

    return AITaskResponse(success=True, task=task, data=data)
