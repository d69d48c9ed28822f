"""
Notes AI Proxy - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for every failure a request can hit.
Why:   Each exception maps to one HTTP status code, so services raise and the
       global handlers in main.py format the JSON error envelope.
How:   Every exception carries a user-facing message, a debug context dict
       (logged, never returned) and optionally the task name being processed.

Exception Hierarchy:
    NotesProxyError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   └── UnknownTaskError     → 400 Bad Request
    ├── ConfigurationError       → 500 (operator must set GROQ_API_KEY)
    ├── UpstreamError            → 500 (Groq failed, no retry)
    └── TaskExecutionError       → 500 (anything unexpected while executing)

Malformed model output is deliberately NOT in this hierarchy: the normalizers
degrade to a shorter or empty result and log a warning instead.
"""

from typing import Any, Dict, Iterable, Optional


class NotesProxyError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned as `error`)
        context:  Additional debug info (logged but NOT returned to client)
        task:     Task name of the request, echoed in the error envelope
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An error occurred processing your request",
        context: Optional[Dict[str, Any]] = None,
        task: Optional[str] = None,
    ):
        self.message = message
        self.context = context or {}
        self.task = task
        super().__init__(self.message)


class ValidationError(NotesProxyError):
    """
    Raised when client input fails validation.

    When:    Missing task/content, oversized content, malformed body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnknownTaskError(ValidationError):
    """Raised when the task name is outside the supported enumeration."""

    def __init__(self, task: Any, valid_tasks: Iterable[str]):
        valid = list(valid_tasks)
        super().__init__(
            message=f"Unknown task: {task}. Valid tasks are: {', '.join(valid)}",
            field="task",
            context={"valid_tasks": valid},
        )
        self.unknown_task = task


class ConfigurationError(NotesProxyError):
    """
    Raised when the upstream credential is absent or still the placeholder.

    HTTP:    500 Internal Server Error
    Recovery: none at request time, the operator has to set GROQ_API_KEY.
    """

    def __init__(
        self,
        message: str = "AI service not configured. Please set GROQ_API_KEY in environment variables.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamError(NotesProxyError):
    """
    Raised when the single Groq request fails.

    When:    Network error or timeout, non-2xx status (e.g. rejected key),
             or a 2xx body without choices[0].message.content.
    HTTP:    500 Internal Server Error
    Message: Groq's own `error.message` when it sent one.
    """

    def __init__(
        self,
        message: str = "AI service error",
        status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        task: Optional[str] = None,
    ):
        ctx = context or {}
        if status is not None:
            ctx["upstream_status"] = status
        super().__init__(message=message, context=ctx, task=task)
        self.status = status


class TaskExecutionError(NotesProxyError):
    """Wraps unexpected exceptions raised while executing a task."""

    def __init__(
        self,
        message: str = "An error occurred processing your request",
        context: Optional[Dict[str, Any]] = None,
        task: Optional[str] = None,
    ):
        super().__init__(message=message, context=context, task=task)
