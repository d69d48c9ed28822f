"""
Notes AI Proxy - Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract with the notes frontend.
Why:   Automatic serialization and OpenAPI docs, while keeping the response
       bodies byte-compatible with the existing frontend (camelCase
       `apiKeyConfigured`, `success` flags).
How:   Request fields are optional on purpose: a missing `task` or `content`
       must produce the service's own 400 message, not FastAPI's 422.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class TaskKind(str, Enum):
    """The note-processing operations routed by POST /api/ai."""

    SUMMARIZE = "summarize"
    TAGS = "tags"
    GRAMMAR = "grammar"
    GLOSSARY = "glossary"


# ══════════════════════════════════════════════════════════════════════════
# Task Results
# ══════════════════════════════════════════════════════════════════════════


class GlossaryEntry(BaseModel):
    """One key term and its short definition."""

    term: str
    definition: str


class GrammarCorrection(BaseModel):
    """A single mistake and its fix, produced by the grammar-error task."""

    error: str
    correction: str


# Plain text for summarize/grammar, a tag list, glossary entries, or
# grammar corrections for the reserved error-list task.
TaskResult = Union[str, List[str], List[GlossaryEntry], List[GrammarCorrection]]


# ══════════════════════════════════════════════════════════════════════════
# Requests
# ══════════════════════════════════════════════════════════════════════════


class AITaskRequest(BaseModel):
    """
    What:  Body of POST /api/ai.
    Why optional fields: presence and size are checked by the route so the
           error envelope and messages stay under our control.
    """

    task: Optional[str] = Field(
        default=None,
        description="One of: summarize, tags, grammar, glossary",
    )
    content: Optional[str] = Field(
        default=None,
        description="Note text to process (max 50,000 characters)",
    )


# ══════════════════════════════════════════════════════════════════════════
# Responses
# ══════════════════════════════════════════════════════════════════════════


class AITaskResponse(BaseModel):
    """Successful task result wrapper."""

    success: bool = True
    task: str
    data: TaskResult


class ErrorResponse(BaseModel):
    """
    What:  Uniform error envelope for every failure.
    Fields:
        success: Always false
        error: Human-readable description
        task: Echo of the request's task, present on task execution failures
    """

    success: bool = False
    error: str
    task: Optional[str] = None


class HealthResponse(BaseModel):
    """Returned by GET /api/health."""

    status: str = Field(description="Always 'ok' while the process is serving")
    api_key_configured: bool = Field(alias="apiKeyConfigured")
    message: str

    model_config = {"populate_by_name": True}


class ServerInfoResponse(BaseModel):
    """Returned by GET /."""

    message: str
    version: str
    status: str
    timestamp: str = Field(description="Server time, ISO 8601 UTC")
