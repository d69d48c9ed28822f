"""
Notes AI Proxy - Task Executor
==============================

What:  Runs one note task: pick the prompt, call the model once, normalize.
Why:   Keeps the route handler thin and makes the task logic testable with a
       fake LLMService.
How:   TASK_HANDLERS maps every TaskKind to a (template, normalizer) pair.
       The executor holds no per-request state.

Error Handling:
    NotesProxyError subclasses (UpstreamError, UnknownTaskError, ...)
    propagate with the task name attached. Anything else is wrapped in
    TaskExecutionError so the client always gets the JSON error envelope.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Union

from app.config import get_settings
from app.exceptions import NotesProxyError, TaskExecutionError
from app.schemas.ai import GlossaryEntry, GrammarCorrection, TaskKind, TaskResult
from app.services.groq_service import GroqService
from app.services.llm_base import LLMService
from app.services.normalizers import (
    normalize_glossary,
    normalize_grammar_errors,
    normalize_tags,
    normalize_text,
)
from app.services.prompts import (
    GLOSSARY_TEMPLATE,
    GRAMMAR_ERRORS_TEMPLATE,
    GRAMMAR_TEMPLATE,
    SUMMARIZE_TEMPLATE,
    TAGS_TEMPLATE,
    PromptTemplate,
    parse_task_kind,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskHandler:
    template: PromptTemplate
    normalize: Callable[[str], TaskResult]


TASK_HANDLERS: Dict[TaskKind, TaskHandler] = {
    TaskKind.SUMMARIZE: TaskHandler(SUMMARIZE_TEMPLATE, normalize_text),
    TaskKind.TAGS: TaskHandler(TAGS_TEMPLATE, normalize_tags),
    TaskKind.GRAMMAR: TaskHandler(GRAMMAR_TEMPLATE, normalize_text),
    TaskKind.GLOSSARY: TaskHandler(GLOSSARY_TEMPLATE, normalize_glossary),
}

GRAMMAR_ERRORS_HANDLER = TaskHandler(GRAMMAR_ERRORS_TEMPLATE, normalize_grammar_errors)


class TaskExecutor:
    """
    Executes note tasks against an LLMService.

    Responsibilities:
        - execute(): routed entry point used by POST /api/ai
        - summarize_text() / suggest_tags() / check_grammar() /
          generate_glossary(): typed per-task helpers
        - find_grammar_errors(): reserved task, not routed
    """

    def __init__(self, llm_service: LLMService) -> None:
        self.llm_service = llm_service

    async def execute(self, task: Union[str, TaskKind], content: str) -> TaskResult:
        """
        Run a routed task.

        Raises:
            UnknownTaskError: task is not a TaskKind (no upstream call is made)
            UpstreamError: the model call failed
            TaskExecutionError: anything unexpected
        """
        kind = parse_task_kind(task)
        return await self._run(kind.value, TASK_HANDLERS[kind], content)

    async def summarize_text(self, content: str) -> str:
        return await self.execute(TaskKind.SUMMARIZE, content)

    async def suggest_tags(self, content: str) -> List[str]:
        return await self.execute(TaskKind.TAGS, content)

    async def check_grammar(self, content: str) -> str:
        return await self.execute(TaskKind.GRAMMAR, content)

    async def generate_glossary(self, content: str) -> List[GlossaryEntry]:
        return await self.execute(TaskKind.GLOSSARY, content)

    async def find_grammar_errors(self, content: str) -> List[GrammarCorrection]:
        """List individual mistakes with corrections. Not exposed over HTTP."""
        return await self._run("grammar_errors", GRAMMAR_ERRORS_HANDLER, content)

    async def _run(self, task_name: str, handler: TaskHandler, content: str) -> TaskResult:
        try:
            raw = await self.llm_service.complete(handler.template.instruction, content)
            return handler.normalize(raw)
        except NotesProxyError as e:
            e.task = task_name
            raise
        except Exception as e:
            logger.error("Unexpected error in task %s: %s", task_name, e, exc_info=True)
            raise TaskExecutionError(
                message=str(e) or "An error occurred processing your request",
                context={"original_error": type(e).__name__},
                task=task_name,
            ) from e


@lru_cache(maxsize=1)
def get_task_executor() -> TaskExecutor:
    """FastAPI dependency: one executor wired to the Groq service."""
    return TaskExecutor(GroqService(get_settings()))
