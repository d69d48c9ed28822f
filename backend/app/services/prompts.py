"""
Notes AI Proxy - Prompt Templates
=================================

What:  The fixed system prompt for each task kind.
Why:   Templates are static configuration: one per task, never built at
       request time, so selecting one is a pure lookup.
How:   `get_prompt_template()` maps a task name to a frozen PromptTemplate and
       raises UnknownTaskError for anything outside TaskKind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from app.exceptions import UnknownTaskError
from app.schemas.ai import TaskKind


class OutputShape(str, Enum):
    """Shape the normalizer must produce from the completion."""

    PLAIN_TEXT = "plain_text"
    TAG_LIST = "tag_list"
    GLOSSARY_ENTRIES = "glossary_entries"
    ERROR_LIST = "error_list"


@dataclass(frozen=True)
class PromptTemplate:
    instruction: str
    output_shape: OutputShape


SUMMARIZE_TEMPLATE = PromptTemplate(
    instruction=(
        "You are a helpful assistant that creates concise summaries. \n"
        "Summarize the given text in 1-2 sentences. Be clear and capture the main points."
    ),
    output_shape=OutputShape.PLAIN_TEXT,
)

TAGS_TEMPLATE = PromptTemplate(
    instruction=(
        "You are a helpful assistant that suggests relevant tags for notes.\n"
        "Analyze the content and suggest 5 relevant, concise tags (single words or short phrases).\n"
        "Return ONLY a comma-separated list of tags, nothing else.\n"
        "Example output: productivity, meeting, project, deadline, team"
    ),
    output_shape=OutputShape.TAG_LIST,
)

GRAMMAR_TEMPLATE = PromptTemplate(
    instruction=(
        "You are a grammar and spelling expert.\n"
        "Fix any grammar, spelling, or punctuation errors in the given text.\n"
        "Preserve the original meaning and style as much as possible.\n"
        "If the text is already correct, return it unchanged.\n"
        "Return ONLY the corrected text, no explanations."
    ),
    output_shape=OutputShape.PLAIN_TEXT,
)

GLOSSARY_TEMPLATE = PromptTemplate(
    instruction=(
        "You are a helpful assistant that identifies key technical or important terms in text.\n"
        "Analyze the content and identify up to 5 key terms that would benefit from definitions.\n"
        "Return your response as a valid JSON array with this exact format:\n"
        '[{"term": "example term", "definition": "brief definition"}]\n'
        "\n"
        "Rules:\n"
        "- Return ONLY valid JSON, nothing else\n"
        "- Include 3-5 terms maximum\n"
        "- Keep definitions concise (under 20 words)\n"
        "- Focus on technical, domain-specific, or uncommon terms"
    ),
    output_shape=OutputShape.GLOSSARY_ENTRIES,
)

# Not reachable through /api/ai; used by TaskExecutor.find_grammar_errors().
GRAMMAR_ERRORS_TEMPLATE = PromptTemplate(
    instruction=(
        "You are a grammar expert. Analyze the text and find grammar/spelling errors.\n"
        'Return a JSON array of error objects. Each object must have "error" (the mistake) '
        'and "correction" (the fix).\n'
        'Example: [{"error": "your wrong", "correction": "you\'re wrong"}, '
        '{"error": "its good", "correction": "it\'s good"}]\n'
        "If no errors found, return an empty array: []\n"
        "Return ONLY valid JSON, nothing else."
    ),
    output_shape=OutputShape.ERROR_LIST,
)

PROMPT_TEMPLATES: Dict[TaskKind, PromptTemplate] = {
    TaskKind.SUMMARIZE: SUMMARIZE_TEMPLATE,
    TaskKind.TAGS: TAGS_TEMPLATE,
    TaskKind.GRAMMAR: GRAMMAR_TEMPLATE,
    TaskKind.GLOSSARY: GLOSSARY_TEMPLATE,
}

VALID_TASKS = tuple(kind.value for kind in TaskKind)


def parse_task_kind(task: Union[str, TaskKind]) -> TaskKind:
    """Resolve a task name, raising UnknownTaskError if it is not supported."""
    try:
        return TaskKind(task)
    except ValueError:
        raise UnknownTaskError(task, VALID_TASKS) from None


def get_prompt_template(task: Union[str, TaskKind]) -> PromptTemplate:
    return PROMPT_TEMPLATES[parse_task_kind(task)]
