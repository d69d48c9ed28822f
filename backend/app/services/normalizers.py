"""
Notes AI Proxy - Completion Normalizers
=======================================

What:  Turn the model's free-text completion into each task's result shape.
Why:   The model is not a reliable source of structured data: it wraps JSON in
       markdown fences, adds prose, or drops fields. Callers must still get a
       well-typed result.
How:   Each normalizer is a pure function of the raw completion. Structured
       outputs are parsed into plain Python objects first and validated
       explicitly before the typed result is built.

Fallback policy:
    summarize / grammar  → returned unchanged
    tags                 → whatever survives splitting, at most MAX_TAGS
    glossary             → [] unless EVERY element is a valid entry
    grammar errors       → invalid elements dropped, [] if not a JSON array

A fallback is logged at WARNING and never raised.
"""

import json
import logging
import re
from typing import Any, List, Optional

from app.schemas.ai import GlossaryEntry, GrammarCorrection

logger = logging.getLogger(__name__)

MAX_TAGS = 5
RAW_LOG_LIMIT = 500

_JSON_FENCE_RE = re.compile(r"```json\n?")
_FENCE_RE = re.compile(r"```\n?")


def _clip(text: str, limit: int = RAW_LOG_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def strip_code_fences(raw: str) -> str:
    """Remove ```json / ``` markers anywhere in the text and trim it."""
    cleaned = _JSON_FENCE_RE.sub("", raw)
    cleaned = _FENCE_RE.sub("", cleaned)
    return cleaned.strip()


def _load_json(raw: str) -> Optional[Any]:
    try:
        return json.loads(strip_code_fences(raw))
    except (ValueError, RecursionError):
        return None


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def normalize_text(raw: str) -> str:
    return raw


def normalize_tags(raw: str) -> List[str]:
    """
    Split a comma-separated completion into at most MAX_TAGS tags.

    Order is preserved, whitespace trimmed, empty entries dropped. Fewer than
    MAX_TAGS tags are returned as-is.
    """
    tags = [tag.strip() for tag in raw.split(",")]
    tags = [tag for tag in tags if tag]
    if len(tags) < MAX_TAGS:
        logger.debug("Tag completion produced %d tags", len(tags))
    return tags[:MAX_TAGS]


def normalize_glossary(raw: str) -> List[GlossaryEntry]:
    """
    Parse a JSON array of {term, definition} objects.

    All-or-nothing: a single malformed element discards the whole completion.
    Keys other than term/definition are not carried into the result.
    """
    parsed = _load_json(raw)
    if not isinstance(parsed, list):
        logger.warning("Failed to parse glossary, returning []: %r", _clip(raw))
        return []

    if not all(
        isinstance(item, dict)
        and _non_empty_str(item.get("term"))
        and _non_empty_str(item.get("definition"))
        for item in parsed
    ):
        logger.warning("Invalid glossary format, returning []: %r", _clip(raw))
        return []

    return [GlossaryEntry(term=item["term"], definition=item["definition"]) for item in parsed]


def normalize_grammar_errors(raw: str) -> List[GrammarCorrection]:
    """Parse a JSON array of {error, correction} objects, keeping valid ones."""
    parsed = _load_json(raw)
    if not isinstance(parsed, list):
        logger.warning("Failed to parse grammar errors, returning []: %r", _clip(raw))
        return []

    corrections = [
        GrammarCorrection(error=item["error"], correction=item["correction"])
        for item in parsed
        if isinstance(item, dict)
        and _non_empty_str(item.get("error"))
        and _non_empty_str(item.get("correction"))
    ]
    dropped = len(parsed) - len(corrections)
    if dropped:
        logger.warning("Dropped %d malformed grammar error entries", dropped)
    return corrections
