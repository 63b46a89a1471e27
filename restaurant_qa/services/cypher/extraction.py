"""Pull a runnable Cypher statement out of free-form model output.

Used once, after the raw generated text failed to execute. Rules are tried in
order and the first one producing a non-empty candidate wins; if none does, the
original text is returned unchanged.
"""

import re
from collections.abc import Callable

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:[\w-]+[ \t]*\n)?(.*?)```", re.DOTALL)
_INLINE_SPAN = re.compile(r"`([^`\n]*)`")
_KEYWORD_SPAN = re.compile(
    r"\b(?:MATCH|RETURN|CREATE|MERGE|WITH|CALL|UNWIND)\b[\s\S]+?;",
    re.IGNORECASE,
)


def _from_fenced_block(text: str) -> str:
    match = _FENCED_BLOCK.search(text)
    return match.group(1).strip() if match else ""


def _from_inline_span(text: str) -> str:
    for match in _INLINE_SPAN.finditer(text):
        candidate = match.group(1).strip()
        if candidate:
            return candidate
    return ""


def _from_keyword_span(text: str) -> str:
    match = _KEYWORD_SPAN.search(text)
    return match.group(0).strip() if match else ""


EXTRACTION_RULES: list[tuple[str, Callable[[str], str]]] = [
    ("fenced_block", _from_fenced_block),
    ("inline_span", _from_inline_span),
    ("keyword_span", _from_keyword_span),
]


def extract_candidate_query(text: str) -> str:
    """Return the first non-empty candidate found by ``EXTRACTION_RULES``, else ``text``."""
    for _, rule in EXTRACTION_RULES:
        candidate = rule(text)
        if candidate:
            return candidate
    return text
