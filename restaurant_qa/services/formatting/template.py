"""Answer template rendering.

A template is a header and a body separated by the first blank line. The body
is rendered once per result row, replacing ``{field}`` placeholders with the
row's values, and the renderings are joined with blank lines.
"""

import re
from typing import Any

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")
_SECTION_BREAK = "\n\n"


def stringify_value(value: Any) -> str:
    """Render a result value as display text.

    Missing values become "", lists are comma-joined, maps become
    ``key: value`` pairs and integral floats drop their fractional part.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(stringify_value(item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{key}: {stringify_value(item)}" for key, item in value.items())
    return str(value)


def split_template(template: str) -> tuple[str, str]:
    """Split ``template`` into (header, body). No blank line means no header."""
    template = template.replace("\r\n", "\n")
    if _SECTION_BREAK not in template:
        return "", template
    header, body = template.split(_SECTION_BREAK, 1)
    return header, body


def fill_placeholders(body: str, row: dict[str, Any]) -> str:
    return _PLACEHOLDER.sub(lambda m: stringify_value(row.get(m.group(1).strip())), body)


def strip_decoration(header: str) -> str:
    """Drop markdown emphasis and heading marks from a header line."""
    return header.replace("*", "").strip().lstrip("#").strip()


def render_template(template: str, rows: list[dict[str, Any]]) -> tuple[str, str]:
    """Render ``template`` against ``rows``.

    Returns:
        (answer, header) where header is "" when the template has none.
    """
    header, body = split_template(template)
    sections = [fill_placeholders(body, row) for row in rows]
    if header:
        sections.insert(0, header)
    return _SECTION_BREAK.join(sections), header
