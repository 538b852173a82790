"""Minimal JSON -> YAML serializer for the generated OpenAPI documents.

Covers only what the OpenAPI builder produces: nested dicts and lists of
strings, numbers, booleans and None. It is not a general YAML writer and
pathological strings may not round-trip through a YAML parser.
"""

from __future__ import annotations

import re
from typing import Any

INDENT = "  "

_BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_RESERVED_WORDS = {"true", "false", "null", "yes", "no"}


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _needs_quotes(text: str) -> bool:
    return (
        text == ""
        or ":" in text
        or "#" in text
        or "\n" in text
        or text != text.strip()
        or text[0].isdigit()
        or text.lower() in _RESERVED_WORDS
    )


def format_scalar(value: Any) -> str:
    """Render a scalar value as YAML text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    return _quote(text) if _needs_quotes(text) else text


def format_key(key: Any) -> str:
    text = str(key)
    return text if _BARE_KEY.match(text) else _quote(text)


def _is_collection(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def _inline_empty(value: Any) -> str:
    return "{}" if isinstance(value, dict) else "[]"


def _mapping_lines(mapping: dict[str, Any], level: int) -> list[str]:
    pad = INDENT * level
    lines: list[str] = []
    for key, value in mapping.items():
        prefix = f"{pad}{format_key(key)}:"
        if _is_collection(value):
            if not value:
                lines.append(f"{prefix} {_inline_empty(value)}")
            else:
                lines.append(prefix)
                lines.extend(_render_lines(value, level + 1))
        else:
            lines.append(f"{prefix} {format_scalar(value)}")
    return lines


def _sequence_lines(items: list[Any] | tuple[Any, ...], level: int) -> list[str]:
    pad = INDENT * level
    lines: list[str] = []
    for item in items:
        if not _is_collection(item):
            lines.append(f"{pad}- {format_scalar(item)}")
        elif not item:
            lines.append(f"{pad}- {_inline_empty(item)}")
        elif isinstance(item, dict):
            # First key shares the dash line; the rest are rendered one level
            # deeper, which lines them up under it.
            nested = _mapping_lines(item, level + 1)
            lines.append(f"{pad}- {nested[0].lstrip()}")
            lines.extend(nested[1:])
        else:
            lines.append(f"{pad}-")
            lines.extend(_render_lines(item, level + 1))
    return lines


def _render_lines(value: Any, level: int) -> list[str]:
    if isinstance(value, dict):
        return _mapping_lines(value, level)
    return _sequence_lines(value, level)


def to_yaml(value: Any) -> str:
    """Serialize a JSON-compatible value to YAML text."""
    if not _is_collection(value):
        return format_scalar(value)
    if not value:
        return _inline_empty(value)
    return "\n".join(_render_lines(value, 0)) + "\n"
