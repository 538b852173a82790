"""Flatten nested parameters into Moodle's bracketed form encoding.

Moodle's REST server expects PHP-style keys:

  courseids[0]=1&courseids[1]=2
  criteria[0][key]=search&criteria[0][value]=math
  options[ids][0]=7

Rules:
- None values emit nothing
- booleans become "1" / "0"
- ints, floats and strings use their textual form
- sequences are index-keyed, mappings are key-nested, at any depth
- anything else (sets, bytes, arbitrary objects) is skipped
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Union
from urllib.parse import urlencode

SerializableValue = Union[
    None,
    bool,
    int,
    float,
    str,
    Sequence["SerializableValue"],
    Mapping[str, "SerializableValue"],
]
SerializableParams = Mapping[str, SerializableValue]


def _format_scalar(value: Any) -> str | None:
    """Return the wire text for a scalar, or None if it isn't one."""
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float, str)):
        return str(value)
    return None


def _append(pairs: list[tuple[str, str]], key: str, value: Any) -> None:
    if value is None:
        return

    text = _format_scalar(value)
    if text is not None:
        pairs.append((key, text))
        return

    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _append(pairs, f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _append(pairs, f"{key}[{index}]", item)


def serialize_params(
    params: SerializableParams,
    prefix: str = "",
) -> list[tuple[str, str]]:
    """Serialize a parameter mapping into ordered (key, value) pairs.

    If ``prefix`` is given, every top-level key is nested under it, e.g.
    ``prefix="options"`` turns ``{"ids": [1]}`` into ``options[ids][0]=1``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        full_key = f"{prefix}[{key}]" if prefix else key
        _append(pairs, full_key, value)
    return pairs


def merge_params(
    base: Iterable[tuple[str, str]],
    additional: Iterable[tuple[str, str]],
) -> list[tuple[str, str]]:
    """Concatenate two serialized parameter lists, keeping duplicate keys."""
    return [*base, *additional]


def encode_form(pairs: Iterable[tuple[str, str]]) -> str:
    """URL-encode serialized pairs for an x-www-form-urlencoded body."""
    return urlencode(list(pairs))
