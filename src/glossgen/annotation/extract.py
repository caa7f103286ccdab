"""Synonym-keyed accessors for provider payloads of unknown shape.

Every lookup takes an ordered tuple of acceptable field names and returns the
first usable value. Missing or mistyped fields yield ``""`` or ``None``;
nothing here raises on bad input.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Sequence

TITLE_KEYS = ("title", "name", "heading")
SUMMARY_KEYS = ("summary", "desc", "description")

LINE_CONTAINER_KEYS = (
    "lines",
    "entries",
    "items",
    "segments",
    "rows",
    "annotations",
    "sentences",
    "data",
    "results",
    "list",
)
LINE_INDEX_KEYS = ("index", "lineIndex", "line_index", "line", "lineNo", "line_no")

CHAR_LIST_KEYS = ("chars", "characters", "charList", "char_list")
CHAR_POSITION_KEYS = ("i", "index", "idx", "position", "pos")
CHAR_VALUE_KEYS = ("ch", "char", "character", "c", "text", "value")

PHRASE_LIST_KEYS = ("phrases", "words", "terms", "phraseList", "phrase_list")
PHRASE_START_KEYS = ("s", "start", "from", "begin", "beginIndex", "start_index")
PHRASE_END_KEYS = ("e", "end", "to", "finish", "stop", "endIndex", "end_index")

PINYIN_KEYS = ("p", "pinyin", "py")
GLOSS_KEYS = (
    "g",
    "gloss",
    "meaning",
    "translation",
    "explanation",
    "note",
    "interpretation",
    "definition",
    "def",
)


def _as_whole_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return _as_whole_number(number)
    return None


def pick_string(source: Any, keys: Sequence[str]) -> str:
    """Return the first non-blank string under *keys*, trimmed, else ``""``."""

    if not isinstance(source, Mapping):
        return ""
    for key in keys:
        value = source.get(key)
        if isinstance(value, str):
            trimmed = value.strip()
            if trimmed:
                return trimmed
    return ""


def pick_integer(source: Any, keys: Sequence[str]) -> int | None:
    """Return the first value under *keys* that is a whole number, else ``None``.

    Accepts ints, integral floats and numeric strings such as ``"3"`` or
    ``"3.0"``. Booleans are not numbers here.
    """
    if not isinstance(source, Mapping):
        return None
    for key in keys:
        if key not in source:
            continue
        number = _as_whole_number(source[key])
        if number is not None:
            return number
    return None


def pick_list(source: Any, keys: Sequence[str]) -> list[Any] | None:
    """Return the first list-valued field under *keys*."""

    if not isinstance(source, Mapping):
        return None
    for key in keys:
        value = source.get(key)
        if isinstance(value, list):
            return value
    return None
