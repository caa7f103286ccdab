"""Reconcile untrusted provider payloads against the authoritative text.

The payload may be any JSON-like tree. Normalization only ever fills blanks:
line count, line text and every character come from ``ParsedContent`` and
are never taken from the payload. Anything in the payload that cannot be
validated against the original text is dropped entry by entry.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import Any, Mapping

from glossgen.annotation.extract import (
    CHAR_LIST_KEYS,
    CHAR_POSITION_KEYS,
    CHAR_VALUE_KEYS,
    GLOSS_KEYS,
    LINE_CONTAINER_KEYS,
    LINE_INDEX_KEYS,
    PHRASE_END_KEYS,
    PHRASE_LIST_KEYS,
    PHRASE_START_KEYS,
    PINYIN_KEYS,
    SUMMARY_KEYS,
    TITLE_KEYS,
    pick_integer,
    pick_list,
    pick_string,
)
from glossgen.content.models import AnnotatedLine, CanonicalAnnotation, CharGloss, ParsedContent, PhraseGloss

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RejectionTally:
    lines: int = 0
    chars: int = 0
    mismatched_chars: int = 0
    phrases: int = 0

    @property
    def total(self) -> int:
        return self.lines + self.chars + self.mismatched_chars + self.phrases


def _blank_chars(text: str) -> list[CharGloss]:
    return [CharGloss(character=char) for char in text]


def create_empty_annotation(content: ParsedContent) -> CanonicalAnnotation:
    """Annotation with every gloss blank, used when the provider is skipped."""

    return CanonicalAnnotation(
        lines=[AnnotatedLine(text=text, chars=_blank_chars(text)) for text in content.original_lines]
    )


def _looks_like_line_entries(candidate: list[Any]) -> bool:
    for element in candidate:
        if not isinstance(element, Mapping):
            continue
        if pick_integer(element, LINE_INDEX_KEYS) is not None:
            return True
        if isinstance(element.get("text"), str):
            return True
    return False


def _ordered_children(node: Mapping[str, Any]) -> list[Any]:
    named = [node[key] for key in LINE_CONTAINER_KEYS if key in node]
    rest = [value for key, value in node.items() if key not in LINE_CONTAINER_KEYS]
    return named + rest


def locate_line_entries(payload: Any) -> list[Any] | None:
    """Breadth-first search for the first list of line-like entries.

    Named container keys are preferred at every level, so the shallowest
    well-named list wins over deeper or unnamed ones. Each container is
    visited at most once, which also guards against cyclic structures.
    """
    if not isinstance(payload, (Mapping, list)):
        return None

    queue: deque[Any] = deque([payload])
    visited: set[int] = {id(payload)}

    while queue:
        node = queue.popleft()

        if isinstance(node, list):
            if _looks_like_line_entries(node):
                return node
            children = node
        else:
            children = _ordered_children(node)
            for child in children:
                if isinstance(child, list) and _looks_like_line_entries(child):
                    return child

        for child in children:
            if isinstance(child, (Mapping, list)) and id(child) not in visited:
                visited.add(id(child))
                queue.append(child)

    return None


def index_line_entries(entries: list[Any], tally: _RejectionTally | None = None) -> dict[int, Mapping[str, Any]]:
    """Map line index to entry. Later entries replace earlier ones for the same index."""

    by_index: dict[int, Mapping[str, Any]] = {}
    for entry in entries:
        if not isinstance(entry, Mapping):
            if tally is not None:
                tally.lines += 1
            continue
        index = pick_integer(entry, LINE_INDEX_KEYS)
        if index is None:
            if tally is not None:
                tally.lines += 1
            continue
        if index in by_index:
            logger.debug("Duplicate line index %s in provider payload; keeping the later entry", index)
        by_index[index] = entry
    return by_index


def _apply_char_entries(
    text: str,
    chars: list[CharGloss],
    entry: Mapping[str, Any],
    tally: _RejectionTally,
) -> None:
    for sub_entry in pick_list(entry, CHAR_LIST_KEYS) or []:
        if not isinstance(sub_entry, Mapping):
            tally.chars += 1
            continue
        position = pick_integer(sub_entry, CHAR_POSITION_KEYS)
        if position is None or position < 0 or position >= len(chars):
            tally.chars += 1
            continue

        claimed = pick_string(sub_entry, CHAR_VALUE_KEYS)
        if claimed and claimed != text[position]:
            logger.debug("Rejecting gloss for position %s: expected %r, got %r", position, text[position], claimed)
            tally.mismatched_chars += 1
            continue

        pinyin = pick_string(sub_entry, PINYIN_KEYS)
        if pinyin:
            chars[position].pinyin = pinyin
        gloss = pick_string(sub_entry, GLOSS_KEYS)
        if gloss:
            chars[position].gloss = gloss


def _collect_phrases(length: int, entry: Mapping[str, Any], tally: _RejectionTally) -> list[PhraseGloss]:
    phrases: list[PhraseGloss] = []
    for sub_entry in pick_list(entry, PHRASE_LIST_KEYS) or []:
        start = pick_integer(sub_entry, PHRASE_START_KEYS)
        end = pick_integer(sub_entry, PHRASE_END_KEYS)
        if start is None or end is None:
            tally.phrases += 1
            continue
        if start > end:
            start, end = end, start
        if start < 0 or end >= length:
            tally.phrases += 1
            continue
        phrases.append(
            PhraseGloss(
                start=start,
                end=end,
                pinyin=pick_string(sub_entry, PINYIN_KEYS),
                gloss=pick_string(sub_entry, GLOSS_KEYS),
            )
        )
    return phrases


def normalize_annotation(content: ParsedContent, payload: Any) -> CanonicalAnnotation:
    """Build a ``CanonicalAnnotation`` aligned line-for-line with *content*."""

    tally = _RejectionTally()
    entries = locate_line_entries(payload)
    if entries is None:
        logger.warning("Provider payload has no recognizable line entries; glosses left blank")
        by_index: dict[int, Mapping[str, Any]] = {}
    else:
        by_index = index_line_entries(entries, tally)

    lines: list[AnnotatedLine] = []
    for index, text in enumerate(content.original_lines):
        chars = _blank_chars(text)
        phrases: list[PhraseGloss] = []
        entry = by_index.get(index)
        if entry is not None:
            _apply_char_entries(text, chars, entry, tally)
            phrases = _collect_phrases(len(chars), entry, tally)
        lines.append(AnnotatedLine(text=text, chars=chars, phrases=phrases))

    if tally.total:
        logger.warning(
            "Dropped provider entries: %s line(s), %s char(s), %s mismatched char(s), %s phrase(s)",
            tally.lines,
            tally.chars,
            tally.mismatched_chars,
            tally.phrases,
        )

    return CanonicalAnnotation(
        title=pick_string(payload, TITLE_KEYS),
        summary=pick_string(payload, SUMMARY_KEYS),
        lines=lines,
    )
