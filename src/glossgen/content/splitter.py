"""Split a raw source document into original text, vernacular and commentary."""

from __future__ import annotations

import re

from glossgen.content.models import ParsedContent

VERNACULAR_MARKER = "【白话文翻译】"
COMMENT_MARKER = "【点评】"

_LINE_BREAKS_RE = re.compile(r"(?:\r?\n)+")


def split_original_lines(original: str) -> tuple[str, ...]:
    """Return trimmed, non-empty lines of the original segment in order."""

    return tuple(part.strip() for part in _LINE_BREAKS_RE.split(original) if part.strip())


def split_content(text: str) -> ParsedContent:
    """Split *text* on the two section markers.

    Without the vernacular marker the whole text is original. The commentary
    marker is only honoured together with the vernacular marker.
    """
    original = text
    vernacular = ""
    comment = ""

    vernacular_at = text.find(VERNACULAR_MARKER)
    if vernacular_at != -1:
        original = text[:vernacular_at]
        comment_at = text.find(COMMENT_MARKER)
        vernacular_from = vernacular_at + len(VERNACULAR_MARKER)
        if comment_at != -1:
            vernacular = text[vernacular_from:comment_at]
            comment = text[comment_at + len(COMMENT_MARKER):]
        else:
            vernacular = text[vernacular_from:]

    return ParsedContent(
        original_text=original.strip(),
        original_lines=split_original_lines(original),
        vernacular=vernacular.strip(),
        comment=comment.strip(),
    )
