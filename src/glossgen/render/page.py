"""Render one annotated work as a self-contained interactive page."""

from __future__ import annotations

from datetime import datetime
import html
import json
from pathlib import Path
import re

from glossgen.content.models import CanonicalAnnotation, ManifestItem, ParsedContent
from glossgen.render.loader import load_template

PUNCTUATION_RE = re.compile(r"[，。！？、；：“”‘’（）《》〈〉【】『』]")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_MISSING_VERNACULAR = "<em>原文件未提供白话文内容。</em>"
_MISSING_COMMENT = "<em>原文件未提供点评。</em>"


def _multiline(text: str) -> str:
    return html.escape(text).replace("\n", "<br />")


def document_title(item: ManifestItem, annotation: CanonicalAnnotation) -> str:
    return annotation.title or item.title or re.sub(r"\.txt$", "", Path(item.file).name, flags=re.IGNORECASE)


def _render_char(char: str, line_index: int, char_index: int) -> str:
    classes = "char punct" if PUNCTUATION_RE.match(char) else "char"
    safe_char = "&nbsp;" if char == " " else html.escape(char)
    return f'<span class="{classes}" data-line="{line_index}" data-index="{char_index}">{safe_char}</span>'


def _render_text_panel(annotation: CanonicalAnnotation) -> str:
    rows: list[str] = []
    for line_index, line in enumerate(annotation.lines):
        spans = "".join(_render_char(cell.character, line_index, char_index) for char_index, cell in enumerate(line.chars))
        rows.append(f'<div class="line" data-line="{line_index}">{spans}</div>')
    return "".join(rows)


def _page_data_script(item: ManifestItem, annotation: CanonicalAnnotation, stamp: str) -> str:
    payload = {
        "meta": {"file": item.file, "generatedAt": stamp},
        "lines": [line.to_dict(index) for index, line in enumerate(annotation.lines)],
    }
    # Keeps "</script>" inside glosses from closing the inline script.
    return json.dumps(payload, ensure_ascii=False).replace("<", "\\u003c")


def build_page_html(
    item: ManifestItem,
    content: ParsedContent,
    annotation: CanonicalAnnotation,
    *,
    generated_at: datetime,
) -> str:
    """Render the page. The annotation is used as-is; it is already validated."""

    stamp = generated_at.strftime(TIMESTAMP_FORMAT)
    summary_html = f'<p class="meta">{html.escape(annotation.summary)}</p>' if annotation.summary else ""

    return load_template("page.html").substitute(
        doc_title=html.escape(document_title(item, annotation)),
        summary_html=summary_html,
        generated_at=html.escape(stamp),
        source_file=html.escape(item.file),
        text_panel_html=_render_text_panel(annotation),
        original_html=_multiline(content.original_text),
        vernacular_html=_multiline(content.vernacular) if content.vernacular else _MISSING_VERNACULAR,
        comment_html=_multiline(content.comment) if content.comment else _MISSING_COMMENT,
        data_script=_page_data_script(item, annotation, stamp),
    )
