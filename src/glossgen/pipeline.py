"""Sequential generation pass: split, annotate, render and write each work."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Protocol, Sequence

from glossgen.annotation.normalizer import create_empty_annotation, normalize_annotation
from glossgen.content.manifest import output_name_for, read_source_text
from glossgen.content.models import GeneratedPage, ManifestItem, ParsedContent
from glossgen.content.splitter import split_content
from glossgen.render.index import build_index_html
from glossgen.render.page import build_page_html

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "book-index.html"


class _Annotator(Protocol):
    def annotate(self, item: ManifestItem, content: ParsedContent) -> Any:
        ...


@dataclass(slots=True)
class GenerationReport:
    pages: list[GeneratedPage] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    index_path: Path | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "generated": [{"title": page.title, "output": page.output_name} for page in self.pages],
            "skipped": list(self.skipped),
            "index": str(self.index_path) if self.index_path is not None else None,
        }


def run_generation(
    items: Sequence[ManifestItem],
    *,
    book_dir: Path,
    out_dir: Path,
    annotator: _Annotator | None = None,
    index_name: str = DEFAULT_INDEX_NAME,
    now: Callable[[], datetime] = datetime.now,
) -> GenerationReport:
    """Process *items* one at a time.

    ``annotator=None`` skips the provider and writes blank glosses. Provider
    failures propagate and stop the run; documents without original lines
    are skipped.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    report = GenerationReport()

    for item in items:
        content = split_content(read_source_text(book_dir / item.file))
        if not content.original_lines:
            logger.warning("%s has no original text to annotate, skipping", item.file)
            report.skipped.append(item.file)
            continue

        if annotator is None:
            annotation = create_empty_annotation(content)
        else:
            payload = annotator.annotate(item, content)
            annotation = normalize_annotation(content, payload)

        output_name = output_name_for(item)
        page_html = build_page_html(item, content, annotation, generated_at=now())
        page_path = out_dir / output_name
        page_path.parent.mkdir(parents=True, exist_ok=True)
        page_path.write_text(page_html, encoding="utf-8")
        report.pages.append(GeneratedPage(title=annotation.title or item.title or output_name, output_name=output_name))
        logger.info("Generated %s", output_name)

    if not report.pages:
        logger.warning("No pages were generated")
        return report

    index_path = out_dir / index_name
    index_path.write_text(build_index_html(report.pages, generated_at=now()), encoding="utf-8")
    report.index_path = index_path
    logger.info("Navigation page written to %s", index_path)
    return report
