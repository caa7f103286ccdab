"""Render the navigation page listing every generated work."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
import html

from glossgen.content.models import GeneratedPage
from glossgen.render.loader import load_template
from glossgen.render.page import TIMESTAMP_FORMAT


def build_index_html(pages: Sequence[GeneratedPage], *, generated_at: datetime) -> str:
    links_html = "\n".join(
        f'    <li><a href="{html.escape(page.output_name)}">{html.escape(page.title)}</a></li>' for page in pages
    )
    return load_template("index.html").substitute(
        links_html=links_html,
        generated_at=html.escape(generated_at.strftime(TIMESTAMP_FORMAT)),
    )
