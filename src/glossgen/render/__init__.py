"""Static HTML rendering for annotated pages and the navigation index."""

from .index import build_index_html
from .page import build_page_html

__all__ = ["build_index_html", "build_page_html"]
