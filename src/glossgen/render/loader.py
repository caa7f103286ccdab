"""Template loading for rendered pages."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from string import Template

_TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def load_template(name: str) -> Template:
    return Template((_TEMPLATE_DIR / name).read_text(encoding="utf-8"))
