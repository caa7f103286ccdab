"""Manifest loading, work selection and source text decoding."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path, PurePosixPath
import re

from charset_normalizer import from_bytes

from glossgen.content.models import ManifestItem

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"

_TXT_SUFFIX_RE = re.compile(r"\.txt$", re.IGNORECASE)


@dataclass(slots=True)
class ManifestError(Exception):
    """Raised when the manifest or a referenced source file cannot be read."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


@dataclass(slots=True)
class SelectionError(Exception):
    """Raised when the allow-list selects no manifest item."""

    wanted: tuple[str, ...]
    message: str = "No manifest item matches the requested selection"

    def __str__(self) -> str:
        if not self.wanted:
            return self.message
        return f"{self.message}: {', '.join(self.wanted)}"


def load_manifest(path: Path) -> list[ManifestItem]:
    """Parse a JSON array of ``{"file", "title"}`` objects."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(path, f"Failed to read manifest: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"Manifest is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise ManifestError(path, "Manifest must be a JSON array")

    items: list[ManifestItem] = []
    for position, entry in enumerate(data):
        file_name = entry.get("file") if isinstance(entry, dict) else None
        if not isinstance(file_name, str) or not file_name.strip():
            logger.warning("Skipping manifest entry %s without a file name", position)
            continue
        title = entry.get("title")
        clean_title = title.strip() if isinstance(title, str) and title.strip() else None
        items.append(ManifestItem(file=file_name.strip(), title=clean_title))
    return items


def parse_selection(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def select_items(items: list[ManifestItem], wanted: tuple[str, ...]) -> list[ManifestItem]:
    """Keep items whose file name or title is in *wanted*.

    An empty allow-list keeps every item. Raises ``SelectionError`` when
    nothing is left.
    """
    if wanted:
        allowed = set(wanted)
        selected = [item for item in items if item.file in allowed or (item.title and item.title in allowed)]
    else:
        selected = list(items)

    if not selected:
        raise SelectionError(wanted)
    return selected


def output_name_for(item: ManifestItem) -> str:
    """Relative output path mirroring the source path, as a POSIX string.

    Sub-directories are kept so same-named files in different folders do not
    collide; ``..`` and root anchors are dropped to stay inside the output dir.
    """
    parts = [part for part in PurePosixPath(item.file.replace("\\", "/")).parts if part not in ("/", ".", "..")]
    name = parts[-1] if parts else "untitled"
    if _TXT_SUFFIX_RE.search(name):
        name = _TXT_SUFFIX_RE.sub(".html", name)
    else:
        name = f"{name}.html"
    return "/".join([*parts[:-1], name])


def _detect_encoding(raw: bytes) -> str:
    try:
        raw.decode("utf-8-sig")
        return "utf-8-sig"
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best and best.encoding:
        return best.encoding

    try:
        raw.decode("gb18030")
        return "gb18030"
    except UnicodeDecodeError:
        raise ValueError("Could not detect source text encoding") from None


def read_source_text(path: Path) -> str:
    """Read a source document, tolerating legacy Chinese encodings."""

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ManifestError(path, f"Failed to read source file: {exc}") from exc

    try:
        encoding = _detect_encoding(raw)
        return raw.decode(encoding)
    except (ValueError, LookupError) as exc:
        raise ManifestError(path, f"Failed to decode source file: {exc}") from exc
