"""Canonical data structures shared by splitting, normalization and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ManifestItem:
    """One work listed in the book manifest."""

    file: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class ParsedContent:
    """A source document split into its three implicit sections.

    ``original_lines`` is the authoritative text: every downstream index
    (request positions, char slots, phrase ranges) refers to it.
    """

    original_text: str
    original_lines: tuple[str, ...]
    vernacular: str = ""
    comment: str = ""


@dataclass(slots=True)
class CharGloss:
    """Reading and meaning attached to one original character."""

    character: str
    pinyin: str = ""
    gloss: str = ""


@dataclass(slots=True)
class PhraseGloss:
    """Reading and meaning for an inclusive character range of one line."""

    start: int
    end: int
    pinyin: str = ""
    gloss: str = ""


@dataclass(slots=True)
class AnnotatedLine:
    text: str
    chars: list[CharGloss] = field(default_factory=list)
    phrases: list[PhraseGloss] = field(default_factory=list)

    def to_dict(self, index: int) -> dict[str, object]:
        return {
            "index": index,
            "text": self.text,
            "chars": [{"c": cell.character, "p": cell.pinyin, "g": cell.gloss} for cell in self.chars],
            "phrases": [
                {"s": phrase.start, "e": phrase.end, "p": phrase.pinyin, "g": phrase.gloss}
                for phrase in self.phrases
            ],
        }


@dataclass(slots=True)
class CanonicalAnnotation:
    """Validated annotation, index-aligned with ``ParsedContent.original_lines``."""

    title: str = ""
    summary: str = ""
    lines: list[AnnotatedLine] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class GeneratedPage:
    """Navigation entry for a written page."""

    title: str
    output_name: str
