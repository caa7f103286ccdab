"""Source documents: manifest, splitting and canonical models."""

from .models import (
    AnnotatedLine,
    CanonicalAnnotation,
    CharGloss,
    GeneratedPage,
    ManifestItem,
    ParsedContent,
    PhraseGloss,
)
from .splitter import split_content

__all__ = [
    "AnnotatedLine",
    "CanonicalAnnotation",
    "CharGloss",
    "GeneratedPage",
    "ManifestItem",
    "ParsedContent",
    "PhraseGloss",
    "split_content",
]
