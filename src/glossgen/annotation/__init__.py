"""Annotation provider access and response normalization."""

from .config import AnnotationSettings
from .normalizer import create_empty_annotation, normalize_annotation
from .provider import AnnotationRequestError, ChatAnnotator

__all__ = [
    "AnnotationRequestError",
    "AnnotationSettings",
    "ChatAnnotator",
    "create_empty_annotation",
    "normalize_annotation",
]
