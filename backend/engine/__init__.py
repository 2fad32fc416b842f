"""Normalization and layout engine."""

from engine.assembler import assemble, build_document
from engine.chunker import chunk
from engine.color_scheme import resolve_display_class

__all__ = [
    "assemble",
    "build_document",
    "chunk",
    "resolve_display_class",
]
