"""
Split a row of values into bounded-width segments for a fixed-width viewport.

Groups are left-packed: every group holds exactly `width` values except the
last, which holds the remainder and is flagged partial when short.
"""
from __future__ import annotations

from typing import Any, Sequence, TypeVar, Union

from config import validate_chunk_width
from models import AnnotationCell, ResolvedRow, Row, RowSegment

TChunk = TypeVar("TChunk")


def _chunk_list(items: Sequence[TChunk], size: int) -> list[list[TChunk]]:
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def _annotation_slice(annotations: Sequence[AnnotationCell], start: int, count: int) -> list[AnnotationCell]:
    out = list(annotations[start : start + count])
    out.extend(AnnotationCell() for _ in range(count - len(out)))
    return out


def chunk(row: Union[Row, ResolvedRow], width: Any) -> list[RowSegment]:
    """
    Partition row.values into consecutive groups of `width`, pairing each with its
    annotation slice (missing annotations padded blank). Empty row -> [].
    Raises ConfigurationError when width is not an integer >= 1.
    """
    size = validate_chunk_width(width)
    segments: list[RowSegment] = []
    for idx, group in enumerate(_chunk_list(row.values, size)):
        segments.append(
            RowSegment(
                values=group,
                annotations=_annotation_slice(row.annotations, idx * size, len(group)),
                is_partial=len(group) < size,
            )
        )
    return segments
