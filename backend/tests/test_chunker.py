from __future__ import annotations

import pytest

from engine.chunker import chunk
from errors import ConfigurationError
from models import AnnotationCell, Cell, CellTag, Row


def _row(n: int, times: int = 0) -> Row:
    return Row(
        values=[Cell(text=str(i), tag=CellTag.POS) for i in range(n)],
        annotations=[AnnotationCell(text=f"t{i}") for i in range(times)],
    )


def test_thirteen_values_width_six():
    segments = chunk(_row(13), 6)
    assert [len(s.values) for s in segments] == [6, 6, 1]
    assert [s.is_partial for s in segments] == [False, False, True]


def test_four_values_width_five_is_single_partial_segment():
    segments = chunk(_row(4), 5)
    assert len(segments) == 1
    assert segments[0].is_partial
    assert len(segments[0].values) == 4


def test_exact_multiple_has_no_partial_segment():
    segments = chunk(_row(12), 4)
    assert [len(s.values) for s in segments] == [4, 4, 4]
    assert not any(s.is_partial for s in segments)


def test_empty_row_yields_no_segments():
    assert chunk(Row(), 3) == []


@pytest.mark.parametrize("n", [1, 2, 5, 7, 13, 30])
@pytest.mark.parametrize("width", [1, 2, 3, 6, 50])
def test_chunking_is_lossless_and_order_preserving(n, width):
    row = _row(n)
    segments = chunk(row, width)
    flattened = [c for s in segments for c in s.values]
    assert flattened == row.values
    partial = [i for i, s in enumerate(segments) if s.is_partial]
    assert len(partial) <= 1
    if partial:
        assert partial == [len(segments) - 1]
    assert all(len(s.values) <= width for s in segments)


def test_annotations_pair_positionally():
    segments = chunk(_row(5, times=5), 2)
    assert [[a.text for a in s.annotations] for s in segments] == [["t0", "t1"], ["t2", "t3"], ["t4"]]


def test_short_annotations_fill_blank():
    segments = chunk(_row(5, times=3), 2)
    assert [[a.text for a in s.annotations] for s in segments] == [["t0", "t1"], ["t2", ""], [""]]
    assert all(len(s.annotations) == len(s.values) for s in segments)


@pytest.mark.parametrize("width", [0, -1, 2.5, "3", None, True])
def test_invalid_width_is_configuration_error(width):
    with pytest.raises(ConfigurationError):
        chunk(_row(3), width)
