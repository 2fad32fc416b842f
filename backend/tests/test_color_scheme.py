from __future__ import annotations

import pytest

from engine.color_scheme import (
    resolve_block,
    resolve_display_class,
    resolve_identity,
    swap_display_class,
)
from models import (
    Cell,
    CellTag,
    DisplayClass,
    IdentityCard,
    IdentityEntry,
    Row,
    Scheme,
    TableBlock,
)


def test_normal_scheme_is_identity_mapping():
    assert resolve_display_class(CellTag.POS, Scheme.NORMAL) == DisplayClass.FAVORABLE
    assert resolve_display_class(CellTag.NEG, Scheme.NORMAL) == DisplayClass.UNFAVORABLE
    assert resolve_display_class(CellTag.ZERO, Scheme.NORMAL) == DisplayClass.NEUTRAL


def test_inverted_scheme_swaps_pos_and_neg_only():
    assert resolve_display_class(CellTag.POS, Scheme.INVERTED) == DisplayClass.UNFAVORABLE
    assert resolve_display_class(CellTag.NEG, Scheme.INVERTED) == DisplayClass.FAVORABLE
    assert resolve_display_class(CellTag.ZERO, Scheme.INVERTED) == DisplayClass.NEUTRAL


@pytest.mark.parametrize("tag", list(CellTag))
def test_inversion_is_its_own_inverse(tag):
    inverted = resolve_display_class(tag, Scheme.INVERTED)
    assert swap_display_class(inverted) == resolve_display_class(tag, Scheme.NORMAL)


@pytest.mark.parametrize("tag", list(CellTag))
@pytest.mark.parametrize("scheme", list(Scheme))
def test_resolver_is_total(tag, scheme):
    assert resolve_display_class(tag, scheme) in set(DisplayClass)


def test_resolve_block_applies_block_scheme_to_every_cell():
    block = TableBlock(
        title="Розмін",
        scheme=Scheme.INVERTED,
        rows=[
            Row(values=[Cell(text="100", tag=CellTag.POS), Cell(text="-40", tag=CellTag.NEG)]),
            Row(values=[Cell(text="0", tag=CellTag.ZERO)]),
        ],
    )
    rows = resolve_block(block)
    assert [c.display for c in rows[0].values] == [DisplayClass.UNFAVORABLE, DisplayClass.FAVORABLE]
    assert [c.display for c in rows[1].values] == [DisplayClass.NEUTRAL]
    assert rows[0].values[0].text == "100"
    assert rows[0].values[0].tag == CellTag.POS


def test_identity_always_resolves_normal():
    card = IdentityCard(
        name="A",
        entries=[
            IdentityEntry(label="Розмін", value="1", tag=CellTag.POS),
            IdentityEntry(label="Борг", value="-1", tag=CellTag.NEG),
        ],
    )
    lines = resolve_identity(card)
    assert [(ln.label, ln.display) for ln in lines] == [
        ("Розмін", DisplayClass.FAVORABLE),
        ("Борг", DisplayClass.UNFAVORABLE),
    ]
