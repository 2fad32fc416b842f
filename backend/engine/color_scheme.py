"""
Color scheme resolution: semantic cell tag + block scheme -> display class.

Under the inverted scheme favorable and unfavorable swap; neutral never moves.
"""
from __future__ import annotations

from models import (
    CellTag,
    DisplayClass,
    IdentityCard,
    KeyValueLine,
    ResolvedCell,
    ResolvedRow,
    Row,
    Scheme,
    TableBlock,
)

_NORMAL = {
    CellTag.POS: DisplayClass.FAVORABLE,
    CellTag.NEG: DisplayClass.UNFAVORABLE,
    CellTag.ZERO: DisplayClass.NEUTRAL,
}

_SWAP = {
    DisplayClass.FAVORABLE: DisplayClass.UNFAVORABLE,
    DisplayClass.UNFAVORABLE: DisplayClass.FAVORABLE,
    DisplayClass.NEUTRAL: DisplayClass.NEUTRAL,
}


def swap_display_class(display: DisplayClass) -> DisplayClass:
    return _SWAP[display]


def resolve_display_class(tag: CellTag, scheme: Scheme) -> DisplayClass:
    display = _NORMAL[tag]
    if scheme == Scheme.INVERTED:
        return swap_display_class(display)
    return display


def resolve_row(row: Row, scheme: Scheme) -> ResolvedRow:
    return ResolvedRow(
        values=[
            ResolvedCell(text=c.text, tag=c.tag, display=resolve_display_class(c.tag, scheme))
            for c in row.values
        ],
        annotations=list(row.annotations),
    )


def resolve_block(block: TableBlock) -> list[ResolvedRow]:
    return [resolve_row(r, block.scheme) for r in block.rows]


def resolve_identity(card: IdentityCard) -> list[KeyValueLine]:
    """Identity entries always resolve under the normal scheme."""
    return [
        KeyValueLine(label=e.label, value=e.value, display=resolve_display_class(e.tag, Scheme.NORMAL))
        for e in card.entries
    ]
