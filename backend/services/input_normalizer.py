"""
Payload Normalizer — every accepted input shape normalizes to CanonicalPayload.

Accepts: structured blocks (blocks.result / blocks.rozmin / blocks.rozrahunok),
legacy flat scalars (name, labelX/valueX), legacy pipe strings
(detailsRozmin / detailsRozrah). Never raises on malformed input: a missing or
wrong-typed field degrades to '', [] or the 'zero' tag.

Resolution order per sub-entity (first match wins):
  identity: blocks.result -> legacy scalars -> absent
  table slot: blocks.<slot> -> details pipe string -> valueRozrah (settlement only) -> absent
"""

from __future__ import annotations

from typing import Any, List, Optional

from models import (
    DEBT_LABEL,
    IDENTITY_TITLE,
    REDISTRIBUTION_TITLE,
    SETTLEMENT_TITLE,
    SLOT_DEFAULT_TITLES,
    AnnotationCell,
    CanonicalPayload,
    Cell,
    CellTag,
    IdentityCard,
    IdentityEntry,
    LegacyDetails,
    LegacyIdentity,
    LegacyScalar,
    Row,
    Scheme,
    StructuredIdentity,
    StructuredTable,
    TableBlock,
    TableSlot,
    decode_payload,
)
from models.legacy import DecodedPayload, as_list, as_mapping, as_text


# Legacy payloads sent scheme="rozmin" for the inverted report.
_SCHEME_ALIASES = {
    "normal": Scheme.NORMAL,
    "inverted": Scheme.INVERTED,
    "rozmin": Scheme.INVERTED,
}

# Title reserved for the redistribution report; only this title infers inversion.
INVERTED_REPORT_TITLE = REDISTRIBUTION_TITLE


def _coerce_tag(value: Any) -> CellTag:
    """Unknown or missing cls reads as zero."""
    s = as_text(value).strip().lower()
    for tag in CellTag:
        if tag.value == s:
            return tag
    return CellTag.ZERO


def infer_scheme(title: str) -> Scheme:
    """Legacy rule: a block titled exactly like the redistribution report is inverted."""
    return Scheme.INVERTED if title == INVERTED_REPORT_TITLE else Scheme.NORMAL


def resolve_scheme(explicit: Any, title: str) -> Scheme:
    """Explicit scheme field wins; otherwise fall back to title inference."""
    s = as_text(explicit).strip().lower()
    if s in _SCHEME_ALIASES:
        return _SCHEME_ALIASES[s]
    return infer_scheme(title)


def identity_title(game_date: str = "") -> str:
    return f"{IDENTITY_TITLE} · {game_date}" if game_date else IDENTITY_TITLE


# --- Identity ---


def _structured_identity(src: StructuredIdentity, game_date: str) -> IdentityCard:
    data = src.data
    entries = []
    for raw_row in as_list(data.get("rows")):
        row = as_mapping(raw_row)
        entries.append(
            IdentityEntry(
                label=as_text(row.get("key")),
                value=as_text(row.get("value")),
                tag=_coerce_tag(row.get("cls")),
            )
        )
    title = as_text(data.get("title")).strip()
    return IdentityCard(
        title=title or identity_title(game_date),
        name=as_text(data.get("name")),
        entries=entries,
    )


def _legacy_identity(src: LegacyIdentity, game_date: str) -> IdentityCard:
    """Synthesized card: three fixed entries, always tagged pos whatever the value."""
    def label(value: Any, default: str) -> str:
        return default if value is None else as_text(value)

    return IdentityCard(
        title=identity_title(game_date),
        name=as_text(src.name),
        entries=[
            IdentityEntry(label=label(src.label_rozmin, REDISTRIBUTION_TITLE), value=as_text(src.value_rozmin), tag=CellTag.POS),
            IdentityEntry(label=label(src.label_rozrah, SETTLEMENT_TITLE), value=as_text(src.value_rozrah), tag=CellTag.POS),
            IdentityEntry(label=label(src.label_debt, DEBT_LABEL), value=as_text(src.value_debt), tag=CellTag.POS),
        ],
    )


def normalize_identity(decoded: DecodedPayload) -> Optional[IdentityCard]:
    src = decoded.identity
    if isinstance(src, StructuredIdentity):
        return _structured_identity(src, decoded.game_date)
    if isinstance(src, LegacyIdentity):
        return _legacy_identity(src, decoded.game_date)
    return None


# --- Table slots ---


def _structured_row(raw_row: Any) -> Row:
    row = as_mapping(raw_row)
    values = [
        Cell(text=as_text(as_mapping(v).get("text")), tag=_coerce_tag(as_mapping(v).get("cls")))
        for v in as_list(row.get("values"))
    ]
    annotations = [AnnotationCell(text=as_text(as_mapping(t).get("text"))) for t in as_list(row.get("times"))]
    annotations = annotations[: len(values)]
    if annotations:
        annotations.extend(AnnotationCell() for _ in range(len(values) - len(annotations)))
    return Row(values=values, annotations=annotations)


def _structured_table(src: StructuredTable) -> TableBlock:
    title = as_text(src.data.get("title"))
    return TableBlock(
        title=title,
        scheme=resolve_scheme(src.data.get("scheme"), title),
        rows=[_structured_row(r) for r in as_list(src.data.get("rows"))],
    )


def redistribution_tags(count: int) -> List[CellTag]:
    """Opening and closing ledger entries are favorable; interior transfers are not."""
    return [CellTag.POS if i in (0, count - 1) else CellTag.NEG for i in range(count)]


def _details_row(src: LegacyDetails, slot: TableSlot) -> Row:
    segments = src.segments
    if slot == TableSlot.REDISTRIBUTION:
        tags = redistribution_tags(len(segments))
    else:
        tags = [CellTag.POS] * len(segments)
    return Row(values=[Cell(text=text, tag=tag) for text, tag in zip(segments, tags)])


def normalize_slot(decoded: DecodedPayload, slot: TableSlot) -> TableBlock:
    src = decoded.slot(slot)
    if isinstance(src, StructuredTable):
        return _structured_table(src)

    title = SLOT_DEFAULT_TITLES[slot]
    rows: List[Row] = []
    if isinstance(src, LegacyDetails):
        rows = [_details_row(src, slot)]
    elif isinstance(src, LegacyScalar):
        rows = [Row(values=[Cell(text=src.text, tag=CellTag.POS)])]
    return TableBlock(title=title, scheme=infer_scheme(title), rows=rows)


def normalize(raw: Any) -> CanonicalPayload:
    """Map any accepted input shape to CanonicalPayload. Never raises on payload content."""
    decoded = decode_payload(raw)
    return CanonicalPayload(
        identity=normalize_identity(decoded),
        tables=[normalize_slot(decoded, slot) for slot in TableSlot],
    )
