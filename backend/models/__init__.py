"""Canonical report, wire shapes and document description."""

from .canonical_report import (
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
    Row,
    Scheme,
    TableBlock,
    TableSlot,
)
from .document import (
    Card,
    CardKind,
    DisplayClass,
    Document,
    KeyValueLine,
    ResolvedCell,
    ResolvedRow,
    RowSegment,
    TableSection,
    Viewport,
)
from .legacy import (
    DecodedPayload,
    LegacyDetails,
    LegacyIdentity,
    LegacyScalar,
    PayloadShape,
    StructuredIdentity,
    StructuredTable,
    decode_payload,
    detect_shape,
)

__all__ = [
    "DEBT_LABEL",
    "IDENTITY_TITLE",
    "REDISTRIBUTION_TITLE",
    "SETTLEMENT_TITLE",
    "SLOT_DEFAULT_TITLES",
    "AnnotationCell",
    "CanonicalPayload",
    "Card",
    "CardKind",
    "Cell",
    "CellTag",
    "DecodedPayload",
    "DisplayClass",
    "Document",
    "IdentityCard",
    "IdentityEntry",
    "KeyValueLine",
    "LegacyDetails",
    "LegacyIdentity",
    "LegacyScalar",
    "PayloadShape",
    "ResolvedCell",
    "ResolvedRow",
    "Row",
    "RowSegment",
    "Scheme",
    "StructuredIdentity",
    "StructuredTable",
    "TableBlock",
    "TableSection",
    "TableSlot",
    "Viewport",
    "decode_payload",
    "detect_shape",
]
