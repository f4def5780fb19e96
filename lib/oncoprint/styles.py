"""
Alteration styles for OncoPrint layers.

Every alteration resolves to one entry of a closed table keyed by
(alteration type, visual subtype). The table order is also the stacking
order of the layers. Alterations that match no entry use FALLBACK_STYLE.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .schema import AlterationType

if TYPE_CHECKING:
    from .schema import AlterationRecord


@dataclass(frozen=True, slots=True)
class AlterationStyle:
    """Display name, bar color and relative bar width of one layer."""

    name: str
    color: str
    width: float


StyleKey = tuple[str, str | None]

CNA = AlterationType.CNA.value
EXP = AlterationType.EXP.value
MUTATION = AlterationType.MUTATION.value
FUSION = AlterationType.FUSION.value

# Copy-number calls are drawn widest, point mutations narrowest so that they
# stay visible on top of the wider layers.
CNA_WIDTH = 0.8
EXP_WIDTH = 0.6
NARROW_WIDTH = 0.4

ALTERATION_STYLES: dict[StyleKey, AlterationStyle] = {
    (CNA, "AMP"): AlterationStyle("Amplification", "#ff0000", CNA_WIDTH),
    (CNA, "GAIN"): AlterationStyle("Gain", "#ffb6c1", CNA_WIDTH),
    (CNA, "HETLOSS"): AlterationStyle("Shallow deletion", "#8fd8d8", CNA_WIDTH),
    (CNA, "HOMDEL"): AlterationStyle("Deep deletion", "#0000ff", CNA_WIDTH),
    (CNA, None): AlterationStyle("Copy number alteration", "#a855f7", CNA_WIDTH),
    (EXP, "UP"): AlterationStyle("mRNA upregulation", "#ff9999", EXP_WIDTH),
    (EXP, "DOWN"): AlterationStyle("mRNA downregulation", "#6699cc", EXP_WIDTH),
    (EXP, None): AlterationStyle("mRNA expression change", "#f59e0b", EXP_WIDTH),
    (FUSION, None): AlterationStyle("Fusion", "#8b00c9", NARROW_WIDTH),
    (MUTATION, None): AlterationStyle("Mutation", "#008000", NARROW_WIDTH),
}

FALLBACK_STYLE = AlterationStyle("Other alteration", "#64748b", NARROW_WIDTH)

# Types whose subtypes are drawn as separate layers
SUBTYPED_TYPES = frozenset(
    alteration_type for alteration_type, subtype in ALTERATION_STYLES if subtype
)

_STYLE_RANK = {key: rank for rank, key in enumerate(ALTERATION_STYLES)}


def style_key(record: AlterationRecord) -> StyleKey:
    """
    Return the grouping key of a record.

    CNA and expression calls are split by their call (AMP, UP, ...) when the
    call is one the table knows; every other record is keyed by type alone.
    """
    alteration_type = record.alteration_type
    if alteration_type in SUBTYPED_TYPES and record.alteration:
        subtype = record.alteration.upper()
        if (alteration_type, subtype) in ALTERATION_STYLES:
            return alteration_type, subtype
    return alteration_type, None


def style_rank(key: StyleKey) -> int:
    """Stacking rank of a grouping key; unknown keys sort after all known ones."""
    return _STYLE_RANK.get(key, len(_STYLE_RANK))


def resolve_style(record: AlterationRecord) -> AlterationStyle:
    return ALTERATION_STYLES.get(style_key(record), FALLBACK_STYLE)


def describe(record: AlterationRecord) -> str:
    """
    Human-readable description of one alteration for hover text.

    Mutations show their protein change and fusions their partner; copy
    number and expression calls show the name of their layer.
    """
    alteration = record.alteration
    match record.alteration_type:
        case "MUTATION":
            return alteration or resolve_style(record).name
        case "FUSION":
            return f"{alteration} fusion" if alteration else "Fusion"
        case "CNA" | "EXP":
            key = style_key(record)
            name = resolve_style(record).name
            if key[1] is None and alteration:
                return f"{name} ({alteration})"
            return name
        case _:
            if alteration:
                return f"{record.alteration_type}: {alteration}"
            return record.alteration_type
