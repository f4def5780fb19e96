"""
Matrix construction for OncoPrint plots.

Converts a flat list of alteration records into:
- a sample axis and a gene axis shared by every layer
- per-gene alteration ratios used in the gene labels
- a background layer drawing the full gene x sample grid
- one stacked bar layer per aggregated alteration group
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import polars as pl
from loguru import logger
from pydantic import TypeAdapter

from .schema import AlterationRecord, BarLayer
from .styles import (
    ALTERATION_STYLES,
    FALLBACK_STYLE,
    AlterationStyle,
    StyleKey,
    describe,
    style_key,
    style_rank,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence


DEFAULT_PADDING = 0.05
DEFAULT_BACKGROUND_COLOR = "rgb(190, 190, 190)"
BACKGROUND_NAME = "No alteration"

_RECORD_LIST = TypeAdapter(list[AlterationRecord])


class InvalidPaddingError(ValueError):
    """Raised when the bar padding leaves no room for a bar."""


@dataclass
class AggregatedGroup:
    """Records sharing one grouping key, rendered as one layer."""

    key: StyleKey
    events: list[AlterationRecord] = field(default_factory=list)

    @property
    def alteration_type(self) -> str:
        return self.key[0]

    @property
    def style(self) -> AlterationStyle:
        return ALTERATION_STYLES.get(self.key, FALLBACK_STYLE)

    @property
    def name(self) -> str:
        return self.style.name

    @property
    def color(self) -> str:
        return self.style.color

    @property
    def width(self) -> float:
        return self.style.width


@dataclass
class MatrixResult:
    """Output of build_matrix."""

    traces: list[BarLayer]
    gene_ratios: dict[str, int]
    genes: list[str]
    samples: list[str]
    gene_labels: list[str]

    @property
    def background(self) -> BarLayer:
        return self.traces[0]

    @property
    def alteration_layers(self) -> list[BarLayer]:
        return self.traces[1:]

    def to_traces(self) -> list[dict[str, Any]]:
        return [layer.to_trace() for layer in self.traces]


def coerce_records(
    records: Iterable[AlterationRecord | Mapping[str, Any]],
) -> list[AlterationRecord]:
    """Validate records given as models or plain mappings."""
    return _RECORD_LIST.validate_python(list(records))


def validate_padding(padding: float) -> float:
    """
    Check that padding is a fraction strictly between 0 and 0.5.

    Raises:
        InvalidPaddingError: if the padding is out of range
    """
    if not 0 < padding < 0.5:  # noqa: PLR2004
        msg = (
            f"Padding must be strictly between 0 and 0.5, got {padding!r}. "
            "Each bar is drawn with length 1 - 2 * padding."
        )
        raise InvalidPaddingError(msg)
    return float(padding)


def _records_frame(records: Sequence[AlterationRecord]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "sample": [record.sample for record in records],
            "gene": [record.gene for record in records],
        },
        schema={"sample": pl.Utf8, "gene": pl.Utf8},
    )


def altered_sample_counts(records: Sequence[AlterationRecord]) -> pl.DataFrame:
    """
    Count distinct altered samples per gene.

    Repeated records for the same (gene, sample) cell count once.

    Returns:
        DataFrame with columns: gene, altered_samples, sorted by descending
        altered_samples with ties broken by gene name
    """
    return (
        _records_frame(records)
        .group_by("gene")
        .agg(pl.col("sample").n_unique().alias("altered_samples"))
        .sort(["altered_samples", "gene"], descending=[True, False])
    )


def sorted_genes(records: Sequence[AlterationRecord]) -> list[str]:
    """Genes ordered by descending number of altered samples, then by name."""
    return altered_sample_counts(records)["gene"].to_list()


def sorted_samples(
    records: Sequence[AlterationRecord],
    genes: Sequence[str] | None = None,
) -> list[str]:
    """
    Samples ordered by their alteration pattern over the gene axis.

    Samples altered in the first gene come first, then within those the
    ones altered in the second gene, and so on. Samples with identical
    patterns are ordered by name, so the order never depends on the order
    of the input records.
    """
    if genes is None:
        genes = sorted_genes(records)

    altered: dict[str, set[str]] = {}
    for record in records:
        altered.setdefault(record.sample, set()).add(record.gene)

    def pattern(sample: str) -> tuple[tuple[bool, ...], str]:
        hits = altered[sample]
        return tuple(gene not in hits for gene in genes), sample

    return sorted(altered, key=pattern)


def gene_ratio(altered_samples: int, total_samples: int) -> int:
    """Percentage of samples altered, rounded half up; 0 when there are no samples."""
    if total_samples == 0:
        return 0
    # Integer form of floor(100 * k / n + 0.5), free of float error
    return (200 * altered_samples + total_samples) // (2 * total_samples)


def gene_ratios(
    records: Sequence[AlterationRecord],
    total_samples: int | None = None,
) -> dict[str, int]:
    """
    Percentage of samples with at least one alteration in each gene.

    Args:
        records: Alteration records
        total_samples: Size of the sample axis. Defaults to the number of
                       distinct samples in records.

    Returns:
        Dict mapping gene to an integer percentage, in gene axis order
    """
    counts = altered_sample_counts(records)
    if total_samples is None:
        total_samples = len({record.sample for record in records})

    return {
        row["gene"]: gene_ratio(row["altered_samples"], total_samples)
        for row in counts.iter_rows(named=True)
    }


def format_gene_labels(genes: Sequence[str], ratios: Mapping[str, int]) -> list[str]:
    """Format gene axis tick labels, e.g. "TP53 (42%)"."""
    return [f"{gene} ({ratios.get(gene, 0)}%)" for gene in genes]


def aggregate(records: Iterable[AlterationRecord]) -> list[AggregatedGroup]:
    """
    Bucket records into layers by grouping key.

    Records keep their input order within a group. Groups follow the style
    table order, with unknown types after the known ones in name order.
    """
    groups: dict[StyleKey, AggregatedGroup] = {}
    for record in records:
        key = style_key(record)
        groups.setdefault(key, AggregatedGroup(key)).events.append(record)

    return sorted(
        groups.values(),
        key=lambda group: (style_rank(group.key), group.key[0], group.key[1] or ""),
    )


def _background_layer(
    samples: Sequence[str],
    genes: Sequence[str],
    labels: Sequence[str],
    padding: float,
    color: str,
) -> BarLayer:
    length = 1 - 2 * padding
    cells = [(column, sample) for column, sample in enumerate(samples) for _ in genes]

    return BarLayer(
        name=BACKGROUND_NAME,
        color=color,
        base=[column + padding for column, _ in cells],
        x=[length] * len(cells),
        y=list(labels) * len(samples),
        text=[sample for _, sample in cells],
        samples=[sample for _, sample in cells],
        genes=list(genes) * len(samples),
    )


def _group_layer(
    group: AggregatedGroup,
    columns: Mapping[str, int],
    labels: Mapping[str, str],
    padding: float,
) -> BarLayer:
    events = group.events
    length = 1 - 2 * padding

    return BarLayer(
        name=group.name,
        color=group.color,
        width=group.width,
        base=[columns[event.sample] + padding for event in events],
        x=[length] * len(events),
        y=[labels[event.gene] for event in events],
        text=[f"{event.sample}<br>{describe(event)}" for event in events],
        samples=[event.sample for event in events],
        genes=[event.gene for event in events],
    )


def build_matrix(
    records: Iterable[AlterationRecord | Mapping[str, Any]],
    padding: float = DEFAULT_PADDING,
    background_color: str = DEFAULT_BACKGROUND_COLOR,
) -> MatrixResult:
    """
    Build the stacked bar layers of an OncoPrint.

    Args:
        records: Alteration records, as models or mappings
        padding: Gap on each side of a bar, as a fraction of a column
        background_color: Color of the "No alteration" grid layer

    Returns:
        MatrixResult whose first trace is the background layer, followed
        by one layer per aggregated alteration group

    Raises:
        InvalidPaddingError: if padding is not strictly between 0 and 0.5
    """
    padding = validate_padding(padding)
    records = coerce_records(records)

    genes = sorted_genes(records)
    samples = sorted_samples(records, genes)
    ratios = gene_ratios(records, len(samples))
    labels = format_gene_labels(genes, ratios)

    columns = {sample: column for column, sample in enumerate(samples)}
    label_by_gene = dict(zip(genes, labels, strict=True))

    traces = [_background_layer(samples, genes, labels, padding, background_color)]
    for group in aggregate(records):
        if group.style is FALLBACK_STYLE:
            logger.warning(
                f"Unrecognized alteration type '{group.alteration_type}' in "
                f"{len(group.events)} record(s); drawing as '{FALLBACK_STYLE.name}'",
            )
        traces.append(_group_layer(group, columns, label_by_gene, padding))

    logger.debug(
        f"Built OncoPrint matrix: {len(genes)} gene(s) x {len(samples)} sample(s), "
        f"{len(traces) - 1} alteration layer(s) from {len(records)} record(s)",
    )

    return MatrixResult(
        traces=traces,
        gene_ratios=ratios,
        genes=genes,
        samples=samples,
        gene_labels=labels,
    )
