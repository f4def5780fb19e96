"""
OncoPrint plot data and interaction handling.

Builds the stacked bar layers and axis layout of a genomic OncoPrint (one
row per gene, one column per sample) for an external plotly-compatible
chart surface, and normalizes the surface's raw click, hover and relayout
events into Click, Hover, Zoom, Autoscale and Other events.

Modules:
    schema: Pydantic models for records, layers, viewport and events
    styles: Display name, color and width of each alteration type
    matrix: Axis ordering, gene ratios and bar layer construction
    layout: Axis layout driven by the viewport state
    events: Raw event classification and viewport updates
    component: The OncoPrint component and its configuration
    export: Static Altair export of a built matrix
    log: loguru sink configuration
"""

from .component import OncoPrint, OncoPrintConfig
from .events import InteractionNormalizer, classify
from .layout import build_layout
from .matrix import (
    AggregatedGroup,
    InvalidPaddingError,
    MatrixResult,
    aggregate,
    build_matrix,
    gene_ratios,
    sorted_genes,
    sorted_samples,
)
from .schema import (
    AlterationRecord,
    AlterationType,
    AutoscaleEvent,
    BarLayer,
    EventType,
    NormalizedEvent,
    PassthroughEvent,
    PointEvent,
    ViewportState,
    ZoomEvent,
)

__all__ = [
    "AggregatedGroup",
    "AlterationRecord",
    "AlterationType",
    "AutoscaleEvent",
    "BarLayer",
    "EventType",
    "InteractionNormalizer",
    "InvalidPaddingError",
    "MatrixResult",
    "NormalizedEvent",
    "OncoPrint",
    "OncoPrintConfig",
    "PassthroughEvent",
    "PointEvent",
    "ViewportState",
    "ZoomEvent",
    "aggregate",
    "build_layout",
    "build_matrix",
    "classify",
    "gene_ratios",
    "sorted_genes",
    "sorted_samples",
]
