"""
Axis layout for OncoPrint plots.

The x (sample) axis follows the viewport state: autorange with hidden tick
labels until a zoom pins it, then exactly the pinned range until the next
zoom or autoscale. The y (gene) axis is fixed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import ViewportState


def x_axis_layout(viewport: ViewportState, title: str | None = None) -> dict[str, Any]:
    """Return the sample axis layout for the current viewport."""
    axis: dict[str, Any] = {
        "title": title,
        "showgrid": False,
        "showticklabels": False,
        "zeroline": False,
        "autorange": viewport.is_autorange,
    }
    if not viewport.is_autorange:
        axis["range"] = [viewport.x_start, viewport.x_end]
    return axis


def y_axis_layout(
    gene_labels: Sequence[str] = (),
    title: str | None = None,
) -> dict[str, Any]:
    """
    Return the gene axis layout.

    Categories are listed bottom-up so the first (most altered) gene is
    drawn on the top row.
    """
    axis: dict[str, Any] = {
        "title": title,
        "showgrid": False,
        "zeroline": False,
        "fixedrange": True,
    }
    if gene_labels:
        axis["categoryorder"] = "array"
        axis["categoryarray"] = list(reversed(gene_labels))
    return axis


def build_layout(
    viewport: ViewportState,
    gene_labels: Sequence[str] = (),
    xlabel: str | None = None,
    ylabel: str | None = None,
) -> dict[str, Any]:
    """
    Build the plotly-compatible layout of an OncoPrint.

    Args:
        viewport: Viewport state owned by the component
        gene_labels: Formatted gene labels in gene axis order
        xlabel: Title of the sample axis
        ylabel: Title of the gene axis

    Returns:
        Layout dict with stacked bar mode and both axes
    """
    return {
        "barmode": "stack",
        "hovermode": "closest",
        "xaxis": x_axis_layout(viewport, xlabel),
        "yaxis": y_axis_layout(gene_labels, ylabel),
    }
