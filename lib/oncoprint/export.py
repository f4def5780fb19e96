"""
Static export of OncoPrint plots with Altair.

Draws the same layers as the interactive plot as a layered Vega-Lite chart
and saves it as a self-contained HTML file or a static SVG/PNG image.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import altair as alt
import polars as pl

if TYPE_CHECKING:
    from .matrix import MatrixResult
    from .schema import BarLayer, ViewportState


# Band height of the background layer, which has no explicit width
BACKGROUND_BAND = 0.9
ROW_HEIGHT = 25
COLUMN_WIDTH = 12

TITLE_COLOR = "#475569"
LABEL_COLOR = "#1e293b"

# Keyword arguments passed to Chart.save per output format. Exported pages
# keep only the image export action of the embedded chart.
SAVE_OPTIONS: dict[str, dict] = {
    "html": {
        "embed_options": {
            "renderer": "svg",
            "actions": {"export": True, "source": False, "compiled": False, "editor": False},
        },
    },
    "svg": {},
    "png": {"scale_factor": 2},
}


@alt.theme.register("oncoprint", enable=True)
def _oncoprint_theme() -> alt.theme.ThemeConfig:
    """
    Matrix-style theme: no axis lines or ticks, gene labels kept whole,
    legend of alteration layers below the plot.
    """
    axis = {
        "domain": False,
        "ticks": False,
        "grid": False,
        "labelColor": LABEL_COLOR,
        "titleColor": TITLE_COLOR,
        "titleFontWeight": "normal",
    }
    return alt.theme.ThemeConfig(
        {
            "background": "#ffffff",
            "config": {
                "font": "Helvetica, Arial, sans-serif",
                "title": {"fontSize": 14, "anchor": "start", "color": LABEL_COLOR},
                "axisX": axis,
                "axisY": {**axis, "labelLimit": 0, "labelPadding": 6, "labelFontStyle": "italic"},
                "legend": {
                    "orient": "bottom",
                    "direction": "horizontal",
                    "symbolType": "square",
                    "titleColor": TITLE_COLOR,
                    "labelColor": LABEL_COLOR,
                },
                "view": {"stroke": None},
            },
        }
    )


def layer_frame(layer: BarLayer) -> pl.DataFrame:
    """
    Convert one bar layer to long format.

    Returns:
        DataFrame with columns: layer, gene, start, end, text
    """
    return pl.DataFrame(
        {
            "layer": [layer.name] * len(layer),
            "gene": layer.y,
            "start": layer.base,
            "end": [base + length for base, length in zip(layer.base, layer.x, strict=True)],
            "text": [text.replace("<br>", ": ") for text in layer.text],
        },
        schema={
            "layer": pl.Utf8,
            "gene": pl.Utf8,
            "start": pl.Float64,
            "end": pl.Float64,
            "text": pl.Utf8,
        },
    )


def oncoprint_chart(
    result: MatrixResult,
    viewport: ViewportState | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    title: str | None = None,
) -> alt.LayerChart | None:
    """
    Build a layered Altair chart from a built OncoPrint matrix.

    Args:
        result: Output of build_matrix
        viewport: Pinned x range to apply, if any
        xlabel: Title of the sample axis
        ylabel: Title of the gene axis
        title: Chart title

    Returns:
        The layered chart, or None when the matrix has no cells
    """
    if len(result.background) == 0:
        return None

    alt.data_transformers.disable_max_rows()

    if viewport is not None and not viewport.is_autorange:
        x_domain = [viewport.x_start, viewport.x_end]
    else:
        x_domain = [0, len(result.samples)]

    # One legend entry per display name; unknown types share the fallback name
    legend = {layer.name: layer.color for layer in result.traces}

    charts = []
    for layer in result.traces:
        if len(layer) == 0:
            continue
        band = layer.width if layer.width is not None else BACKGROUND_BAND
        charts.append(
            alt.Chart(layer_frame(layer))
            .mark_bar(height={"band": band}, clip=True)
            .encode(
                alt.X("start:Q")
                .scale(domain=x_domain, nice=False)
                .axis(labels=False, grid=False)
                .title(xlabel or ""),
                alt.X2("end"),
                alt.Y("gene:N").sort(result.gene_labels).title(ylabel or ""),
                alt.Color("layer:N")
                .scale(domain=list(legend), range=list(legend.values()))
                .title("Alteration"),
                tooltip=[alt.Tooltip("text:N", title="Sample")],
            ),
        )

    chart = alt.layer(*charts).properties(
        width=max(200, len(result.samples) * COLUMN_WIDTH),
        height=max(100, len(result.genes) * ROW_HEIGHT),
    )
    if title:
        chart = chart.properties(title=title)
    return chart


def save_chart(
    chart: alt.TopLevelMixin,
    output_path: Path,
    formats: list[str] | None = None,
) -> list[Path]:
    """
    Write a chart next to output_path, one file per format.

    All formats are checked before anything is written, so an unsupported
    format never leaves a partial set of files behind. SVG and PNG need
    vl-convert-python at save time.

    Returns:
        Saved paths, in the order of formats
    """
    formats = formats or ["html"]
    unsupported = [fmt for fmt in formats if fmt not in SAVE_OPTIONS]
    if unsupported:
        msg = (
            f"Cannot export an OncoPrint as {', '.join(unsupported)}; "
            f"choose from {', '.join(SAVE_OPTIONS)}."
        )
        raise ValueError(msg)

    output_path = Path(output_path)
    saved_paths = [output_path.with_suffix(f".{fmt}") for fmt in formats]
    for fmt, path in zip(formats, saved_paths, strict=True):
        chart.save(path, **SAVE_OPTIONS[fmt])

    return saved_paths


def write_oncoprint(
    result: MatrixResult,
    output_path: Path,
    formats: list[str] | None = None,
    viewport: ViewportState | None = None,
    xlabel: str | None = None,
    ylabel: str | None = None,
    title: str | None = None,
) -> list[Path]:
    """
    Export an OncoPrint matrix as static chart files.

    Returns:
        List of paths to saved files; empty when the matrix has no cells
    """
    chart = oncoprint_chart(result, viewport, xlabel=xlabel, ylabel=ylabel, title=title)
    if chart is None:
        return []
    return save_chart(chart, output_path, formats)
