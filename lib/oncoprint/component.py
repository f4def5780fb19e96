"""
The OncoPrint component.

Holds the caller's configuration and the viewport state of one live plot,
builds figure data for the chart surface and routes raw chart events
through the interaction normalizer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from .events import InteractionNormalizer
from .layout import build_layout
from .matrix import DEFAULT_BACKGROUND_COLOR, DEFAULT_PADDING, MatrixResult, build_matrix
from .schema import AlterationRecord, NormalizedEvent, ViewportState


class OncoPrintConfig(BaseModel):
    """Caller-facing configuration of an OncoPrint."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="DOM id of the plot container")
    data: list[AlterationRecord] = Field(default_factory=list)
    padding: Annotated[float, Field(gt=0, lt=0.5)] = DEFAULT_PADDING
    sample_color: str = Field(
        default=DEFAULT_BACKGROUND_COLOR,
        description="Color of cells without alterations",
    )
    xlabel: str | None = Field(default=None, description="Title of the sample axis")
    ylabel: str | None = Field(default=None, description="Title of the gene axis")
    full_width: bool = Field(
        default=True,
        description="Let the plot autosize to the width of its container",
    )
    on_change: Callable[[Any], None] | None = Field(
        default=None,
        exclude=True,
        description="Notification sink receiving normalized event payloads",
    )


class OncoPrint:
    """
    One live OncoPrint plot.

    The viewport state is created with the component and survives
    re-renders and configuration updates; only chart events change it.
    """

    def __init__(self, config: OncoPrintConfig | None = None, **options: Any) -> None:
        if config is not None and options:
            msg = f"Pass either a config or keyword options, not both (got {sorted(options)})"
            raise TypeError(msg)
        self.config = config if config is not None else OncoPrintConfig(**options)
        self.viewport = ViewportState()
        self.normalizer = InteractionNormalizer(self.viewport, self.config.on_change)

    def update(self, **changes: Any) -> None:
        """Replace configuration values; the viewport is left as is."""
        values = {name: getattr(self.config, name) for name in OncoPrintConfig.model_fields}
        values.update(changes)
        self.config = OncoPrintConfig(**values)
        self.normalizer.on_change = self.config.on_change

    def build(self) -> MatrixResult:
        return build_matrix(
            self.config.data,
            padding=self.config.padding,
            background_color=self.config.sample_color,
        )

    def get_data(self) -> list[dict[str, Any]]:
        """Return the trace dicts for the chart surface."""
        return self.build().to_traces()

    def get_layout(self, gene_labels: list[str] | None = None) -> dict[str, Any]:
        """Return the layout dict for the current viewport."""
        if gene_labels is None:
            gene_labels = self.build().gene_labels
        layout = build_layout(
            self.viewport,
            gene_labels,
            xlabel=self.config.xlabel,
            ylabel=self.config.ylabel,
        )
        layout["autosize"] = self.config.full_width
        return layout

    def figure(self) -> dict[str, Any]:
        """Return traces and layout in one render pass."""
        result = self.build()
        return {
            "data": result.to_traces(),
            "layout": self.get_layout(result.gene_labels),
        }

    def handle_change(self, raw: Any) -> NormalizedEvent:
        """Entry point for click, hover and relayout events of the chart."""
        return self.normalizer.handle(raw)
