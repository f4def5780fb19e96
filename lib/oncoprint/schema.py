"""
Pydantic models for OncoPrint data and interaction events.

These models define the data exchanged with the embedding application and
with the external chart surface:
- Alteration records supplied by the caller on every render
- Bar layers emitted to the renderer as plotly-compatible traces
- The viewport state pinned by zoom events
- The normalized events republished to the caller's notification sink
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class AlterationType(str, Enum):
    """Known alteration types. Other type strings are rendered with a fallback style."""

    MUTATION = "MUTATION"
    CNA = "CNA"
    EXP = "EXP"
    FUSION = "FUSION"


KNOWN_ALTERATION_TYPES = frozenset(member.value for member in AlterationType)


class AlterationRecord(BaseModel):
    """A single alteration observed in one gene of one sample."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    sample: str = Field(min_length=1, description="Sample identifier")
    gene: str = Field(min_length=1, description="Gene identifier")
    alteration_type: str = Field(
        min_length=1,
        validation_alias=AliasChoices("alteration_type", "alterationType", "type"),
        description="Alteration type, e.g. MUTATION, CNA, EXP, FUSION",
    )
    alteration: str | None = Field(
        default=None,
        description="Protein change, CNA call, expression direction or fusion partner",
    )

    @field_validator("alteration_type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Upper-case known alteration types and keep unknown ones verbatim."""
        if isinstance(v, AlterationType):
            return v.value
        if isinstance(v, str) and v.strip().upper() in KNOWN_ALTERATION_TYPES:
            return v.strip().upper()
        return v

    @field_validator("alteration", mode="before")
    @classmethod
    def stringify_alteration(cls, v: Any) -> Any:
        """Accept numeric calls such as GISTIC -2..2; NaN means no call."""
        if isinstance(v, bool):
            return str(v)
        if isinstance(v, float) and v != v:  # noqa: PLR0124
            return None
        if isinstance(v, int | float):
            return str(v)
        return v

    @property
    def is_known_type(self) -> bool:
        return self.alteration_type in KNOWN_ALTERATION_TYPES


class BarLayer(BaseModel):
    """
    One horizontal stacked-bar layer of the matrix.

    `base` holds the left edge of each segment (column index plus padding),
    `x` the segment lengths and `y` the formatted gene label of each
    segment's row. `samples` and `genes` record the raw identifiers behind
    each segment and are not sent to the renderer.
    """

    name: str
    color: str
    base: list[float] = Field(default_factory=list)
    x: list[float] = Field(default_factory=list)
    y: list[str] = Field(default_factory=list)
    text: list[str] = Field(default_factory=list)
    width: float | None = Field(default=None, gt=0, le=1)
    orientation: Literal["h"] = "h"
    type: Literal["bar"] = "bar"
    hoverinfo: str = "text"
    samples: list[str] = Field(default_factory=list, exclude=True)
    genes: list[str] = Field(default_factory=list, exclude=True)

    def __len__(self) -> int:
        return len(self.base)

    def to_trace(self) -> dict[str, Any]:
        """Return the plotly-compatible trace dict for this layer."""
        trace = self.model_dump(exclude={"color"}, exclude_none=True)
        trace["marker"] = {"color": self.color}
        return trace


class ViewportState(BaseModel):
    """
    Pinned x-axis range of one live OncoPrint.

    Both bounds None means the axis is in autorange mode. Only the
    interaction normalizer writes this object; the layout reads it.
    """

    x_start: Any = None
    x_end: Any = None

    @property
    def is_autorange(self) -> bool:
        return self.x_start is None and self.x_end is None

    def pin(self, x_start: Any, x_end: Any) -> None:
        self.x_start = x_start
        self.x_end = x_end

    def reset(self) -> None:
        self.x_start = None
        self.x_end = None


class EventType(str, Enum):
    """Classification of a normalized interaction event."""

    CLICK = "Click"
    HOVER = "Hover"
    ZOOM = "Zoom"
    AUTOSCALE = "Autoscale"
    OTHER = "Other"


class PointEvent(BaseModel):
    """Click or hover on a bar segment, taken from the first selected point."""

    model_config = ConfigDict(frozen=True)

    event_type: Literal[EventType.CLICK, EventType.HOVER]
    name: Any = None
    text: Any = None
    x: Any = None
    y: Any = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "eventType": self.event_type.value,
            "name": self.name,
            "text": self.text,
            "x": self.x,
            "y": self.y,
        }


class ZoomEvent(BaseModel):
    """Explicit x-axis range selected on the chart surface."""

    model_config = ConfigDict(frozen=True)

    event_type: Literal[EventType.ZOOM] = EventType.ZOOM
    x_start: Any
    x_end: Any

    def to_payload(self) -> dict[str, Any]:
        return {
            "eventType": self.event_type.value,
            "xStart": self.x_start,
            "xEnd": self.x_end,
        }


class AutoscaleEvent(BaseModel):
    """Return of the x-axis to autorange."""

    model_config = ConfigDict(frozen=True)

    event_type: Literal[EventType.AUTOSCALE] = EventType.AUTOSCALE

    def to_payload(self) -> dict[str, Any]:
        return {"eventType": self.event_type.value}


class PassthroughEvent(BaseModel):
    """Any raw event the normalizer does not recognize, republished verbatim."""

    model_config = ConfigDict(frozen=True)

    event_type: Literal[EventType.OTHER] = EventType.OTHER
    raw: Any = None

    def to_payload(self) -> Any:
        return self.raw


NormalizedEvent = PointEvent | ZoomEvent | AutoscaleEvent | PassthroughEvent
