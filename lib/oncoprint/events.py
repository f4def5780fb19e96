"""
Interaction event normalization for OncoPrint plots.

The chart surface emits click, hover and relayout events in several raw
shapes. Each raw event is matched against CLASSIFIERS in order (point
selection, explicit x range, x autorange) and the first match wins. Events
that match nothing are republished unchanged as "Other".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger

from .schema import (
    AutoscaleEvent,
    EventType,
    NormalizedEvent,
    PassthroughEvent,
    PointEvent,
    ViewportState,
    ZoomEvent,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    Classifier = Callable[[Mapping[str, Any]], NormalizedEvent | None]


PRESS_ACTIONS = frozenset({"mousedown", "pointerdown", "click"})
MOVE_ACTIONS = frozenset({"mousemove", "pointermove"})

RANGE_START_KEY = "xaxis.range[0]"
RANGE_END_KEY = "xaxis.range[1]"
RANGE_KEY = "xaxis.range"
AUTORANGE_KEY = "xaxis.autorange"


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _device_action(raw: Mapping[str, Any]) -> Any:
    event = raw.get("event")
    if isinstance(event, Mapping):
        return event.get("type")
    return getattr(event, "type", None)


def classify_point_selection(raw: Mapping[str, Any]) -> NormalizedEvent | None:
    """Click on press, hover on move, raw passthrough for other actions."""
    points = raw.get("points")
    if not _is_list(points) or len(points) == 0:
        return None

    action = _device_action(raw)
    if action in PRESS_ACTIONS:
        event_type = EventType.CLICK
    elif action in MOVE_ACTIONS:
        event_type = EventType.HOVER
    else:
        return PassthroughEvent(raw=raw)

    point = points[0]
    if not isinstance(point, Mapping) or "x" not in point or "y" not in point:
        return PassthroughEvent(raw=raw)

    data = point.get("data")
    name = data.get("name") if isinstance(data, Mapping) else point.get("name")

    return PointEvent(
        event_type=event_type,
        name=name,
        text=point.get("text"),
        x=point["x"],
        y=point["y"],
    )


def classify_explicit_range(raw: Mapping[str, Any]) -> NormalizedEvent | None:
    """Zoom from paired bound keys or from a two-element range; both bounds must be set."""
    if RANGE_START_KEY in raw and RANGE_END_KEY in raw:
        x_start, x_end = raw[RANGE_START_KEY], raw[RANGE_END_KEY]
    else:
        bounds = raw.get(RANGE_KEY)
        if not _is_list(bounds) or len(bounds) != 2:  # noqa: PLR2004
            return None
        x_start, x_end = bounds

    if x_start is None or x_end is None:
        return None
    return ZoomEvent(x_start=x_start, x_end=x_end)


def classify_autorange(raw: Mapping[str, Any]) -> NormalizedEvent | None:
    if raw.get(AUTORANGE_KEY) is True:
        return AutoscaleEvent()
    return None


# Precedence order matters: an event carrying several signals is classified
# by the first matching entry.
CLASSIFIERS: tuple[Classifier, ...] = (
    classify_point_selection,
    classify_explicit_range,
    classify_autorange,
)


def classify(raw: Any) -> NormalizedEvent:
    """
    Classify one raw chart event.

    Args:
        raw: Event as emitted by the chart surface, usually a dict

    Returns:
        The normalized event; PassthroughEvent when nothing matches
    """
    if not isinstance(raw, Mapping):
        return PassthroughEvent(raw=raw)

    for classifier in CLASSIFIERS:
        event = classifier(raw)
        if event is not None:
            return event

    return PassthroughEvent(raw=raw)


class InteractionNormalizer:
    """
    Classifies raw chart events, keeps the viewport in sync and notifies
    the caller.

    Zoom pins the viewport to the selected range and Autoscale resets it.
    The notification sink is optional; without one only the viewport is
    updated.
    """

    def __init__(
        self,
        viewport: ViewportState | None = None,
        on_change: Callable[[Any], None] | None = None,
    ) -> None:
        self.viewport = viewport if viewport is not None else ViewportState()
        self.on_change = on_change

    def handle(self, raw: Any) -> NormalizedEvent:
        event = classify(raw)
        self._apply(event)

        if self.on_change is not None:
            self.on_change(event.to_payload())

        return event

    def _apply(self, event: NormalizedEvent) -> None:
        match event:
            case ZoomEvent(x_start=x_start, x_end=x_end):
                self.viewport.pin(x_start, x_end)
                logger.debug(f"Pinned x range to [{x_start}, {x_end}]")
            case AutoscaleEvent():
                self.viewport.reset()
                logger.debug("Reset x range to autorange")
            case _:
                pass
