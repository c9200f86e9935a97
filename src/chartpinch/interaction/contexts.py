"""Gesture contexts and the chart host interface used by pinch zooming."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import pandas as pd

from chartpinch.core.scales import AxisScale

Point = tuple[float, float]


@dataclass(frozen=True)
class Pointer:
    """One finger of a multi-touch gesture, in screen coordinates."""

    client_x: float
    client_y: float


@dataclass(frozen=True)
class GestureSample:
    """One frame of a two-finger pinch gesture.

    ``scale`` is cumulative since the gesture started (1.0 = unchanged).
    ``timestamp`` is in milliseconds; ``None`` lets the controller read its
    own clock.
    """

    scale: float
    center: Point
    pointers: Sequence[Pointer] = field(default_factory=tuple)
    timestamp: Optional[float] = None


@dataclass(frozen=True)
class PressContext:
    """A recognised long press at ``center`` (screen coordinates)."""

    center: Point
    timestamp: Optional[float] = None


class Coord(Protocol):
    """Coordinate transform between surface pixels and normalised plot space."""

    start: Point  # bottom-left corner of the plot area
    end: Point  # top-right corner of the plot area

    def invert_point(self, point: Point) -> Point:
        ...


class ChartHost(Protocol):
    """Operations the pinch controller needs from the owning chart."""

    def get_dataset(self) -> pd.DataFrame:
        ...

    def get_coord(self) -> Coord:
        ...

    def get_x_scale(self) -> Optional[AxisScale]:
        ...

    def get_y_scales(self) -> list[AxisScale]:
        ...

    def get_col_def(self, field_name: str) -> Optional[dict[str, Any]]:
        ...

    def set_axis_scale(self, field_name: str, config: Mapping[str, Any]) -> None:
        ...

    def surface_origin(self) -> Point:
        ...

    def request_redraw(self) -> None:
        ...

    def has_tooltip(self) -> bool:
        ...

    def set_tooltip_enabled(self, enabled: bool) -> None:
        ...

    def show_tooltip(self, point: Point) -> None:
        ...

    def hide_tooltip(self) -> None:
        ...

    def register_listener(
        self,
        *,
        data_changed: Callable[[], None] | None = None,
        cleared: Callable[[], None] | None = None,
    ) -> None:
        ...


__all__ = ["Point", "Pointer", "GestureSample", "PressContext", "Coord", "ChartHost"]
