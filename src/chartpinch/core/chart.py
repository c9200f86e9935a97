# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""In-memory chart model that pinch interactions attach to."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from chartpinch.core.scales import AxisScale, build_scale

log = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass
class CartesianCoord:
    """Plot rectangle in surface pixels (y grows downwards).

    Normalised coordinates run left-to-right and bottom-to-top.
    """

    left: float
    top: float
    width: float
    height: float

    @property
    def start(self) -> Point:
        return (self.left, self.top + self.height)

    @property
    def end(self) -> Point:
        return (self.left + self.width, self.top)

    def invert_point(self, point: Point) -> Point:
        x, y = point
        fx = (x - self.left) / self.width if self.width else 0.0
        fy = (self.top + self.height - y) / self.height if self.height else 0.0
        return (fx, fy)


class Chart:
    """Data, column definitions and view state of a single 2-D chart.

    Scales are rebuilt lazily from the data and ``col_defs``; reconfiguring a
    field through :meth:`set_axis_scale` replaces its column definition.
    """

    def __init__(
        self,
        data: pd.DataFrame,
        *,
        x: str,
        y: str | Sequence[str],
        col_defs: Mapping[str, Mapping[str, Any]] | None = None,
        coord: CartesianCoord | None = None,
        tooltip: bool = False,
        origin: Point = (0.0, 0.0),
    ) -> None:
        self._data = data
        self.x_field = x
        self.y_fields = [y] if isinstance(y, str) else list(y)
        self.col_defs: dict[str, dict[str, Any]] = {
            name: dict(definition) for name, definition in (col_defs or {}).items()
        }
        self.coord = coord or CartesianCoord(0.0, 0.0, 100.0, 100.0)
        self.origin = origin

        self._scales: dict[str, AxisScale] = {}
        self._data_changed_listeners: list[Callable[[], None]] = []
        self._cleared_listeners: list[Callable[[], None]] = []
        self._redraw_handlers: list[Callable[[Chart], None]] = []

        self.tooltip_available = tooltip
        self.tooltip_enabled = tooltip
        self.tooltip_point: Point | None = None
        self.redraw_count = 0

    # ------------------------------------------------------------------ data
    def get_dataset(self) -> pd.DataFrame:
        return self._data

    def change_data(self, data: pd.DataFrame) -> None:
        """Replace the dataset and notify listeners."""
        self._data = data
        self._scales.clear()
        log.debug("Chart data changed (%d rows)", len(data))
        for listener in list(self._data_changed_listeners):
            listener()

    def clear(self) -> None:
        self._scales.clear()
        for listener in list(self._cleared_listeners):
            listener()

    def register_listener(
        self,
        *,
        data_changed: Callable[[], None] | None = None,
        cleared: Callable[[], None] | None = None,
    ) -> None:
        if data_changed is not None:
            self._data_changed_listeners.append(data_changed)
        if cleared is not None:
            self._cleared_listeners.append(cleared)

    # ------------------------------------------------------------------ scales
    def get_coord(self) -> CartesianCoord:
        return self.coord

    def get_scale(self, field_name: str) -> AxisScale:
        scale = self._scales.get(field_name)
        if scale is None:
            scale = build_scale(field_name, self.col_defs.get(field_name), self._data)
            self._scales[field_name] = scale
        return scale

    def get_x_scale(self) -> AxisScale:
        return self.get_scale(self.x_field)

    def get_y_scales(self) -> list[AxisScale]:
        return [self.get_scale(name) for name in self.y_fields]

    def get_col_def(self, field_name: str) -> dict[str, Any] | None:
        col_def = self.col_defs.get(field_name)
        return dict(col_def) if col_def is not None else None

    def set_axis_scale(self, field_name: str, config: Mapping[str, Any]) -> None:
        self.col_defs[field_name] = dict(config)
        self._scales.pop(field_name, None)

    def surface_origin(self) -> Point:
        return self.origin

    # ------------------------------------------------------------------ view
    def on_redraw(self, handler: Callable[[Chart], None]) -> None:
        self._redraw_handlers.append(handler)

    def request_redraw(self) -> None:
        self.redraw_count += 1
        for handler in list(self._redraw_handlers):
            handler(self)

    def has_tooltip(self) -> bool:
        return self.tooltip_available

    def set_tooltip_enabled(self, enabled: bool) -> None:
        self.tooltip_enabled = bool(enabled)

    def show_tooltip(self, point: Point) -> None:
        if not self.tooltip_enabled:
            return
        self.tooltip_point = point

    def hide_tooltip(self) -> None:
        self.tooltip_point = None


__all__ = ["CartesianCoord", "Chart"]
