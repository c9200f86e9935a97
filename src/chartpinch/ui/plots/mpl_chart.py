"""Matplotlib-backed chart host for pinch zooming."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from chartpinch.core.chart import Chart, Point
from chartpinch.core.limits import compute_limit_range
from chartpinch.core.scales import ScaleKind, to_timestamps

log = logging.getLogger(__name__)


class MplCoord:
    """Maps canvas-widget pixels (y down) onto an Axes' normalised space."""

    def __init__(self, ax: Any) -> None:
        self._ax = ax

    def _dpr(self) -> float:
        canvas = self._ax.figure.canvas
        return float(getattr(canvas, "device_pixel_ratio", 1.0) or 1.0)

    def _to_surface(self, x_disp: float, y_disp: float) -> Point:
        dpr = self._dpr()
        height = self._ax.figure.bbox.height
        return (x_disp / dpr, (height - y_disp) / dpr)

    @property
    def start(self) -> Point:
        bbox = self._ax.bbox
        return self._to_surface(bbox.x0, bbox.y0)

    @property
    def end(self) -> Point:
        bbox = self._ax.bbox
        return self._to_surface(bbox.x1, bbox.y1)

    def invert_point(self, point: Point) -> Point:
        dpr = self._dpr()
        height = self._ax.figure.bbox.height
        display = (point[0] * dpr, height - point[1] * dpr)
        fx, fy = self._ax.transAxes.inverted().transform(display)
        return float(fx), float(fy)


class MplChart(Chart):
    """Chart drawn as line series on a matplotlib ``Axes``.

    Category fields are laid out at integer positions over their full value
    list; zooming them moves the x limits across those positions.
    """

    def __init__(
        self,
        ax: Any,
        data: pd.DataFrame,
        *,
        x: str,
        y: str | Sequence[str],
        col_defs: Mapping[str, Mapping[str, Any]] | None = None,
        tooltip: bool = False,
    ) -> None:
        super().__init__(data, x=x, y=y, col_defs=col_defs, tooltip=tooltip)
        self.ax = ax
        self.coord = MplCoord(ax)
        self._positions: dict[Any, int] = {}
        self._tooltip_line: Any = None
        self.render()

    # ------------------------------------------------------------------ drawing
    def render(self) -> None:
        """Redraw all series from the current dataset."""
        ax = self.ax
        for line in list(ax.lines):
            line.remove()
        self._tooltip_line = None

        data = self.get_dataset()
        x_scale = self.get_x_scale()
        if x_scale.is_category:
            full = compute_limit_range(x_scale, data)
            self._positions = {value: i for i, value in enumerate(full)}
            raw = data[self.x_field].tolist()
            if x_scale.kind is ScaleKind.TIME_CATEGORY:
                raw = to_timestamps(raw)
            xs = [self._positions.get(value, float("nan")) for value in raw]
        else:
            self._positions = {}
            xs = data[self.x_field].tolist()

        for name in self.y_fields:
            ax.plot(xs, data[name].tolist(), label=name)
        self.apply_view()

    def apply_view(self) -> None:
        """Push the current scale state into the Axes limits and ticks."""
        ax = self.ax
        x_scale = self.get_x_scale()
        if x_scale.is_linear and x_scale.max > x_scale.min:
            ax.set_xlim(x_scale.min, x_scale.max)
        elif x_scale.is_category:
            visible = [v for v in x_scale.values if v in self._positions]
            if visible:
                lo = self._positions[visible[0]]
                hi = self._positions[visible[-1]]
                ax.set_xlim(lo - 0.5, hi + 0.5)
                ticks = [
                    v for v in x_scale.ticks if v in self._positions and lo <= self._positions[v] <= hi
                ]
                ax.set_xticks(
                    [self._positions[v] for v in ticks],
                    [self._format_tick(v, x_scale.kind) for v in ticks],
                )

        for y_scale in self.get_y_scales():
            if y_scale.is_linear and y_scale.max > y_scale.min:
                ax.set_ylim(y_scale.min, y_scale.max)

    @staticmethod
    def _format_tick(value: Any, kind: ScaleKind) -> str:
        if kind is ScaleKind.TIME_CATEGORY:
            return pd.Timestamp(value, unit="ms").strftime("%Y-%m-%d")
        return str(value)

    # ------------------------------------------------------------------ host overrides
    def change_data(self, data: pd.DataFrame) -> None:
        super().change_data(data)
        self.render()

    def request_redraw(self) -> None:
        self.apply_view()
        self.ax.figure.canvas.draw_idle()
        super().request_redraw()

    def show_tooltip(self, point: Point) -> None:
        super().show_tooltip(point)
        if self.tooltip_point is None:
            return
        fx, _ = self.coord.invert_point(point)
        lo, hi = self.ax.get_xlim()
        self.hide_tooltip_marker()
        self._tooltip_line = self.ax.axvline(lo + fx * (hi - lo), color="0.4", linewidth=0.8)
        self.ax.figure.canvas.draw_idle()

    def hide_tooltip(self) -> None:
        super().hide_tooltip()
        if self.hide_tooltip_marker():
            self.ax.figure.canvas.draw_idle()

    def hide_tooltip_marker(self) -> bool:
        if self._tooltip_line is None:
            return False
        self._tooltip_line.remove()
        self._tooltip_line = None
        return True


__all__ = ["MplChart", "MplCoord"]
