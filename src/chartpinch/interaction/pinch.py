# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Pinch-to-zoom controller that rescales chart axes from a gesture stream."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chartpinch.app.config import PinchConfig
from chartpinch.core.limits import NumericRange, RangeLimiter, field_range
from chartpinch.core.scales import AxisScale, ScaleKind
from chartpinch.interaction.contexts import ChartHost, GestureSample, Point, PressContext
from chartpinch.interaction.direction import classify_axes, eligible_axes
from chartpinch.interaction.zoomers import (
    zoom_category_scale,
    zoom_linear_scale,
    zoom_time_category_scale,
)

log = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class InteractionState:
    """Mutable state owned by one controller for the life of its chart."""

    pressed: bool = False
    current_scale: float | None = None
    last_update_timestamp: float = 0.0
    limits: RangeLimiter = field(default_factory=RangeLimiter)
    origin_ticks: dict[str, list[Any]] = field(default_factory=dict)
    zoom_accumulator: int = 0
    x_range: tuple[float, float] | None = None
    y_range: tuple[float, float] | None = None

    def invalidate(self) -> None:
        """Drop cached limit ranges and tick snapshots."""
        self.limits.clear()
        self.origin_ticks.clear()


class PinchGestureController:
    """Translate pinch start/update/end events into axis rescaling.

    The zoom step is throttled to one per ``throttle_ms`` but the cumulative
    scale is tracked on every tick, so the next accepted step still sees the
    full change since the last one.
    """

    def __init__(
        self,
        host: ChartHost,
        config: PinchConfig | None = None,
        *,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.host = host
        self.config = config or PinchConfig()
        self.state = InteractionState()
        self._clock = clock or _now_ms

        host.register_listener(data_changed=self.invalidate, cleared=self.invalidate)

        # Tooltips only follow long presses while this interaction is attached.
        self.press_enabled = host.has_tooltip()
        if self.press_enabled:
            host.set_tooltip_enabled(False)
        log.debug("PinchGestureController attached (mode=%s)", self.config.mode)

    # ------------------------------------------------------------------ lifecycle
    def on_gesture_start(self) -> None:
        if self.state.pressed:
            return
        self.state.current_scale = 1.0

    def on_gesture_update(self, sample: GestureSample) -> None:
        if self.state.pressed:
            return
        self._handle_pinch(sample)

    def on_gesture_end(self, sample: GestureSample) -> None:
        if self.state.pressed:
            return
        self._handle_pinch(sample)
        self.state.current_scale = None

    def on_press(self, press: PressContext) -> None:
        if not self.press_enabled:
            return
        self.state.pressed = True
        self.host.set_tooltip_enabled(True)
        self.host.show_tooltip(press.center)

    def on_reset(self) -> None:
        self.state.current_scale = None
        if not self.host.has_tooltip():
            return
        self.state.pressed = False
        self.host.hide_tooltip()
        self.host.set_tooltip_enabled(False)

    def invalidate(self) -> None:
        log.debug("Chart data changed; clearing pinch caches")
        self.state.invalidate()

    # ------------------------------------------------------------------ pipeline
    def _handle_pinch(self, sample: GestureSample) -> None:
        state = self.state
        if sample.scale <= 0:
            log.debug("Ignoring pinch sample with non-positive scale %r", sample.scale)
            return
        current = state.current_scale
        if current is None:
            log.debug("Pinch update without a start; using baseline scale")
            current = 1.0
        diff = 1 / current * sample.scale

        origin_x, origin_y = self.host.surface_origin()
        center = (sample.center[0] - origin_x, sample.center[1] - origin_y)
        which = classify_axes(sample.pointers)

        now = sample.timestamp if sample.timestamp is not None else self._clock()
        if now - state.last_update_timestamp >= self.config.throttle_ms:
            self._do_zoom(diff, center, which)
            self.host.request_redraw()
            state.last_update_timestamp = now

        state.current_scale = sample.scale

    def _do_zoom(self, diff: float, center: Point, which: str | None) -> None:
        host = self.host
        axes = eligible_axes(self.config.mode, which)
        data = host.get_dataset()

        if axes.x:
            x_scale = host.get_x_scale()
            if x_scale is not None:
                limit = self.state.limits.get(x_scale, data)
                if x_scale.kind is ScaleKind.TIME_CATEGORY:
                    self._zoom_time_category(x_scale, diff, center, limit)
                elif x_scale.kind is ScaleKind.CATEGORY:
                    self._zoom_category(x_scale, diff, center, limit)
                elif x_scale.kind is ScaleKind.LINEAR:
                    self._zoom_linear(x_scale, diff, center, "x", limit)
                else:
                    log.debug("Skipping x scale %s of kind %s", x_scale.field, x_scale.kind.value)
                self.state.x_range = field_range(host.get_col_def(x_scale.field), limit, x_scale.kind)

        if axes.y:
            y_scales = host.get_y_scales()
            for y_scale in y_scales:
                limit = self.state.limits.get(y_scale, data)
                if y_scale.kind is ScaleKind.LINEAR:
                    self._zoom_linear(y_scale, diff, center, "y", limit)
            if y_scales:
                first = y_scales[0]
                self.state.y_range = field_range(
                    host.get_col_def(first.field), self.state.limits.get(first, data), first.kind
                )

    def _zoom_linear(
        self, scale: AxisScale, zoom: float, center: Point, axis: str, limit: Any
    ) -> None:
        if not isinstance(limit, NumericRange):
            return
        changes = zoom_linear_scale(
            scale,
            zoom,
            center,
            axis,
            limit=limit,
            coord=self.host.get_coord(),
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale,
        )
        if changes is not None:
            self._apply(scale.field, changes)

    def _zoom_category(self, scale: AxisScale, zoom: float, center: Point, limit: Any) -> None:
        ticks = self._origin_ticks(scale)
        accumulator, values = zoom_category_scale(
            scale,
            zoom,
            center,
            origin_values=limit,
            coord=self.host.get_coord(),
            accumulator=self.state.zoom_accumulator,
            sensitivity=self.config.sensitivity,
        )
        self.state.zoom_accumulator = accumulator
        if values is not None:
            self._apply(scale.field, {"values": values, "ticks": list(ticks)})

    def _zoom_time_category(
        self, scale: AxisScale, zoom: float, center: Point, limit: Any
    ) -> None:
        ticks = self._origin_ticks(scale)
        values = zoom_time_category_scale(
            scale,
            zoom,
            center,
            origin_values=limit,
            coord=self.host.get_coord(),
            min_scale=self.config.min_scale,
            max_scale=self.config.max_scale,
        )
        if values is not None:
            self._apply(scale.field, {"values": values, "ticks": list(ticks)})

    def _origin_ticks(self, scale: AxisScale) -> list[Any]:
        ticks = self.state.origin_ticks.get(scale.field)
        if ticks is None:
            ticks = list(scale.ticks)
            self.state.origin_ticks[scale.field] = ticks
        return ticks

    def _apply(self, field_name: str, changes: Mapping[str, Any]) -> None:
        col_def = self.host.get_col_def(field_name) or {}
        config = {**col_def, **changes}
        log.debug("Rescaling %s: %s", field_name, {k: changes[k] for k in changes if k != "ticks"})
        self.host.set_axis_scale(field_name, config)


__all__ = ["InteractionState", "PinchGestureController"]
