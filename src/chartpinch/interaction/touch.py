"""Turn raw touch points into pinch samples and long-press events."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from chartpinch.interaction.contexts import GestureSample, Point, Pointer, PressContext


@dataclass(frozen=True)
class PinchEvent:
    """A pinch lifecycle event: ``kind`` is ``"start"``, ``"update"`` or ``"end"``."""

    kind: str
    sample: GestureSample


def _distance(first: Pointer, second: Pointer) -> float:
    return math.hypot(first.client_x - second.client_x, first.client_y - second.client_y)


def _midpoint(first: Pointer, second: Pointer) -> Point:
    return ((first.client_x + second.client_x) / 2, (first.client_y + second.client_y) / 2)


class TouchTracker:
    """Two-finger pinch recogniser fed with the currently pressed touch points.

    The cumulative scale is the current finger distance over the distance at
    gesture start.
    """

    def __init__(self) -> None:
        self._start_distance: float | None = None
        self._last: GestureSample | None = None

    @property
    def active(self) -> bool:
        return self._start_distance is not None

    def process(self, points: Sequence[Pointer], timestamp: float) -> Optional[PinchEvent]:
        if len(points) < 2:
            return self._finish()

        first, second = points[0], points[1]
        distance = _distance(first, second)
        center = _midpoint(first, second)
        pair = (first, second)

        if self._start_distance is None:
            if distance <= 0:
                return None
            self._start_distance = distance
            self._last = GestureSample(1.0, center, pair, timestamp)
            return PinchEvent("start", self._last)

        self._last = GestureSample(distance / self._start_distance, center, pair, timestamp)
        return PinchEvent("update", self._last)

    def cancel(self) -> Optional[PinchEvent]:
        return self._finish()

    def _finish(self) -> Optional[PinchEvent]:
        if self._start_distance is None or self._last is None:
            self._start_distance = None
            return None
        last = self._last
        self._start_distance = None
        self._last = None
        return PinchEvent("end", last)


class PressDetector:
    """Single-finger long press gated by movement and hold time.

    A press fires once the finger has stayed within ``threshold`` pixels of
    where it went down for at least ``press_time`` milliseconds. Once fired or
    failed, nothing more happens until :meth:`release`.
    """

    IDLE = "idle"
    ARMED = "armed"
    FIRED = "fired"
    FAILED = "failed"

    def __init__(self, threshold: float = 9.0, press_time: float = 251.0) -> None:
        self.threshold = threshold
        self.press_time = press_time
        self.status = self.IDLE
        self._origin: Point | None = None
        self._down_at = 0.0

    @property
    def down(self) -> bool:
        return self.status != self.IDLE

    @property
    def tracking(self) -> bool:
        return self.status == self.ARMED

    def begin(self, point: Point, timestamp: float) -> None:
        self._origin = point
        self._down_at = timestamp
        self.status = self.ARMED

    def move(self, point: Point, timestamp: float) -> Optional[PressContext]:
        if not self.tracking:
            return None
        if math.hypot(point[0] - self._origin[0], point[1] - self._origin[1]) > self.threshold:
            self.cancel()
            return None
        return self.poll(timestamp)

    def poll(self, timestamp: float) -> Optional[PressContext]:
        if not self.tracking or timestamp - self._down_at < self.press_time:
            return None
        self.status = self.FIRED
        return PressContext(center=self._origin, timestamp=timestamp)

    def cancel(self) -> None:
        if self.status == self.ARMED:
            self.status = self.FAILED

    def release(self) -> None:
        self.status = self.IDLE
        self._origin = None


__all__ = ["PinchEvent", "TouchTracker", "PressDetector"]
