# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Touch-enabled matplotlib canvas that drives a pinch controller."""

from __future__ import annotations

import logging
import time

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg
from PyQt5.QtCore import QEvent, Qt, QTimer
from PyQt5.QtGui import QTouchEvent

from chartpinch.interaction.contexts import Pointer
from chartpinch.interaction.pinch import PinchGestureController
from chartpinch.interaction.touch import PressDetector, TouchTracker

log = logging.getLogger(__name__)


class PinchGestureCanvas(FigureCanvasQTAgg):
    """Matplotlib canvas that recognises two-finger pinches and long presses.

    Touch points are reported in widget coordinates, so the attached chart's
    surface origin is ``(0, 0)``.
    """

    def __init__(self, figure):
        super().__init__(figure)
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)

        self._controller: PinchGestureController | None = None
        self._tracker = TouchTracker()
        self._press = PressDetector()
        self._press_timer = QTimer(self)
        self._press_timer.setSingleShot(True)
        self._press_timer.timeout.connect(self._poll_press)

        # Debug counter
        self._touch_event_count = 0

    def attach(self, controller: PinchGestureController) -> None:
        """Route gestures on this canvas to ``controller``."""
        self._controller = controller
        config = controller.config
        self._press = PressDetector(threshold=config.press_threshold, press_time=config.press_time)
        log.info(f"PinchGestureCanvas: attached controller (mode={config.mode})")

    def event(self, event):
        """Override event handler to process touch events."""
        if event.type() in (
            QEvent.TouchBegin,
            QEvent.TouchUpdate,
            QEvent.TouchEnd,
            QEvent.TouchCancel,
        ):
            self._touch_event_count += 1
            log.debug(f"PinchGestureCanvas: touch event detected (count={self._touch_event_count})")
            self._handle_touch_event(event)
            event.accept()
            return True
        return super().event(event)

    def _handle_touch_event(self, event: QTouchEvent) -> None:
        controller = self._controller
        if controller is None:
            log.warning("PinchGestureCanvas: touch event without an attached controller")
            return

        now = time.monotonic() * 1000.0
        if event.type() == QEvent.TouchCancel:
            self._press.release()
            self._press_timer.stop()
            ended = self._tracker.cancel()
            if ended is not None:
                controller.on_gesture_end(ended.sample)
            controller.on_reset()
            return

        points = [
            Pointer(tp.pos().x(), tp.pos().y())
            for tp in event.touchPoints()
            if tp.state() != Qt.TouchPointReleased
        ]
        self._track_press(points, now)

        pinch = self._tracker.process(points, now)
        if pinch is not None:
            log.debug(f"PinchGestureCanvas: pinch {pinch.kind} scale={pinch.sample.scale:.3f}")
            if pinch.kind == "start":
                controller.on_gesture_start()
            elif pinch.kind == "update":
                controller.on_gesture_update(pinch.sample)
            else:
                controller.on_gesture_end(pinch.sample)

        if not points:
            # Last finger lifted.
            controller.on_reset()

    def _track_press(self, points: list[Pointer], now: float) -> None:
        if not self._controller.press_enabled:
            return
        if not points:
            self._press.release()
            self._press_timer.stop()
            return
        if len(points) > 1:
            self._press.cancel()
            self._press_timer.stop()
            return
        point = (points[0].client_x, points[0].client_y)
        if not self._press.down:
            self._press.begin(point, now)
            self._press_timer.start(int(self._press.press_time))
            return
        press = self._press.move(point, now)
        if press is not None:
            self._press_timer.stop()
            self._controller.on_press(press)
        elif not self._press.tracking:
            self._press_timer.stop()

    def _poll_press(self) -> None:
        if self._controller is None:
            return
        press = self._press.poll(time.monotonic() * 1000.0)
        if press is not None:
            log.info(f"PinchGestureCanvas: long press at {press.center}")
            self._controller.on_press(press)
