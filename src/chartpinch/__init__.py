# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for ChartPinch."""

from importlib import import_module

from chartpinch.app.config import PinchConfig, PinchConfigError
from chartpinch.core.chart import CartesianCoord, Chart
from chartpinch.core.scales import AxisScale, ScaleKind
from chartpinch.interaction.contexts import GestureSample, Pointer, PressContext
from chartpinch.interaction.pinch import InteractionState, PinchGestureController

_UI_EXPORTS = {
    "MplChart": ("chartpinch.ui.plots.mpl_chart", "MplChart"),
    "PinchGestureCanvas": ("chartpinch.ui.plots.gesture_canvas", "PinchGestureCanvas"),
}


def __getattr__(name: str):
    if name in _UI_EXPORTS:
        module_name, attr = _UI_EXPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'chartpinch' has no attribute {name!r}")


__version__ = "0.1.0"

__all__ = [
    "AxisScale",
    "ScaleKind",
    "CartesianCoord",
    "Chart",
    "GestureSample",
    "Pointer",
    "PressContext",
    "InteractionState",
    "PinchGestureController",
    "PinchConfig",
    "PinchConfigError",
    "MplChart",
    "PinchGestureCanvas",
]
