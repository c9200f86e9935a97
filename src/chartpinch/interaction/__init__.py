"""Gesture handling that rescales chart axes."""

from chartpinch.interaction.contexts import GestureSample, Pointer, PressContext
from chartpinch.interaction.pinch import InteractionState, PinchGestureController

__all__ = [
    "GestureSample",
    "Pointer",
    "PressContext",
    "InteractionState",
    "PinchGestureController",
]
