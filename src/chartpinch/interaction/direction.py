"""Which axes a pinch step should affect."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartpinch.interaction.contexts import Pointer

# Finger-spread ratios (dx / dy) inside this open band count as diagonal.
DIAGONAL_RATIO_LOW = 0.3
DIAGONAL_RATIO_HIGH = 1.7


@dataclass(frozen=True)
class AxisSelection:
    x: bool
    y: bool


def classify_axes(pointers: Sequence[Pointer]) -> str:
    """Classify finger geometry as ``"x"``, ``"y"`` or diagonal ``"xy"``.

    Callers guarantee at least two pointers. Horizontally aligned fingers
    (no vertical spread) resolve to ``"x"``.
    """

    first, second = pointers[0], pointers[1]
    dx = abs(first.client_x - second.client_x)
    dy = abs(first.client_y - second.client_y)
    if dy == 0:
        return "x"
    ratio = dx / dy
    if DIAGONAL_RATIO_LOW < ratio < DIAGONAL_RATIO_HIGH:
        return "xy"
    return "x" if dx > dy else "y"


def direction_enabled(mode: str | None, direction: str) -> bool:
    """Return whether ``mode`` (e.g. ``"xy"``) includes ``direction``."""

    if mode is None:
        return True
    return direction in mode


def resolve_axes(mode: str | None, classified: str | None = None) -> AxisSelection:
    """Pick the axes for one step.

    Only the ``"xy"`` mode follows the finger geometry; every other mode
    resolves to both axes and is narrowed by :func:`eligible_axes`.
    """

    which = classified if mode == "xy" and classified is not None else "xy"
    return AxisSelection(x=direction_enabled(which, "x"), y=direction_enabled(which, "y"))


def eligible_axes(mode: str | None, classified: str | None = None) -> AxisSelection:
    """Axes permitted by both the configured mode and the resolved selection."""

    resolved = resolve_axes(mode, classified)
    return AxisSelection(
        x=resolved.x and direction_enabled(mode, "x"),
        y=resolved.y and direction_enabled(mode, "y"),
    )


__all__ = [
    "AxisSelection",
    "classify_axes",
    "direction_enabled",
    "resolve_axes",
    "eligible_axes",
]
