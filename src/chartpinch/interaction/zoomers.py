# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Per-scale-kind rescaling for one pinch step.

Each zoomer is a pure function of the current scale and the incremental zoom
factor. A factor above 1 (fingers spreading) narrows what is visible, below 1
widens it. Zoomers return the scale changes to apply, or ``None`` when the
step leaves the axis untouched.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

from chartpinch.core.limits import NumericRange
from chartpinch.core.scales import AxisScale, ScaleKind
from chartpinch.interaction.contexts import Coord, Point

log = logging.getLogger(__name__)

DEFAULT_TIME_MAX_SCALE = 4.0
DEFAULT_TIME_MIN_SCALE = 1.0


def zoom_linear_scale(
    scale: AxisScale,
    zoom: float,
    center: Point,
    axis: str,
    *,
    limit: NumericRange,
    coord: Coord,
    min_scale: float | None = None,
    max_scale: float | None = None,
) -> dict[str, Any] | None:
    """Rescale a numeric axis around the data value under ``center``.

    ``min_scale`` caps how wide the window may grow (``origin / min_scale``)
    and ``max_scale`` how narrow it may get (``origin / max_scale``).
    """

    if scale.kind is not ScaleKind.LINEAR:
        return None

    lo, hi = scale.min, scale.max
    value_range = hi - lo
    origin_range = limit.span

    new_diff = value_range * (zoom - 1)
    if min_scale and zoom < 1:
        new_diff = max(value_range - origin_range / min_scale, new_diff)
    if max_scale and zoom >= 1:
        new_diff = min(value_range - origin_range / max_scale, new_diff)

    fx, fy = coord.invert_point(center)
    percent = fx if axis == "x" else fy
    min_delta = new_diff * percent
    max_delta = new_diff * (1 - percent)
    return {"min": lo + min_delta, "max": hi - max_delta, "nice": False}


def zoom_category_scale(
    scale: AxisScale,
    zoom: float,
    center: Point,
    *,
    origin_values: Sequence[Any],
    coord: Coord,
    accumulator: int,
    sensitivity: int,
) -> tuple[int, list[Any] | None]:
    """Shift an ordered category window by one index once pressure builds up.

    Returns the updated accumulator and the new visible values (``None`` if
    the threshold was not crossed).
    """

    if zoom > 1:
        accumulator += 1
    elif zoom < 1:
        accumulator -= 1
    if abs(accumulator) <= sensitivity:
        return accumulator, None

    values = scale.values
    if not values or values[0] not in origin_values or values[-1] not in origin_values:
        log.debug("Category window of %s is not part of its limit range", scale.field)
        return 0, None

    min_index = origin_values.index(values[0])
    max_index = origin_values.index(values[-1])
    last_index = len(origin_values) - 1
    chart_center = (coord.start[0] + coord.end[0]) / 2
    right_side = center[0] >= chart_center

    if accumulator < 0:
        # Widen on the side away from the fingers, unless that edge is exhausted.
        if right_side:
            if min_index <= 0:
                max_index = min(last_index, max_index + 1)
            else:
                min_index = max(0, min_index - 1)
        else:
            if max_index >= last_index:
                min_index = max(0, min_index - 1)
            else:
                max_index = min(last_index, max_index + 1)
    elif right_side:
        if min_index < max_index:
            min_index += 1
    elif max_index > min_index:
        max_index -= 1

    return 0, list(origin_values[min_index : max_index + 1])


def zoom_time_category_scale(
    scale: AxisScale,
    zoom: float,
    center: Point,
    *,
    origin_values: Sequence[Any],
    coord: Coord,
    min_scale: float | None = None,
    max_scale: float | None = None,
) -> list[Any] | None:
    """Move both edges of a time-bucket window at once.

    The visible count stays within ``[N / max_scale, N / min_scale]``.
    """

    origin_len = len(origin_values)
    min_count = origin_len / (max_scale or DEFAULT_TIME_MAX_SCALE)
    max_count = origin_len / (min_scale or DEFAULT_TIME_MIN_SCALE)

    values = list(scale.values)
    count = len(values)
    if not count:
        return None
    percent, _ = coord.invert_point(center)
    percent = min(max(percent, 0.0), 1.0)
    delta_count = int(count * abs(zoom - 1))

    if zoom >= 1 and count > min_count:
        delta_count = min(delta_count, count - max(1, math.ceil(min_count)))
        if delta_count <= 0:
            return None
        min_delta = int(delta_count * percent)
        max_delta = delta_count - min_delta
        return values[min_delta : count - max_delta]

    if zoom < 1 and count < max_count:
        delta_count = min(delta_count, math.floor(max_count) - count)
        if delta_count <= 0:
            return None
        if values[0] not in origin_values or values[-1] not in origin_values:
            log.debug("Time window of %s is not part of its limit range", scale.field)
            return None
        min_delta = int(delta_count * percent)
        max_delta = delta_count - min_delta
        first_index = origin_values.index(values[0])
        last_index = origin_values.index(values[-1])
        min_index = max(0, first_index - min_delta)
        max_index = min(last_index + 1 + max_delta, origin_len)
        return list(origin_values[min_index:max_index])

    return None


__all__ = [
    "DEFAULT_TIME_MAX_SCALE",
    "DEFAULT_TIME_MIN_SCALE",
    "zoom_linear_scale",
    "zoom_category_scale",
    "zoom_time_category_scale",
]
