"""Full-dataset bounds used to clamp pinch zooming."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import pandas as pd

from chartpinch.core.scales import AxisScale, ScaleKind, distinct_values, to_timestamps

log = logging.getLogger(__name__)

__all__ = ["NumericRange", "LimitRange", "RangeLimiter", "compute_limit_range", "field_range"]


@dataclass(frozen=True)
class NumericRange:
    """Numeric ``[min, max]`` of a linear field across the whole dataset."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


# Category fields use the full ordered tuple of distinct values.
LimitRange = Union[NumericRange, tuple]


def compute_limit_range(scale: AxisScale, data: pd.DataFrame) -> LimitRange:
    """Compute the limit range of ``scale.field`` from the full dataset."""

    column = data[scale.field] if scale.field in data.columns else None

    if scale.kind is ScaleKind.TIME_CATEGORY:
        if column is None:
            return tuple(scale.values)
        return tuple(sorted(set(to_timestamps(distinct_values(column)))))

    if scale.kind is ScaleKind.CATEGORY:
        if column is None:
            return tuple(scale.values)
        return tuple(distinct_values(column))

    lo = scale.min
    hi = scale.max
    if column is not None:
        numeric = pd.to_numeric(column, errors="coerce").to_numpy(dtype=float)
        numeric = numeric[np.isfinite(numeric)]
        if numeric.size:
            data_lo, data_hi = float(numeric.min()), float(numeric.max())
            # The configured scale bounds widen the range, never narrow it.
            lo = data_lo if lo is None else min(data_lo, lo)
            hi = data_hi if hi is None else max(data_hi, hi)
    lo = 0.0 if lo is None else float(lo)
    hi = lo if hi is None else float(hi)
    return NumericRange(lo, hi)


class RangeLimiter:
    """Per-field cache of limit ranges, valid until the chart data changes."""

    def __init__(self) -> None:
        self._ranges: dict[str, LimitRange] = {}

    def get(self, scale: AxisScale, data: pd.DataFrame) -> LimitRange:
        limit = self._ranges.get(scale.field)
        if limit is None:
            limit = compute_limit_range(scale, data)
            self._ranges[scale.field] = limit
            log.debug("Computed limit range for %s (%s)", scale.field, scale.kind.value)
        return limit

    def peek(self, field_name: str) -> LimitRange | None:
        return self._ranges.get(field_name)

    def clear(self) -> None:
        self._ranges.clear()

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._ranges

    def __len__(self) -> int:
        return len(self._ranges)


def field_range(
    col_def: Mapping[str, Any] | None,
    limit: LimitRange,
    kind: ScaleKind,
) -> tuple[float, float]:
    """Return the visible part of ``limit`` as ``(min_ratio, max_ratio)``.

    A field without a column definition is reported as fully visible.
    """

    if not col_def:
        return 0.0, 1.0

    if kind is ScaleKind.LINEAR:
        if not isinstance(limit, NumericRange) or limit.span == 0:
            return 0.0, 1.0
        lo = col_def.get("min", limit.min)
        hi = col_def.get("max", limit.max)
        return (lo - limit.min) / limit.span, (hi - limit.min) / limit.span

    values = col_def.get("values")
    if not values or len(limit) < 2:
        return 0.0, 1.0
    if values[0] not in limit or values[-1] not in limit:
        return 0.0, 1.0
    last = len(limit) - 1
    return limit.index(values[0]) / last, limit.index(values[-1]) / last
