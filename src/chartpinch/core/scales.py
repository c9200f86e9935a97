# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Axis scale model derived from chart data and column definitions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd
from matplotlib.ticker import MaxNLocator

__all__ = [
    "ScaleKind",
    "AxisScale",
    "build_scale",
    "distinct_values",
    "to_timestamps",
]


class ScaleKind(Enum):
    """Kind of an axis scale; only the first three are zoomable."""

    LINEAR = "linear"
    CATEGORY = "cat"
    TIME_CATEGORY = "timeCat"
    LOG = "log"
    IDENTITY = "identity"

    @classmethod
    def parse(cls, value: Any) -> ScaleKind:
        if isinstance(value, cls):
            return value
        for kind in cls:
            if kind.value == value or kind.name.lower() == str(value).lower():
                return kind
        raise ValueError(f"Unknown scale type: {value!r}")


@dataclass
class AxisScale:
    """Current visible state of one axis field.

    ``min``/``max`` are meaningful for linear scales, ``values`` holds the
    visible ordered subset for category scales (millisecond timestamps for
    time categories).
    """

    field: str
    kind: ScaleKind
    min: float | None = None
    max: float | None = None
    values: list[Any] = field(default_factory=list)
    ticks: list[Any] = field(default_factory=list)
    nice: bool = True

    @property
    def is_linear(self) -> bool:
        return self.kind is ScaleKind.LINEAR

    @property
    def is_category(self) -> bool:
        return self.kind in (ScaleKind.CATEGORY, ScaleKind.TIME_CATEGORY)


def _to_python(value: Any) -> Any:
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value)
    if isinstance(value, np.timedelta64):
        return pd.Timedelta(value)
    return value.item() if isinstance(value, np.generic) else value


def distinct_values(column: pd.Series) -> list[Any]:
    """Return distinct non-null values of ``column`` in order of appearance.

    List-valued cells are flattened, matching how stacked/ranged series are
    stored.
    """

    if column.empty:
        return []
    if column.map(lambda v: isinstance(v, (list, tuple))).any():
        column = column.explode()
    return [_to_python(v) for v in pd.unique(column.dropna())]


def to_timestamps(values: Iterable[Any]) -> list[int]:
    """Convert dates/strings/numbers to integer millisecond timestamps."""

    series = pd.Series(list(values))
    if series.empty:
        return []
    if pd.api.types.is_numeric_dtype(series):
        return [int(v) for v in series]
    stamps = pd.to_datetime(series)
    if stamps.dt.tz is not None:
        stamps = stamps.dt.tz_convert("UTC").dt.tz_localize(None)
    return [int(v) for v in stamps.dt.as_unit("ms").astype("int64")]


def _infer_kind(column: pd.Series | None) -> ScaleKind:
    if column is None:
        return ScaleKind.LINEAR
    if pd.api.types.is_datetime64_any_dtype(column):
        return ScaleKind.TIME_CATEGORY
    if pd.api.types.is_numeric_dtype(column) and not pd.api.types.is_bool_dtype(column):
        return ScaleKind.LINEAR
    return ScaleKind.CATEGORY


def _nice_bounds(lo: float, hi: float) -> tuple[float, float]:
    if lo == hi:
        return lo, hi
    ticks = MaxNLocator(nbins=5).tick_values(lo, hi)
    return float(min(ticks[0], lo)), float(max(ticks[-1], hi))


def build_scale(
    field_name: str,
    col_def: Mapping[str, Any] | None,
    data: pd.DataFrame,
) -> AxisScale:
    """Build the scale for ``field_name`` from its column definition and data.

    Explicit ``min``/``max``/``values``/``ticks`` in the column definition win
    over anything derived from the data.
    """

    col_def = dict(col_def or {})
    column = data[field_name] if field_name in data.columns else None
    kind = ScaleKind.parse(col_def["type"]) if "type" in col_def else _infer_kind(column)

    if kind in (ScaleKind.CATEGORY, ScaleKind.TIME_CATEGORY):
        if col_def.get("values") is not None:
            values = list(col_def["values"])
        else:
            values = distinct_values(column) if column is not None else []
        if kind is ScaleKind.TIME_CATEGORY:
            values = to_timestamps(values)
            if col_def.get("values") is None:
                values = sorted(set(values))
        ticks = list(col_def["ticks"]) if col_def.get("ticks") is not None else list(values)
        return AxisScale(field=field_name, kind=kind, values=values, ticks=ticks, nice=False)

    nice = bool(col_def.get("nice", True))
    lo = col_def.get("min")
    hi = col_def.get("max")
    if column is not None and (lo is None or hi is None):
        numeric = pd.to_numeric(column, errors="coerce").to_numpy(dtype=float)
        numeric = numeric[np.isfinite(numeric)]
        if numeric.size:
            data_lo, data_hi = float(numeric.min()), float(numeric.max())
            if nice:
                data_lo, data_hi = _nice_bounds(data_lo, data_hi)
            lo = data_lo if lo is None else lo
            hi = data_hi if hi is None else hi
    lo = 0.0 if lo is None else float(lo)
    hi = lo if hi is None else float(hi)
    if col_def.get("ticks") is not None:
        ticks = list(col_def["ticks"])
    elif lo != hi:
        ticks = [float(t) for t in MaxNLocator(nbins=5).tick_values(lo, hi) if lo <= t <= hi]
    else:
        ticks = [lo]
    return AxisScale(field=field_name, kind=kind, min=lo, max=hi, ticks=ticks, nice=nice)
