"""Chart model, scales and limit ranges for ChartPinch."""

from chartpinch.core.chart import CartesianCoord, Chart
from chartpinch.core.limits import (
    LimitRange,
    NumericRange,
    RangeLimiter,
    compute_limit_range,
    field_range,
)
from chartpinch.core.scales import AxisScale, ScaleKind, build_scale

__all__ = [
    "AxisScale",
    "ScaleKind",
    "build_scale",
    "CartesianCoord",
    "Chart",
    "LimitRange",
    "NumericRange",
    "RangeLimiter",
    "compute_limit_range",
    "field_range",
]
