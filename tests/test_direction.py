from chartpinch.interaction.contexts import Pointer
from chartpinch.interaction.direction import (
    AxisSelection,
    classify_axes,
    direction_enabled,
    eligible_axes,
    resolve_axes,
)


def _pair(x0, y0, x1, y1):
    return [Pointer(x0, y0), Pointer(x1, y1)]


def test_classify_axes_by_finger_spread():
    assert classify_axes(_pair(0, 0, 100, 10)) == "x"
    assert classify_axes(_pair(0, 0, 10, 100)) == "y"
    assert classify_axes(_pair(0, 0, 100, 100)) == "xy"
    # Ratios on the band edges are not diagonal.
    assert classify_axes(_pair(0, 0, 170, 100)) == "x"
    assert classify_axes(_pair(0, 0, 30, 100)) == "y"


def test_classify_axes_guards_zero_vertical_spread():
    assert classify_axes(_pair(0, 50, 120, 50)) == "x"
    assert classify_axes(_pair(10, 10, 10, 10)) == "x"


def test_direction_enabled():
    assert direction_enabled("xy", "x") and direction_enabled("xy", "y")
    assert direction_enabled("x", "x") and not direction_enabled("x", "y")
    assert direction_enabled(None, "y")


def test_resolve_axes_follows_geometry_only_in_xy_mode():
    assert resolve_axes("xy", "x") == AxisSelection(x=True, y=False)
    assert resolve_axes("xy", "y") == AxisSelection(x=False, y=True)
    assert resolve_axes("xy", None) == AxisSelection(x=True, y=True)
    assert resolve_axes("x", "y") == AxisSelection(x=True, y=True)


def test_eligible_axes_intersects_mode_and_geometry():
    assert eligible_axes("x", "y") == AxisSelection(x=True, y=False)
    assert eligible_axes("y", "xy") == AxisSelection(x=False, y=True)
    assert eligible_axes("xy", "y") == AxisSelection(x=False, y=True)
    assert eligible_axes("xy", "xy") == AxisSelection(x=True, y=True)
