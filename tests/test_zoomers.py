import pytest

from chartpinch.core.chart import CartesianCoord
from chartpinch.core.limits import NumericRange
from chartpinch.core.scales import AxisScale, ScaleKind
from chartpinch.interaction.zoomers import (
    zoom_category_scale,
    zoom_linear_scale,
    zoom_time_category_scale,
)

# 100x100 plot at the surface origin: the centre (50, 50) maps to (0.5, 0.5).
COORD = CartesianCoord(0.0, 0.0, 100.0, 100.0)
LETTERS = ("A", "B", "C", "D", "E")
LEFT = (20.0, 50.0)
RIGHT = (80.0, 50.0)


def _linear(lo, hi, field="v"):
    return AxisScale(field=field, kind=ScaleKind.LINEAR, min=lo, max=hi)


def _category(values):
    return AxisScale(field="c", kind=ScaleKind.CATEGORY, values=list(values), ticks=list(LETTERS))


def _time(values):
    return AxisScale(field="t", kind=ScaleKind.TIME_CATEGORY, values=list(values))


def _zoom_linear(scale, zoom, center=(50.0, 50.0), axis="x", limit=NumericRange(0, 100), **kwargs):
    return zoom_linear_scale(scale, zoom, center, axis, limit=limit, coord=COORD, **kwargs)


def test_linear_zoom_follows_range_formula():
    changes = _zoom_linear(_linear(0.0, 100.0), 0.8)
    # new_diff = 100 * (0.8 - 1) = -20, split evenly around the centre.
    assert changes["min"] == pytest.approx(-10.0)
    assert changes["max"] == pytest.approx(110.0)
    assert changes["nice"] is False


def test_linear_zoom_keeps_pivot_fixed():
    scale = _linear(20.0, 60.0)
    changes = _zoom_linear(scale, 1.3, center=(25.0, 50.0))
    before = 20.0 + 0.25 * 40.0
    after = changes["min"] + 0.25 * (changes["max"] - changes["min"])
    assert after == pytest.approx(before)
    assert changes["max"] - changes["min"] == pytest.approx(28.0)


def test_linear_zoom_uses_vertical_fraction_for_y():
    changes = _zoom_linear(
        _linear(0.0, 10.0), 1.5, center=(50.0, 75.0), axis="y", limit=NumericRange(0, 10)
    )
    # y = 75 px from the top is a quarter of the way up.
    assert changes["min"] == pytest.approx(1.25)
    assert changes["max"] == pytest.approx(6.25)


def test_linear_min_scale_caps_widest_span():
    changes = _zoom_linear(_linear(10.0, 90.0), 0.5, min_scale=1.0)
    assert changes["max"] - changes["min"] == pytest.approx(100.0)

    unchanged = _zoom_linear(_linear(0.0, 100.0), 0.5, min_scale=1.0)
    assert (unchanged["min"], unchanged["max"]) == (pytest.approx(0.0), pytest.approx(100.0))


def test_linear_max_scale_caps_narrowest_span():
    changes = _zoom_linear(_linear(0.0, 100.0), 10.0, max_scale=4.0)
    assert changes["max"] - changes["min"] == pytest.approx(25.0)


def test_linear_zoom_of_one_is_identity():
    changes = _zoom_linear(_linear(3.0, 7.0), 1.0)
    assert (changes["min"], changes["max"]) == (pytest.approx(3.0), pytest.approx(7.0))


def test_linear_zoom_skips_other_kinds():
    scale = AxisScale(field="v", kind=ScaleKind.LOG, min=1.0, max=1000.0)
    assert _zoom_linear(scale, 2.0) is None


def _zoom_category(values, zoom, center, accumulator, sensitivity=3):
    return zoom_category_scale(
        _category(values),
        zoom,
        center,
        origin_values=LETTERS,
        coord=COORD,
        accumulator=accumulator,
        sensitivity=sensitivity,
    )


def test_category_zoom_waits_for_threshold():
    assert _zoom_category("BCD", 1.1, LEFT, 0) == (1, None)
    assert _zoom_category("BCD", 0.9, LEFT, 0) == (-1, None)
    assert _zoom_category("BCD", 1.1, LEFT, 2) == (3, None)


def test_category_zoom_of_one_adds_no_pressure():
    assert _zoom_category("BCD", 1.0, LEFT, 3) == (3, None)


def test_category_spread_drops_index_away_from_centre():
    assert _zoom_category("BCD", 1.1, LEFT, 3) == (0, ["B", "C"])
    assert _zoom_category("BCD", 1.1, RIGHT, 3) == (0, ["C", "D"])


def test_category_spread_keeps_single_value():
    assert _zoom_category("C", 1.1, RIGHT, 3) == (0, ["C"])
    assert _zoom_category("C", 1.1, LEFT, 3) == (0, ["C"])


def test_category_pinch_adds_index_away_from_centre():
    assert _zoom_category("BCD", 0.9, RIGHT, -3) == (0, ["A", "B", "C", "D"])
    assert _zoom_category("BCD", 0.9, LEFT, -3) == (0, ["B", "C", "D", "E"])


def test_category_pinch_falls_back_at_list_edge():
    assert _zoom_category("AB", 0.9, RIGHT, -3) == (0, ["A", "B", "C"])
    assert _zoom_category("CDE", 0.9, LEFT, -3) == (0, ["B", "C", "D", "E"])
    assert _zoom_category(LETTERS, 0.9, LEFT, -3) == (0, list(LETTERS))


def test_category_window_outside_limit_is_ignored():
    assert _zoom_category("XY", 1.1, LEFT, 3) == (0, None)


TEN = tuple(range(10))


def _zoom_time(values, zoom, center=(50.0, 50.0), **kwargs):
    return zoom_time_category_scale(
        _time(values), zoom, center, origin_values=TEN, coord=COORD, **kwargs
    )


def test_time_category_spread_trims_both_edges():
    # 10 * |1.5 - 1| = 5 buckets, 2 from the left and 3 from the right.
    assert _zoom_time(TEN, 1.5) == [2, 3, 4, 5, 6]


def test_time_category_pinch_expands_over_origin():
    assert _zoom_time(range(2, 7), 0.5) == [1, 2, 3, 4, 5, 6, 7]


def test_time_category_pinch_clamps_at_start():
    assert _zoom_time(range(0, 4), 0.5, center=(0.0, 50.0)) == [0, 1, 2, 3, 4, 5]


def test_time_category_respects_min_count():
    # Default max_scale 4 gives min_count 2.5; three buckets cannot shrink further.
    assert _zoom_time([4, 5, 6], 3.0) is None
    assert _zoom_time([4, 5], 1.5) is None
    assert _zoom_time(range(0, 8), 3.0) == [2, 3, 4]


def test_time_category_respects_max_count():
    result = _zoom_time(range(2, 6), 0.5, min_scale=2.0)
    assert len(result) == 5
    assert _zoom_time(range(0, 5), 0.5, min_scale=2.0) is None


def test_time_category_zoom_of_one_is_noop():
    assert _zoom_time(range(2, 8), 1.0) is None


EIGHT = tuple("ABCDEFGH")


def _window_bounds(values, origin):
    first, last = origin.index(values[0]), origin.index(values[-1])
    assert list(values) == list(origin[first : last + 1])
    return first, last


@pytest.mark.parametrize(
    "steps",
    [
        [(1.2, LEFT)] * 40,
        [(1.2, RIGHT)] * 40,
        [(0.8, LEFT)] * 40,
        [(0.8, RIGHT)] * 40,
        [(1.2, LEFT)] * 16 + [(0.8, RIGHT)] * 40,
        [(1.2, RIGHT), (1.2, LEFT), (0.8, LEFT), (1.2, RIGHT)] * 12,
    ],
)
def test_category_window_moves_one_edge_per_applied_step(steps):
    scale = AxisScale(field="c", kind=ScaleKind.CATEGORY, values=list("CDEF"))
    accumulator = 0
    bounds = _window_bounds(scale.values, EIGHT)
    for zoom, center in steps:
        accumulator, values = zoom_category_scale(
            scale,
            zoom,
            center,
            origin_values=EIGHT,
            coord=COORD,
            accumulator=accumulator,
            sensitivity=3,
        )
        if values is None:
            continue
        assert accumulator == 0
        first, last = _window_bounds(values, EIGHT)
        assert 0 <= first <= last <= len(EIGHT) - 1
        moved = abs(first - bounds[0]) + abs(last - bounds[1])
        if moved == 0:
            # Only a single value or the full list can stay put.
            assert len(values) in (1, len(EIGHT))
        else:
            assert moved == 1
        bounds = (first, last)
        scale.values = values


@pytest.mark.parametrize(
    "zooms, min_scale, max_scale",
    [
        ([1.3] * 10 + [0.7] * 10, None, None),
        ([0.6, 1.8, 0.5, 1.4, 0.9, 2.5, 0.3, 1.1] * 3, None, None),
        ([0.5] * 6 + [1.6] * 6, 2.0, 4.0),
        ([1.9, 0.4] * 8, 1.25, 5.0),
    ],
)
def test_time_category_count_stays_within_bounds(zooms, min_scale, max_scale):
    origin = tuple(range(20))
    min_count = len(origin) / (max_scale or 4.0)
    max_count = len(origin) / (min_scale or 1.0)
    scale = _time(range(6, 14))
    for zoom in zooms:
        for center in (LEFT, (50.0, 50.0), RIGHT):
            values = zoom_time_category_scale(
                scale,
                zoom,
                center,
                origin_values=origin,
                coord=COORD,
                min_scale=min_scale,
                max_scale=max_scale,
            )
            if values is None:
                continue
            _window_bounds(values, origin)
            assert min_count <= len(values) <= max_count
            scale.values = values
