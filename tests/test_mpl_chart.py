import pandas as pd
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from chartpinch.interaction.contexts import GestureSample, Pointer, PressContext
from chartpinch.interaction.pinch import PinchGestureController
from chartpinch.ui.plots.mpl_chart import MplChart

# 400x300 px figure; axes span x 40..360 and (top-down) y 30..270.
PLOT_CENTER = (200.0, 150.0)
HORIZONTAL = (Pointer(100.0, 150.0), Pointer(300.0, 160.0))


def _make_axes():
    figure = Figure(figsize=(4, 3), dpi=100)
    FigureCanvasAgg(figure)
    return figure.add_axes([0.1, 0.1, 0.8, 0.8])


def _linear_chart(**kwargs):
    data = pd.DataFrame({"x": [0.0, 50.0, 100.0], "y": [0.0, 5.0, 10.0]})
    return MplChart(_make_axes(), data, x="x", y="y", col_defs={"x": {"nice": False}}, **kwargs)


def test_coord_maps_widget_pixels_to_axes_fraction():
    chart = _linear_chart()
    coord = chart.get_coord()
    assert coord.invert_point(PLOT_CENTER) == (pytest.approx(0.5), pytest.approx(0.5))
    assert coord.invert_point((120.0, 210.0)) == (pytest.approx(0.25), pytest.approx(0.25))
    assert coord.start == (pytest.approx(40.0), pytest.approx(270.0))
    assert coord.end == (pytest.approx(360.0), pytest.approx(30.0))


def test_pinch_updates_axes_limits():
    chart = _linear_chart()
    controller = PinchGestureController(chart)
    assert chart.ax.get_xlim() == (pytest.approx(0.0), pytest.approx(100.0))

    controller.on_gesture_start()
    controller.on_gesture_update(GestureSample(1.25, PLOT_CENTER, HORIZONTAL, 100))
    assert chart.ax.get_xlim() == (pytest.approx(12.5), pytest.approx(87.5))


def test_category_window_sets_index_limits_and_ticks():
    data = pd.DataFrame({"c": list("ABCDE"), "y": [1.0, 3.0, 2.0, 5.0, 4.0]})
    chart = MplChart(_make_axes(), data, x="c", y="y")
    assert chart.ax.get_xlim() == (pytest.approx(-0.5), pytest.approx(4.5))

    chart.set_axis_scale("c", {"type": "cat", "values": ["B", "C"]})
    chart.request_redraw()
    assert chart.ax.get_xlim() == (pytest.approx(0.5), pytest.approx(2.5))
    assert list(chart.ax.get_xticks()) == [1, 2]


def test_time_category_series_uses_bucket_positions():
    data = pd.DataFrame({"t": pd.date_range("2024-01-01", periods=10, freq="D"), "y": range(10)})
    chart = MplChart(_make_axes(), data, x="t", y="y")
    assert chart.ax.get_xlim() == (pytest.approx(-0.5), pytest.approx(9.5))
    xs = chart.ax.lines[0].get_xdata()
    assert list(xs) == list(range(10))


def test_long_press_marker_follows_tooltip():
    chart = _linear_chart(tooltip=True)
    controller = PinchGestureController(chart)

    controller.on_press(PressContext(center=PLOT_CENTER))
    marker = chart._tooltip_line
    assert marker is not None
    assert list(marker.get_xdata()) == [pytest.approx(50.0), pytest.approx(50.0)]

    controller.on_reset()
    assert chart._tooltip_line is None
    assert marker not in chart.ax.lines


def test_change_data_redraws_series():
    chart = _linear_chart()
    chart.change_data(pd.DataFrame({"x": [0.0, 10.0], "y": [1.0, 2.0]}))
    assert len(chart.ax.lines) == 1
    assert list(chart.ax.lines[0].get_xdata()) == [0.0, 10.0]
