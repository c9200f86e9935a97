# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Demo window with a pinch-zoomable chart."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np
import pandas as pd

from chartpinch.app.config import PinchConfig, PinchConfigError
from chartpinch.core.logging_config import setup_logging

log = logging.getLogger(__name__)

_KINDS = ("linear", "cat", "timeCat")


def demo_frame(kind: str, rows: int = 60, seed: int = 7) -> pd.DataFrame:
    """Random-walk sample data keyed by a linear, category or date column."""
    rng = np.random.default_rng(seed)
    values = np.cumsum(rng.normal(0.0, 1.0, rows)) + 50.0
    if kind == "linear":
        x = np.arange(rows, dtype=float)
    elif kind == "cat":
        x = [f"C{i:02d}" for i in range(rows)]
    else:
        x = pd.date_range("2024-01-01", periods=rows, freq="D")
    return pd.DataFrame({"x": x, "value": values})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("chartpinch-demo")
    parser.add_argument("--kind", choices=_KINDS, default="linear", help="x axis scale type")
    parser.add_argument("--mode", choices=["x", "y", "xy"], default=None)
    parser.add_argument("--min-scale", type=float, default=None)
    parser.add_argument("--max-scale", type=float, default=None)
    parser.add_argument("--sensitivity", type=int, default=None)
    parser.add_argument("--tooltip", action="store_true", help="enable long-press tooltips")
    parser.add_argument("--rows", type=int, default=60)
    return parser


def _config_from_args(args: argparse.Namespace) -> PinchConfig:
    overrides = {
        key: value
        for key, value in (
            ("mode", args.mode),
            ("min_scale", args.min_scale),
            ("max_scale", args.max_scale),
            ("sensitivity", args.sensitivity),
        )
        if value is not None
    }
    return PinchConfig.from_env(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(console_level=logging.INFO)

    try:
        config = _config_from_args(args)
    except PinchConfigError as exc:
        log.error(f"Invalid pinch configuration: {exc}")
        return 2

    from matplotlib.figure import Figure
    from PyQt5.QtWidgets import QApplication

    from chartpinch.interaction.pinch import PinchGestureController
    from chartpinch.ui.plots.gesture_canvas import PinchGestureCanvas
    from chartpinch.ui.plots.mpl_chart import MplChart

    app = QApplication.instance() or QApplication(sys.argv[:1])
    figure = Figure(figsize=(8, 4.5))
    canvas = PinchGestureCanvas(figure)
    ax = figure.add_subplot(111)
    col_defs = {"x": {"type": args.kind}}
    chart = MplChart(
        ax,
        demo_frame(args.kind, rows=args.rows),
        x="x",
        y="value",
        col_defs=col_defs,
        tooltip=args.tooltip,
    )
    controller = PinchGestureController(chart, config)
    canvas.attach(controller)

    canvas.setWindowTitle(f"ChartPinch demo ({args.kind}, mode={config.mode})")
    canvas.resize(960, 540)
    canvas.show()
    log.info("Starting demo event loop")
    return app.exec_()


if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main())
