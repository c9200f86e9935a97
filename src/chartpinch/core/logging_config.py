# ChartPinch
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging configuration with file rotation."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_HANDLER_TAG = "_chartpinch_handler"


def setup_logging(app_name: str = "ChartPinch", console_level: int = logging.INFO) -> Path:
    """
    Configure package logging with file rotation.

    Creates ``chartpinch.log`` (DEBUG and above, 5 MB per file, 3 rotations)
    in a platform log directory and echoes ``console_level`` and above to
    stdout. Calling it again replaces the handlers it installed before.

    Args:
        app_name: Application name for log directory
        console_level: Minimum level for console output

    Returns:
        Path to the log directory
    """
    log_dir = _get_log_directory(app_name)
    log_dir.mkdir(parents=True, exist_ok=True)

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")

    package_logger = logging.getLogger("chartpinch")
    package_logger.setLevel(logging.DEBUG)
    teardown_logging()

    log_path = log_dir / "chartpinch.log"
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)

    for handler in (file_handler, console_handler):
        setattr(handler, _HANDLER_TAG, True)
        package_logger.addHandler(handler)

    log = logging.getLogger(__name__)
    log.info(f"{app_name} logging initialized")
    log.info(f"Log file: {log_path}")
    log.info(f"Platform: {sys.platform}, Python: {sys.version.split()[0]}")

    return log_dir


def teardown_logging() -> None:
    """Remove and close handlers installed by :func:`setup_logging`."""
    package_logger = logging.getLogger("chartpinch")
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            package_logger.removeHandler(handler)
            handler.close()


def _get_log_directory(app_name: str) -> Path:
    """
    Get platform-specific log directory.

    - Windows: %LOCALAPPDATA%\\AppName\\logs
    - macOS: ~/Library/Logs/AppName
    - Linux: ~/.local/share/AppName/logs
    """
    home = Path.home()

    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
        return base / app_name / "logs"

    elif sys.platform == "darwin":
        return home / "Library" / "Logs" / app_name

    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", home / ".local" / "share")
        return Path(xdg_data_home) / app_name / "logs"


def get_log_directory(app_name: str = "ChartPinch") -> Path:
    """Get the log directory path without setting up logging."""
    return _get_log_directory(app_name)
