"""Pinch interaction options, from keyword arguments, mappings or ``CHARTPINCH_PINCH``."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

ENV_VAR = "CHARTPINCH_PINCH"

_MODES = {"x", "y", "xy"}
_NONE_VALUES = {"", "none", "null", "off"}

# Option names as used by JavaScript-style chart configs.
_ALIASES = {
    "minscale": "min_scale",
    "maxscale": "max_scale",
    "pressthreshold": "press_threshold",
    "presstime": "press_time",
    "throttlems": "throttle_ms",
}


class PinchConfigError(ValueError):
    """Raised for unknown or out-of-range pinch options."""


@dataclass(frozen=True)
class PinchConfig:
    """Options of a :class:`~chartpinch.interaction.pinch.PinchGestureController`."""

    mode: str = "x"
    min_scale: float | None = None
    max_scale: float | None = None
    sensitivity: int = 3
    press_threshold: float = 9.0
    press_time: float = 251.0
    throttle_ms: float = 16.0

    def __post_init__(self) -> None:
        if self.mode not in _MODES:
            raise PinchConfigError(f"mode must be one of {sorted(_MODES)}, got {self.mode!r}")
        for name in ("min_scale", "max_scale"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise PinchConfigError(f"{name} must be positive, got {value!r}")
        if self.sensitivity < 0:
            raise PinchConfigError(f"sensitivity must be >= 0, got {self.sensitivity!r}")
        if self.press_threshold < 0 or self.press_time < 0 or self.throttle_ms < 0:
            raise PinchConfigError("press_threshold, press_time and throttle_ms must be >= 0")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> PinchConfig:
        """Build a config from ``options``; camelCase keys are accepted."""

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, raw_value in options.items():
            key = _normalise(raw_key)
            if key not in known:
                raise PinchConfigError(f"Unknown pinch option: {raw_key!r}")
            kwargs[key] = _coerce(key, raw_value)
        return cls(**kwargs)

    @classmethod
    def from_env(cls, env_value: str | None = None, **overrides: Any) -> PinchConfig:
        """Parse ``"mode=xy,sensitivity=5"`` style tokens from ``CHARTPINCH_PINCH``."""

        raw = env_value if env_value is not None else os.environ.get(ENV_VAR, "")
        options: dict[str, Any] = dict(_parse_tokens(raw))
        options.update(overrides)
        return cls.from_mapping(options)


def _normalise(name: str) -> str:
    key = name.strip().replace("-", "_")
    return _ALIASES.get(key.lower(), key.lower())


def _tokenise(raw: str) -> Iterable[str]:
    for token in raw.split(","):
        clean = token.strip()
        if clean:
            yield clean


def _parse_tokens(raw: str) -> dict[str, str]:
    options: dict[str, str] = {}
    for token in _tokenise(raw):
        if "=" not in token:
            raise PinchConfigError(f"Expected key=value, got {token!r}")
        key, value = token.split("=", 1)
        options[key.strip()] = value.strip()
    return options


def _coerce(key: str, value: Any) -> Any:
    if key == "mode":
        return str(value).strip().lower()
    if key in ("min_scale", "max_scale"):
        if value is None or (isinstance(value, str) and value.strip().lower() in _NONE_VALUES):
            return None
    try:
        if key == "sensitivity":
            return int(value)
        return float(value)
    except (TypeError, ValueError) as exc:
        raise PinchConfigError(f"Invalid value for {key}: {value!r}") from exc


__all__ = ["ENV_VAR", "PinchConfig", "PinchConfigError"]
