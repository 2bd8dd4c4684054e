from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
import logging
import os
from pathlib import Path
import tomllib
from typing import Any, Mapping

from livechart_plot.series import CHART_TYPES, DEFAULT_CAPACITY, DEFAULT_SERIES_COUNT
from livechart_ui.style.theme import THEMES

from .errors import ChartConfigError

LOGGER = logging.getLogger(__name__)
ENV_PREFIX = "LIVECHART_"
DEFAULT_INTERVAL_MS = 500
DEFAULT_SIDEBAR_WIDTH = 280


@dataclass(frozen=True)
class ChartConfig:
    width: int = 1000
    height: int = 600
    sidebar_width: int = DEFAULT_SIDEBAR_WIDTH
    capacity: int = DEFAULT_CAPACITY
    series_count: int = DEFAULT_SERIES_COUNT
    interval_ms: float = DEFAULT_INTERVAL_MS
    value_min: float = 0.0
    value_max: float = 100.0
    chart_type: str = "line"
    theme: str = "light"
    grid: bool = True
    smoothing: bool = False
    seed: int | None = None

    def with_overrides(self, overrides: Mapping[str, Any]) -> "ChartConfig":
        raw = _coerce_mapping({k: v for k, v in overrides.items() if v is not None}, source="overrides")
        return validate_config(replace(self, **raw))


_FIELD_TYPES: dict[str, type] = {
    "width": int,
    "height": int,
    "sidebar_width": int,
    "capacity": int,
    "series_count": int,
    "interval_ms": float,
    "value_min": float,
    "value_max": float,
    "chart_type": str,
    "theme": str,
    "grid": bool,
    "smoothing": bool,
    "seed": int,
}


def load_chart_config(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ChartConfig:
    """Resolve config from defaults, an optional TOML file, env vars, then overrides.

    The TOML file may hold keys at top level or under a ``[chart]`` table.
    Environment variables use the ``LIVECHART_`` prefix (``LIVECHART_THEME=dark``).
    """
    raw: dict[str, Any] = {}
    if path is not None:
        raw.update(_read_toml(Path(path)))
    raw.update(_read_env(os.environ if env is None else env))
    if overrides:
        raw.update(_coerce_mapping({k: v for k, v in overrides.items() if v is not None}, source="overrides"))
    config = validate_config(replace(ChartConfig(), **raw))
    LOGGER.debug("chart config resolved: %s", asdict(config))
    return config


def validate_config(config: ChartConfig) -> ChartConfig:
    if config.width <= 0 or config.height <= 0:
        raise ChartConfigError("width/height must be > 0")
    if config.sidebar_width < 0:
        raise ChartConfigError("sidebar_width must be >= 0")
    if config.width <= config.sidebar_width:
        raise ChartConfigError("width must be larger than sidebar_width")
    if config.capacity <= 1:
        raise ChartConfigError("capacity must be > 1")
    if config.series_count <= 0:
        raise ChartConfigError("series_count must be > 0")
    if config.interval_ms <= 0:
        raise ChartConfigError("interval_ms must be > 0")
    if config.chart_type not in CHART_TYPES:
        raise ChartConfigError(f"chart_type must be one of {', '.join(CHART_TYPES)}")
    if config.theme not in THEMES:
        raise ChartConfigError(f"theme must be one of {', '.join(sorted(THEMES))}")
    if len(THEMES[config.theme].series) < config.series_count:
        raise ChartConfigError(f"theme `{config.theme}` has fewer colors than series_count")
    if config.value_min > config.value_max:
        # Inverted ranges still generate samples; flag them for the operator.
        LOGGER.warning("value_min %.2f exceeds value_max %.2f", config.value_min, config.value_max)
    return config


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ChartConfigError(f"config file not found: {path}")
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ChartConfigError(f"invalid TOML in {path}: {exc}") from exc
    table = data.get("chart", data)
    if not isinstance(table, dict):
        raise ChartConfigError("[chart] must be a table")
    return _coerce_mapping(table, source=str(path))


def _read_env(env: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name in _FIELD_TYPES:
        value = env.get(ENV_PREFIX + name.upper())
        if value is None or value.strip() == "":
            continue
        out[name] = value.strip()
    return _coerce_mapping(out, source="environment")


def _coerce_mapping(raw: Mapping[str, Any], *, source: str) -> dict[str, Any]:
    known = {f.name for f in fields(ChartConfig)}
    out: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise ChartConfigError(f"unknown config key `{key}` in {source}")
        out[key] = _coerce_value(key, value, source=source)
    return out


def _coerce_value(key: str, value: Any, *, source: str) -> Any:
    expected = _FIELD_TYPES[key]
    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in {"1", "true", "yes", "on"}:
            return True
        if isinstance(value, str) and value.strip().lower() in {"0", "false", "no", "off"}:
            return False
        raise ChartConfigError(f"`{key}` in {source} must be a boolean")
    if expected is str:
        if not isinstance(value, str) or not value.strip():
            raise ChartConfigError(f"`{key}` in {source} must be a non-empty string")
        return value.strip()
    if isinstance(value, bool):
        raise ChartConfigError(f"`{key}` in {source} must be a number")
    try:
        if expected is int:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return int(value)
        return float(value)
    except (TypeError, ValueError):
        raise ChartConfigError(f"`{key}` in {source} must be {'an integer' if expected is int else 'a number'}") from None
