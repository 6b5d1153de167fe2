"""Configuration loader for the shuttle tracker."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class StopConfig:
    """A stop known ahead of time, used for nearest-stop listings."""

    id: str
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class ShuttleConfig:
    """Shuttle arrivals endpoint and polling configuration."""

    arrivals_url: str
    poll_interval_seconds: float
    request_timeout_seconds: float
    stops: tuple[StopConfig, ...] = ()


@dataclass(frozen=True)
class DiningConfig:
    """Dining info endpoint configuration."""

    url: str


@dataclass(frozen=True)
class IndicatorConfig:
    """Reload indicator configuration; ramp_seconds None follows the poll interval."""

    saturation: float
    ramp_seconds: float | None


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    shuttle: ShuttleConfig
    dining: DiningConfig
    indicator: IndicatorConfig
    log: LoggingConfig

    @property
    def ramp_seconds(self) -> float:
        if self.indicator.ramp_seconds is not None:
            return self.indicator.ramp_seconds
        return self.shuttle.poll_interval_seconds


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _positive(value: Any, key: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{key}' must be a number") from exc
    if number <= 0:
        raise ValueError(f"'{key}' must be positive")
    return number


def _load_stops(raw_stops: Any) -> tuple[StopConfig, ...]:
    if raw_stops is None:
        return ()
    if not isinstance(raw_stops, list):
        raise ValueError("'shuttle.stops' config must be a list")
    stops = []
    for entry in raw_stops:
        if not isinstance(entry, dict):
            raise ValueError("Each 'shuttle.stops' entry must be a mapping")
        stops.append(
            StopConfig(
                id=str(_require_key(entry, "id", "shuttle.stops")),
                name=str(_require_key(entry, "name", "shuttle.stops")),
                lat=float(_require_key(entry, "lat", "shuttle.stops")),
                lon=float(_require_key(entry, "lon", "shuttle.stops")),
            )
        )
    return tuple(stops)


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file and the environment."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    shuttle_section = _require_section(data, "shuttle")
    dining_section = _require_section(data, "dining")
    logging_section = _require_section(data, "logging")
    indicator_section = data.get("indicator") or {}
    if not isinstance(indicator_section, dict):
        raise ValueError("'indicator' config must be a mapping")

    shuttle = ShuttleConfig(
        arrivals_url=os.environ.get("SHUTTLE_ARRIVALS_URL")
        or _require_key(shuttle_section, "arrivals_url", "shuttle"),
        poll_interval_seconds=_positive(
            _require_key(shuttle_section, "poll_interval_seconds", "shuttle"),
            "poll_interval_seconds",
        ),
        request_timeout_seconds=_positive(
            shuttle_section.get("request_timeout_seconds", 10), "request_timeout_seconds"
        ),
        stops=_load_stops(shuttle_section.get("stops")),
    )

    dining = DiningConfig(
        url=os.environ.get("DINING_API_URL") or _require_key(dining_section, "url", "dining"),
    )

    ramp_seconds = indicator_section.get("ramp_seconds")
    indicator = IndicatorConfig(
        saturation=_positive(indicator_section.get("saturation", 100), "saturation"),
        ramp_seconds=_positive(ramp_seconds, "ramp_seconds") if ramp_seconds is not None else None,
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(shuttle=shuttle, dining=dining, indicator=indicator, log=logging)
