"""Nearest-first ordering of stops and map markers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import math
from typing import Any, TypeVar

from shuttle_tracker.data.models import Coordinate, StopInfo

T = TypeVar("T")

EARTH_RADIUS_METERS = 6371000.0
METERS_PER_MILE = 1609.344


@dataclass(frozen=True)
class RankedStop:
    """A stop paired with its distance in meters from a reference point."""

    distance: float
    stop: StopInfo


def _field(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity[name]
    return getattr(entity, name)


def sort_by(entities: Iterable[T], field: str) -> list[T]:
    """Return entities sorted ascending by a field; ties keep input order."""
    return sorted(entities, key=lambda entity: _field(entity, field))


def rank(entities: Iterable[T]) -> list[T]:
    """Return entities ordered by ascending distance."""
    return sort_by(entities, "distance")


def haversine_meters(origin: Coordinate, target: Coordinate) -> float:
    """Great-circle distance between two coordinates in meters."""
    lat1, lon1, lat2, lon2 = map(
        math.radians,
        [origin.latitude, origin.longitude, target.latitude, target.longitude],
    )
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * math.asin(math.sqrt(a))


def nearest_stops(stops: Iterable[StopInfo], origin: Coordinate) -> list[RankedStop]:
    """Attach distances from origin to each stop and rank them nearest-first."""
    return rank(RankedStop(distance=haversine_meters(origin, stop.coordinate), stop=stop) for stop in stops)


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def distance_miles_str(miles: float) -> str:
    """Format miles with one decimal place, e.g. "0.3 mi"."""
    return f"{miles:.1f} mi"


__all__ = [
    "RankedStop",
    "rank",
    "sort_by",
    "haversine_meters",
    "nearest_stops",
    "meters_to_miles",
    "distance_miles_str",
]
