"""Data structures shared by the fetcher, scheduler and store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from shuttle_tracker.logic.time_format import to_display

StopID = Union[str, int]


@dataclass(frozen=True)
class ArrivalRecord:
    """Single predicted arrival of a route at a stop."""

    route_label: str
    eta_raw: str

    @property
    def eta_display(self) -> str:
        return to_display(self.eta_raw)

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> "ArrivalRecord":
        """Build a record from one raw arrivals payload entry."""
        route = item.get("route")
        eta = item.get("eta")
        return cls(
            route_label=str(route).strip() if route is not None else "",
            eta_raw=str(eta) if eta is not None else "",
        )


@dataclass(frozen=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class StopInfo:
    """Transit stop with its latest known arrivals.

    arrivals is None until the first successful fetch; an empty tuple means the
    stop was fetched and has no shuttles.
    """

    id: StopID
    name: str
    lat: float
    lon: float
    arrivals: tuple[ArrivalRecord, ...] | None = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)

    @property
    def has_active_shuttles(self) -> bool:
        return bool(self.arrivals)


def normalize_arrivals(payload: list[dict[str, Any]]) -> tuple[ArrivalRecord, ...]:
    """Convert a raw arrivals payload into ArrivalRecords, skipping non-dict entries."""
    return tuple(ArrivalRecord.from_payload(item) for item in payload if isinstance(item, dict))


__all__ = ["ArrivalRecord", "Coordinate", "StopID", "StopInfo", "normalize_arrivals"]
