"""State container for stops and their latest arrivals."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
import threading
from typing import Protocol

from shuttle_tracker.data.models import ArrivalRecord, StopID, StopInfo


class ArrivalStore(Protocol):
    """Destination for arrivals published by the poll scheduler."""

    def update_arrivals(self, stop_id: StopID, arrivals: tuple[ArrivalRecord, ...]) -> None:
        ...


class StopStore:
    """In-memory StopInfo table keyed by stop id; last writer wins."""

    def __init__(self, stops: Iterable[StopInfo] = ()) -> None:
        self._lock = threading.Lock()
        self._stops: dict[StopID, StopInfo] = {stop.id: stop for stop in stops}

    def add_stop(self, stop: StopInfo) -> None:
        with self._lock:
            self._stops[stop.id] = stop

    def get(self, stop_id: StopID) -> StopInfo | None:
        with self._lock:
            return self._stops.get(stop_id)

    def stops(self) -> list[StopInfo]:
        with self._lock:
            return list(self._stops.values())

    def update_arrivals(self, stop_id: StopID, arrivals: tuple[ArrivalRecord, ...]) -> None:
        """Replace the arrivals for a stop, creating a placeholder stop if unknown."""
        with self._lock:
            current = self._stops.get(stop_id)
            if current is None:
                current = StopInfo(id=stop_id, name=str(stop_id), lat=0.0, lon=0.0)
            self._stops[stop_id] = replace(current, arrivals=tuple(arrivals))


__all__ = ["ArrivalStore", "StopStore"]
