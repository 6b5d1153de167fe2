"""Device position providers."""

from __future__ import annotations

from typing import Protocol

from shuttle_tracker.data.models import Coordinate


class LocationProvider(Protocol):
    """Read-only source of the device's current position."""

    def current_position(self) -> Coordinate:
        ...


class StaticLocationProvider:
    """Always reports the same coordinate."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._position = Coordinate(latitude=latitude, longitude=longitude)

    def current_position(self) -> Coordinate:
        return self._position


__all__ = ["LocationProvider", "StaticLocationProvider"]
