"""Hand-off of directions to the platform's maps application."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

IOS = "ios"
ANDROID = "android"
WALK = "walk"

APPLE_MAPS_TEMPLATE = "http://maps.apple.com/?saddr=Current%20Location&daddr={lat},{lon}&dirflg={flag}"
GOOGLE_MAPS_TEMPLATE = "https://maps.google.com/maps?saddr=Current+Location&daddr={lat},{lon}&dirflg={flag}"


class URLOpener(Protocol):
    """Platform linking service."""

    def can_open_url(self, url: str) -> bool:
        ...

    def open_url(self, url: str) -> bool:
        ...


def get_directions_url(method: str, lat: float | str, lon: float | str, platform: str) -> str:
    """Build a maps URL; "walk" gives walking directions, anything else driving."""
    flag = "w" if method == WALK else "d"
    template = APPLE_MAPS_TEMPLATE if platform == IOS else GOOGLE_MAPS_TEMPLATE
    return template.format(lat=lat, lon=lon, flag=flag)


def open_url(url: str, opener: URLOpener) -> bool:
    """Try to open a URL; unsupported schemes and opener errors are logged, not raised."""
    try:
        if not opener.can_open_url(url):
            logger.error("Unable to handle url: %s", url)
            return False
        return bool(opener.open_url(url))
    except OSError as exc:
        logger.error("Opening url %s failed: %s", url, exc)
        return False


def goto_navigation_app(
    destination_lat: float | str,
    destination_lon: float | str,
    opener: URLOpener,
    platform: str,
) -> bool:
    """Open walking directions to a destination in the maps application."""
    url = get_directions_url(WALK, destination_lat, destination_lon, platform)
    return open_url(url, opener)


__all__ = [
    "ANDROID",
    "IOS",
    "WALK",
    "URLOpener",
    "get_directions_url",
    "goto_navigation_app",
    "open_url",
]
