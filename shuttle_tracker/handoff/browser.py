"""URL opener backed by the desktop web browser."""

from __future__ import annotations

import webbrowser

SUPPORTED_SCHEMES = ("http://", "https://")


class BrowserOpener:
    """Opens http(s) URLs with the default browser."""

    def can_open_url(self, url: str) -> bool:
        return url.startswith(SUPPORTED_SCHEMES)

    def open_url(self, url: str) -> bool:
        return webbrowser.open(url)


__all__ = ["BrowserOpener"]
