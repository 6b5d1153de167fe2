"""Hand-off adapters to external applications."""

from shuttle_tracker.handoff.browser import BrowserOpener
from shuttle_tracker.handoff.directions import get_directions_url, goto_navigation_app, open_url

__all__ = ["BrowserOpener", "get_directions_url", "goto_navigation_app", "open_url"]
