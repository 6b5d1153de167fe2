from __future__ import annotations

from unittest.mock import MagicMock

from shuttle_tracker.handoff import BrowserOpener, get_directions_url, goto_navigation_app, open_url


def test_ios_walking_url() -> None:
    url = get_directions_url("walk", 32.88, -117.23, "ios")

    assert url == "http://maps.apple.com/?saddr=Current%20Location&daddr=32.88,-117.23&dirflg=w"


def test_ios_defaults_to_driving() -> None:
    url = get_directions_url("bike", 32.88, -117.23, "ios")

    assert url.endswith("&dirflg=d")
    assert url.startswith("http://maps.apple.com/")


def test_android_urls() -> None:
    walk = get_directions_url("walk", "32.88", "-117.23", "android")
    drive = get_directions_url("drive", "32.88", "-117.23", "android")

    assert walk == "https://maps.google.com/maps?saddr=Current+Location&daddr=32.88,-117.23&dirflg=w"
    assert drive.endswith("&dirflg=d")


def test_open_url_unsupported_is_logged(caplog) -> None:
    opener = MagicMock()
    opener.can_open_url.return_value = False

    with caplog.at_level("ERROR"):
        assert open_url("geo:1,2", opener) is False

    opener.open_url.assert_not_called()
    assert "geo:1,2" in caplog.text


def test_open_url_opener_failure_is_logged(caplog) -> None:
    opener = MagicMock()
    opener.can_open_url.return_value = True
    opener.open_url.side_effect = OSError("no handler")

    with caplog.at_level("ERROR"):
        assert open_url("https://maps.google.com", opener) is False

    assert "no handler" in caplog.text


def test_goto_navigation_app_opens_walking_directions() -> None:
    opener = MagicMock()
    opener.can_open_url.return_value = True
    opener.open_url.return_value = True

    assert goto_navigation_app(32.88, -117.23, opener, "ios") is True

    opener.open_url.assert_called_once_with(
        "http://maps.apple.com/?saddr=Current%20Location&daddr=32.88,-117.23&dirflg=w"
    )


def test_browser_opener_schemes() -> None:
    opener = BrowserOpener()

    assert opener.can_open_url("https://maps.google.com")
    assert not opener.can_open_url("comgooglemaps://")
