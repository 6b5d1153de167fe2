"""Conversion of 24-hour "HHMM" arrival times to 12-hour display strings."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class MalformedTimeError(ValueError):
    """Raised when a time string does not have an HHMM layout."""


def _normalize(raw: str) -> str:
    digits = raw[:5].replace(":", "")
    if digits.startswith("0"):
        digits = digits[1:]
    return digits


def parse_military(raw: str) -> tuple[int, str]:
    """Split a military time into (hour, minutes) after normalization.

    Raises MalformedTimeError when fewer than 3 or more than 4 digits remain.
    """
    digits = _normalize(raw)
    if not (digits.isascii() and digits.isdigit()):
        raise MalformedTimeError(f"Time is not numeric: {raw!r}")
    if len(digits) == 3:
        return int(digits[:1]), digits[1:3]
    if len(digits) == 4:
        return int(digits[:2]), digits[2:4]
    raise MalformedTimeError(f"Time has unexpected length: {raw!r}")


def to_display(raw: str | None) -> str:
    """Return "2:30pm" style text for a raw time like "14:30" or "1430".

    Empty input gives an empty string. Input that cannot be parsed falls back to
    its normalized digits instead of raising. The conversion is one-way.
    """
    if not raw:
        return ""

    try:
        hour, minutes = parse_military(raw)
    except MalformedTimeError as exc:
        logger.debug("Falling back to raw time: %s", exc)
        return _normalize(raw)

    suffix = "am" if hour < 12 else "pm"
    if hour > 12:
        hour -= 12
    hour_text = "12" if hour == 0 else str(hour)

    if minutes == "00":
        return f"{hour_text}{suffix}"
    return f"{hour_text}:{minutes}{suffix}"


__all__ = ["MalformedTimeError", "parse_military", "to_display"]
