"""Reload progress signal kept in step with the stop poll cycle."""

from __future__ import annotations

from collections.abc import Callable
import threading
import time

DEFAULT_SATURATION = 100.0


class ReloadIndicatorController:
    """Linear 0 -> saturation ramp re-armed at every poll attempt.

    The indicator reports time since the last poll attempt, not whether that
    attempt succeeded.
    """

    def __init__(
        self,
        duration_seconds: float,
        saturation: float = DEFAULT_SATURATION,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
        self._default_duration = duration_seconds
        self._saturation = saturation
        self._clock = clock
        self._lock = threading.Lock()
        self._started_at: float | None = None
        self._duration = duration_seconds

    @property
    def saturation(self) -> float:
        return self._saturation

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._started_at is not None

    @property
    def progress(self) -> float:
        """Current indicator value between 0 and saturation."""
        with self._lock:
            if self._started_at is None:
                return 0.0
            elapsed = max(self._clock() - self._started_at, 0.0)
            duration = self._duration
        if elapsed >= duration:
            return self._saturation
        return self._saturation * elapsed / duration

    def on_poll_start(self, duration_seconds: float | None = None) -> None:
        """Snap to 0 and ramp toward saturation over the given duration."""
        duration = duration_seconds if duration_seconds is not None else self._default_duration
        if duration <= 0:
            raise ValueError("duration_seconds must be positive")
        with self._lock:
            self._duration = duration
            self._started_at = self._clock()

    def on_stop(self) -> None:
        """Snap to 0 and cancel any ramp in progress."""
        with self._lock:
            self._started_at = None
            self._duration = self._default_duration


__all__ = ["DEFAULT_SATURATION", "ReloadIndicatorController"]
