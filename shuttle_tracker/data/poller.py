"""Repeating arrivals poller for the currently viewed stop."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial
import logging
import threading
from typing import Any, Protocol

from shuttle_tracker.data.campus_client import ApplicationError, NetworkError
from shuttle_tracker.data.models import StopID, normalize_arrivals
from shuttle_tracker.data.store import ArrivalStore
from shuttle_tracker.logic.reload_indicator import ReloadIndicatorController

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 6.0
TIMER_JOIN_TIMEOUT_SECONDS = 1.0


class Fetcher(Protocol):
    def fetch(self, stop_id: StopID) -> list[dict[str, Any]]:
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Timer(Protocol):
    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class _ThreadedTimerHandle:
    def __init__(self) -> None:
        self.stop_event = threading.Event()
        self.thread: threading.Thread | None = None

    def cancel(self) -> None:
        self.stop_event.set()


class ThreadedTimer:
    """Runs a callback every interval on a daemon thread until cancelled."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handles: list[_ThreadedTimerHandle] = []

    def call_every(self, interval_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ThreadedTimerHandle()

        def _run_loop() -> None:
            while not handle.stop_event.wait(timeout=interval_seconds):
                callback()

        handle.thread = threading.Thread(target=_run_loop, daemon=True)
        handle.thread.start()
        with self._lock:
            self._handles = [h for h in self._handles if h.thread is not None and h.thread.is_alive()]
            self._handles.append(handle)
        return handle

    def join(self, timeout: float | None = None) -> None:
        """Wait for the threads of cancelled timers to exit."""
        with self._lock:
            cancelled = [h for h in self._handles if h.stop_event.is_set()]
        for handle in cancelled:
            thread = handle.thread
            if thread is not None and thread is not threading.current_thread():
                thread.join(timeout=timeout)
        with self._lock:
            self._handles = [h for h in self._handles if h.thread is not None and h.thread.is_alive()]


@dataclass
class PollSession:
    """Polling state for one activated stop."""

    stop_id: StopID
    generation: int
    active: bool = True
    in_flight: bool = False
    timer_handle: TimerHandle | None = None


class StopPollScheduler:
    """Polls arrivals for a single stop and publishes them to a store.

    At most one fetch is outstanding per session: ticks that fire while a fetch
    is in flight are skipped. Each start() bumps a generation counter and
    results from older generations are dropped when they arrive.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: ArrivalStore,
        indicator: ReloadIndicatorController | None = None,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        timer: Timer | None = None,
        executor: Executor | None = None,
    ) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        self._fetcher = fetcher
        self._store = store
        self._indicator = indicator
        self._poll_interval_seconds = poll_interval_seconds
        self._timer = timer or ThreadedTimer()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="stop-poll")
        self._lock = threading.RLock()
        self._session: PollSession | None = None
        self._generation = 0

    @property
    def poll_interval_seconds(self) -> float:
        return self._poll_interval_seconds

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.active

    @property
    def current_stop_id(self) -> StopID | None:
        with self._lock:
            return self._session.stop_id if self._session else None

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.in_flight

    def start(self, stop_id: StopID) -> None:
        """Begin polling a stop, replacing any session already running."""
        with self._lock:
            self._teardown_locked()
            self._generation += 1
            session = PollSession(stop_id=stop_id, generation=self._generation)
            self._session = session
        logger.info("Polling stop %s every %ss", stop_id, self._poll_interval_seconds)

        self._tick(session.generation)
        handle = self._timer.call_every(
            self._poll_interval_seconds, partial(self._tick, session.generation)
        )
        with self._lock:
            if self._session is session:
                session.timer_handle = handle
                return
        handle.cancel()

    def stop(self) -> None:
        """Stop polling; results still in flight are discarded on arrival."""
        with self._lock:
            stopped = self._teardown_locked()
        if self._indicator is not None:
            self._indicator.on_stop()
        if stopped is not None:
            logger.info("Stopped polling stop %s", stopped.stop_id)

    @contextmanager
    def session(self, stop_id: StopID) -> Iterator["StopPollScheduler"]:
        """Poll a stop for the duration of a with-block."""
        self.start(stop_id)
        try:
            yield self
        finally:
            self.stop()

    def shutdown(self) -> None:
        """Stop polling, wait briefly for timer threads and release the executor created here."""
        self.stop()
        if isinstance(self._timer, ThreadedTimer):
            self._timer.join(timeout=TIMER_JOIN_TIMEOUT_SECONDS)
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def _teardown_locked(self) -> PollSession | None:
        session = self._session
        if session is None:
            return None
        if session.timer_handle is not None:
            session.timer_handle.cancel()
            session.timer_handle = None
        session.active = False
        session.in_flight = False
        self._session = None
        return session

    def _current_locked(self, generation: int) -> PollSession | None:
        session = self._session
        if session is None or not session.active or session.generation != generation:
            return None
        return session

    def _tick(self, generation: int) -> None:
        with self._lock:
            session = self._current_locked(generation)
            if session is None:
                return
            if session.in_flight:
                logger.debug("Skipping tick for stop %s, fetch still in flight", session.stop_id)
                return
            session.in_flight = True
            stop_id = session.stop_id

            if self._indicator is not None:
                self._indicator.on_poll_start()
            future = self._executor.submit(self._fetcher.fetch, stop_id)
        future.add_done_callback(partial(self._on_fetch_done, generation, stop_id))

    def _on_fetch_done(self, generation: int, stop_id: StopID, future: Future) -> None:
        with self._lock:
            session = self._current_locked(generation)
            if session is None:
                logger.debug("Dropping late result for stop %s (generation %s)", stop_id, generation)
                return
            session.in_flight = False

            try:
                payload = future.result()
            except (NetworkError, ApplicationError) as exc:
                logger.warning("Arrivals fetch for stop %s failed: %s", stop_id, exc)
                return

            arrivals = normalize_arrivals(payload)
            self._store.update_arrivals(stop_id, arrivals)
        logger.debug("Stop %s updated with %d arrivals", stop_id, len(arrivals))


__all__ = [
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "PollSession",
    "StopPollScheduler",
    "ThreadedTimer",
    "Timer",
    "TimerHandle",
]
