"""Watch live shuttle arrivals for one stop from the command line."""

from __future__ import annotations

import argparse
import logging
import time

from shuttle_tracker.config import AppConfig, load_config
from shuttle_tracker.data.campus_client import ArrivalFetcher, CampusClient
from shuttle_tracker.data.location import StaticLocationProvider
from shuttle_tracker.data.models import StopInfo
from shuttle_tracker.data.poller import StopPollScheduler
from shuttle_tracker.data.store import StopStore
from shuttle_tracker.handoff import BrowserOpener, goto_navigation_app
from shuttle_tracker.log_setup import configure_logging
from shuttle_tracker.logic.ranking import distance_miles_str, meters_to_miles, nearest_stops
from shuttle_tracker.logic.reload_indicator import ReloadIndicatorController

logger = logging.getLogger("watch_stop")

NO_SHUTTLES_TEXT = "There are no active shuttles at this time"


def _build_store(config: AppConfig) -> StopStore:
    return StopStore(
        StopInfo(id=stop.id, name=stop.name, lat=stop.lat, lon=stop.lon)
        for stop in config.shuttle.stops
    )


def _format_stop(stop: StopInfo | None) -> str:
    if stop is None or not stop.has_active_shuttles:
        return NO_SHUTTLES_TEXT
    return ", ".join(
        f"{arrival.route_label} {arrival.eta_display or '--'}" for arrival in stop.arrivals or ()
    )


def _print_nearest(store: StopStore, latitude: float, longitude: float) -> None:
    origin = StaticLocationProvider(latitude, longitude).current_position()
    for ranked in nearest_stops(store.stops(), origin):
        miles = distance_miles_str(meters_to_miles(ranked.distance))
        print(f"{ranked.stop.id}\t{ranked.stop.name}\t{miles}", flush=True)


def _watch(config: AppConfig, store: StopStore, stop_id: str, refresh_seconds: float) -> None:
    client = CampusClient(
        arrivals_url=config.shuttle.arrivals_url,
        dining_url=config.dining.url,
        timeout_seconds=config.shuttle.request_timeout_seconds,
    )
    indicator = ReloadIndicatorController(
        duration_seconds=config.ramp_seconds,
        saturation=config.indicator.saturation,
    )
    scheduler = StopPollScheduler(
        fetcher=ArrivalFetcher(client),
        store=store,
        indicator=indicator,
        poll_interval_seconds=config.shuttle.poll_interval_seconds,
    )
    try:
        with scheduler.session(stop_id):
            while True:
                time.sleep(refresh_seconds)
                print(
                    f"[{indicator.progress:5.1f}%] {stop_id}: {_format_stop(store.get(stop_id))}",
                    flush=True,
                )
    finally:
        scheduler.shutdown()


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("stop_id", nargs="?", help="Stop to watch")
    parser.add_argument("--config", default="config/config.yaml", help="Path to config YAML")
    parser.add_argument(
        "--nearest",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="List configured stops nearest-first from a position and exit",
    )
    parser.add_argument(
        "--directions",
        action="store_true",
        help="Open walking directions to the stop and exit",
    )
    parser.add_argument(
        "--platform",
        choices=["ios", "android"],
        default="android",
        help="Maps application URL style for --directions",
    )
    parser.add_argument("--refresh", type=float, default=1.0, help="Seconds between screen updates")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)
    store = _build_store(config)

    if args.nearest:
        _print_nearest(store, *args.nearest)
        return 0

    if not args.stop_id:
        parser.error("stop_id is required unless --nearest is given")

    if args.directions:
        stop = store.get(args.stop_id)
        if stop is None:
            parser.error(f"Unknown stop: {args.stop_id}")
        return 0 if goto_navigation_app(stop.lat, stop.lon, BrowserOpener(), args.platform) else 1

    try:
        _watch(config, store, args.stop_id, args.refresh)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
