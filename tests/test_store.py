from __future__ import annotations

from shuttle_tracker.data.location import StaticLocationProvider
from shuttle_tracker.data.models import ArrivalRecord, Coordinate, StopInfo, normalize_arrivals
from shuttle_tracker.data.store import StopStore


def _stop(arrivals=None) -> StopInfo:
    return StopInfo(id="1114", name="Gilman & Myers", lat=32.877, lon=-117.2349, arrivals=arrivals)


def test_arrival_record_display_is_derived() -> None:
    record = ArrivalRecord(route_label="Blue", eta_raw="0900")

    assert record.eta_display == "9am"


def test_arrival_record_from_payload_missing_fields() -> None:
    record = ArrivalRecord.from_payload({"route": " Clockwise "})

    assert record.route_label == "Clockwise"
    assert record.eta_raw == ""
    assert record.eta_display == ""


def test_normalize_arrivals_skips_non_dicts() -> None:
    arrivals = normalize_arrivals([{"route": "A", "eta": "1200"}, "junk", None])

    assert arrivals == (ArrivalRecord(route_label="A", eta_raw="1200"),)


def test_stop_info_active_shuttles() -> None:
    assert not _stop().has_active_shuttles
    assert not _stop(arrivals=()).has_active_shuttles
    assert _stop(arrivals=(ArrivalRecord("A", "1200"),)).has_active_shuttles
    assert _stop().arrivals is None
    assert _stop(arrivals=()).arrivals == ()


def test_update_arrivals_keeps_stop_details() -> None:
    store = StopStore([_stop()])
    arrivals = (ArrivalRecord("A", "1200"),)

    store.update_arrivals("1114", arrivals)

    stop = store.get("1114")
    assert stop.name == "Gilman & Myers"
    assert stop.arrivals == arrivals


def test_update_arrivals_last_writer_wins() -> None:
    store = StopStore([_stop()])

    store.update_arrivals("1114", (ArrivalRecord("A", "1200"),))
    store.update_arrivals("1114", ())

    assert store.get("1114").arrivals == ()


def test_update_arrivals_unknown_stop_creates_placeholder() -> None:
    store = StopStore()

    store.update_arrivals(42, (ArrivalRecord("A", "1200"),))

    stop = store.get(42)
    assert stop.id == 42
    assert stop.name == "42"
    assert len(store.stops()) == 1


def test_static_location_provider() -> None:
    provider = StaticLocationProvider(32.88, -117.23)

    assert provider.current_position() == Coordinate(latitude=32.88, longitude=-117.23)
