from __future__ import annotations

from dataclasses import dataclass

import pytest

from shuttle_tracker.data.models import Coordinate, StopInfo
from shuttle_tracker.logic.ranking import (
    distance_miles_str,
    haversine_meters,
    meters_to_miles,
    nearest_stops,
    rank,
    sort_by,
)


@dataclass(frozen=True)
class _Marker:
    name: str
    distance: float


def test_rank_empty() -> None:
    assert rank([]) == []


def test_rank_single_element_unchanged() -> None:
    marker = _Marker("only", 3.0)

    assert rank([marker]) == [marker]


def test_rank_orders_ascending_and_is_permutation() -> None:
    markers = [_Marker("c", 9.5), _Marker("a", 0.2), _Marker("b", 4.0), _Marker("d", 0.2)]

    ranked = rank(markers)

    assert [m.distance for m in ranked] == [0.2, 0.2, 4.0, 9.5]
    assert sorted(ranked, key=lambda m: m.name) == sorted(markers, key=lambda m: m.name)


def test_rank_is_stable_for_ties() -> None:
    markers = [_Marker("first", 1.0), _Marker("second", 1.0), _Marker("closer", 0.5), _Marker("third", 1.0)]

    ranked = rank(markers)

    assert [m.name for m in ranked] == ["closer", "first", "second", "third"]


def test_rank_accepts_mappings() -> None:
    markers = [{"id": 1, "distance": 2}, {"id": 2, "distance": 1}]

    assert [m["id"] for m in rank(markers)] == [2, 1]


def test_rank_does_not_mutate_input() -> None:
    markers = [_Marker("b", 2.0), _Marker("a", 1.0)]

    rank(markers)

    assert [m.name for m in markers] == ["b", "a"]


def test_sort_by_other_field() -> None:
    markers = [_Marker("b", 1.0), _Marker("a", 2.0)]

    assert [m.name for m in sort_by(markers, "name")] == ["a", "b"]


def test_haversine_zero_and_known_distance() -> None:
    point = Coordinate(latitude=32.88, longitude=-117.23)

    assert haversine_meters(point, point) == 0.0
    one_degree = haversine_meters(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0))
    assert one_degree == pytest.approx(111195, rel=1e-3)


def test_nearest_stops_orders_by_distance() -> None:
    origin = Coordinate(latitude=32.8800, longitude=-117.2340)
    far = StopInfo(id="far", name="Far", lat=32.9000, lon=-117.2340)
    near = StopInfo(id="near", name="Near", lat=32.8801, lon=-117.2340)

    ranked = nearest_stops([far, near], origin)

    assert [r.stop.id for r in ranked] == ["near", "far"]
    assert ranked[0].distance < ranked[1].distance


def test_miles_helpers() -> None:
    assert meters_to_miles(1609.344) == pytest.approx(1.0)
    assert distance_miles_str(0.26) == "0.3 mi"
    assert distance_miles_str(12) == "12.0 mi"
