from masar.domain.coordinates import Coordinate
from masar.domain.locations import Location
from masar.domain.optimization import build_route


START = Coordinate(0, 0)


def _location(name, lat, lng):
    return Location.create(name, Coordinate(lat, lng))


def test_empty_destinations_give_empty_route():
    assert build_route(START, []) == ()


def test_route_is_a_permutation_of_destinations():
    destinations = [
        _location("A", 0.5, 0.3),
        _location("B", -0.2, 1.1),
        _location("C", 1.4, -0.7),
        _location("D", 0.1, 0.1),
    ]

    route = build_route(START, destinations)

    assert len(route) == len(destinations)
    assert {item.id for item in route} == {item.id for item in destinations}
    assert all(any(item is original for original in destinations) for item in route)


def test_colinear_points_are_visited_in_distance_order():
    destinations = [_location("far", 0, 3), _location("near", 0, 1), _location("mid", 0, 2)]

    route = build_route(START, destinations)

    assert [item.name for item in route] == ["near", "mid", "far"]


def test_greedy_order_is_kept_even_when_not_optimal():
    destinations = [_location("east", 0, 1), _location("west", 0, -1), _location("far east", 0, 2)]

    route = build_route(START, destinations)

    # Visiting west first would be shorter overall; nearest-first does not
    assert [item.name for item in route] == ["east", "far east", "west"]


def test_ties_go_to_first_encountered():
    first = _location("first", 0, 1)
    second = _location("second", 0, -1)

    assert [item.name for item in build_route(START, [first, second])] == [
        "first",
        "second",
    ]
    assert [item.name for item in build_route(START, [second, first])] == [
        "second",
        "first",
    ]


def test_input_is_not_mutated():
    destinations = [_location("B", 0, 2), _location("A", 0, 1)]
    snapshot = list(destinations)

    build_route(START, destinations)

    assert destinations == snapshot
