from masar.domain.coordinates import Coordinate
from masar.domain.locations import Location
from masar.services.navigation import (
    build_navigation_links,
    google_directions_url,
    google_path_url,
    google_search_url,
    waze_url,
)


START = Coordinate(30.0444, 31.2357)


def _route():
    return [
        Location.create("A", Coordinate(30.05, 31.24)),
        Location.create("B", Coordinate(30.1, 31.3)),
        Location.create("C", Coordinate(29.98, 31.13)),
    ]


def test_directions_url_uses_last_stop_as_destination():
    url = google_directions_url(START, _route())

    assert url.startswith("https://www.google.com/maps/dir/?api=1")
    assert "origin=30.0444,31.2357" in url
    assert "destination=29.98,31.13" in url
    assert "waypoints=30.05,31.24|30.1,31.3" in url
    assert url.endswith("travelmode=driving")


def test_directions_url_for_single_stop_has_no_waypoints():
    url = google_directions_url(START, _route()[:1])

    assert "destination=30.05,31.24" in url
    assert "waypoints" not in url


def test_directions_url_without_stops_points_back_to_origin():
    assert "destination=30.0444,31.2357" in google_directions_url(START, [])


def test_path_url_lists_every_point():
    assert google_path_url(START, _route()) == (
        "https://www.google.com/maps/dir/30.0444,31.2357/30.05,31.24/30.1,31.3/29.98,31.13"
    )


def test_stop_links():
    point = Coordinate(30.05, 31.24)
    assert google_search_url(point) == (
        "https://www.google.com/maps/search/?api=1&query=30.05,31.24"
    )
    assert waze_url(point) == "https://waze.com/ul?ll=30.05,31.24&navigate=yes"

    route = _route()
    links = build_navigation_links(START, route)
    assert [stop.location_id for stop in links.stops] == [item.id for item in route]
