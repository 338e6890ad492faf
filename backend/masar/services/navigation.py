from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
from urllib.parse import urlencode

from masar.domain.coordinates import Coordinate
from masar.domain.locations import Location

_GOOGLE_DIRECTIONS = "https://www.google.com/maps/dir/"
_GOOGLE_SEARCH = "https://www.google.com/maps/search/"
_WAZE = "https://waze.com/ul"


@dataclass(frozen=True, slots=True)
class StopLinks:
    location_id: str
    google_maps: str
    waze: str


@dataclass(frozen=True, slots=True)
class NavigationLinks:
    google_directions: str
    google_path: str
    stops: tuple[StopLinks, ...]


def _encode(params: dict[str, str]) -> str:
    return urlencode(params, safe=",|")


def google_directions_url(start: Coordinate, route: Sequence[Location]) -> str:
    """Directions URL with the last stop as destination and the rest as waypoints."""

    destination = route[-1].coordinate if route else start
    params = {
        "api": "1",
        "origin": start.as_query(),
        "destination": destination.as_query(),
    }
    if len(route) > 1:
        params["waypoints"] = "|".join(
            location.coordinate.as_query() for location in route[:-1]
        )
    params["travelmode"] = "driving"
    return f"{_GOOGLE_DIRECTIONS}?{_encode(params)}"


def google_path_url(start: Coordinate, route: Sequence[Location]) -> str:
    points = [start.as_query(), *(location.coordinate.as_query() for location in route)]
    return _GOOGLE_DIRECTIONS + "/".join(points)


def google_search_url(coordinate: Coordinate) -> str:
    return f"{_GOOGLE_SEARCH}?{_encode({'api': '1', 'query': coordinate.as_query()})}"


def waze_url(coordinate: Coordinate) -> str:
    return f"{_WAZE}?{_encode({'ll': coordinate.as_query(), 'navigate': 'yes'})}"


def build_navigation_links(
    start: Coordinate, route: Sequence[Location]
) -> NavigationLinks:
    return NavigationLinks(
        google_directions=google_directions_url(start, route),
        google_path=google_path_url(start, route),
        stops=tuple(
            StopLinks(
                location_id=location.id,
                google_maps=google_search_url(location.coordinate),
                waze=waze_url(location.coordinate),
            )
            for location in route
        ),
    )
