from __future__ import annotations

import re
from typing import Callable, Sequence

from masar.domain.coordinates import Coordinate

NUMBER = r"[-+]?\d+(?:\.\d*)?"

CoordinateMatcher = Callable[[str], Coordinate | None]


def coordinate_from_text(lat_text: str, lng_text: str) -> Coordinate | None:
    """Convert two numeric strings to a Coordinate; ``None`` when invalid."""

    try:
        lat = float(lat_text)
        lng = float(lng_text)
    except (TypeError, ValueError):
        return None
    return Coordinate.create(lat, lng)


def first_match(text: str, matchers: Sequence[CoordinateMatcher]) -> Coordinate | None:
    for matcher in matchers:
        coordinate = matcher(text)
        if coordinate is not None:
            return coordinate
    return None


_COMMA_PAIR = re.compile(rf"^({NUMBER})\s*,\s*({NUMBER})$")
_SPACE_PAIR = re.compile(rf"^({NUMBER})\s+({NUMBER})$")
_LABELED_PAIR = re.compile(
    rf"^lat(?:itude)?\s*[:=]\s*({NUMBER})\s*[,;]?\s*"
    rf"(?:lng|lon|long|longitude)\s*[:=]\s*({NUMBER})$",
    flags=re.IGNORECASE,
)
_DEGREE_PAIR = re.compile(
    rf"^({NUMBER})\s*°?\s*([NS])?\s*,?\s*({NUMBER})\s*°?\s*([EW])?$",
    flags=re.IGNORECASE,
)


def _match_comma_pair(text: str) -> Coordinate | None:
    match = _COMMA_PAIR.match(text)
    return coordinate_from_text(*match.groups()) if match else None


def _match_space_pair(text: str) -> Coordinate | None:
    match = _SPACE_PAIR.match(text)
    return coordinate_from_text(*match.groups()) if match else None


def _match_labeled_pair(text: str) -> Coordinate | None:
    match = _LABELED_PAIR.match(text)
    return coordinate_from_text(*match.groups()) if match else None


def _match_degree_pair(text: str) -> Coordinate | None:
    match = _DEGREE_PAIR.match(text)
    if not match:
        return None
    lat_text, lat_hemisphere, lng_text, lng_hemisphere = match.groups()
    # Without a degree sign or hemisphere the numbers could be split anywhere
    if "°" not in text and not (lat_hemisphere or lng_hemisphere):
        return None
    try:
        lat = float(lat_text)
        lng = float(lng_text)
    except ValueError:
        return None
    # Hemisphere letters carry the sign
    if lat_hemisphere and lat_hemisphere.upper() == "S":
        lat = -abs(lat)
    if lng_hemisphere and lng_hemisphere.upper() == "W":
        lng = -abs(lng)
    return Coordinate.create(lat, lng)


PAIR_MATCHERS: list[CoordinateMatcher] = [
    _match_comma_pair,
    _match_space_pair,
    _match_labeled_pair,
    _match_degree_pair,
]


def parse_coordinate_pair(text: str) -> Coordinate | None:
    """
    Parse a typed coordinate pair such as ``30.0444,31.2357``,
    ``30.0444 31.2357``, ``lat: 30.0444, lng: 31.2357`` or
    ``30.0444° N, 31.2357° E``. Returns ``None`` when no format yields an
    in-range pair.
    """
    if not isinstance(text, str):
        return None
    cleaned = text.strip()
    if not cleaned:
        return None
    return first_match(cleaned, PAIR_MATCHERS)
