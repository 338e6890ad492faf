from __future__ import annotations

from dataclasses import dataclass
from math import atan2, cos, floor, radians, sin, sqrt
from typing import Iterable, Literal

from masar.domain.coordinates import Coordinate
from masar.domain.locations import Location

EARTH_RADIUS_KM = 6371.0
DEFAULT_SPEED_KMH = 50.0

DisplayLocale = Literal["en", "ar"]

_UNITS: dict[str, dict[str, str]] = {
    "en": {"m": "m", "km": "km", "min": "min", "h": "h", "join": " "},
    "ar": {"m": "متر", "km": "كم", "min": "دقيقة", "h": "ساعة", "join": " و "},
}


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate the great circle distance between two coordinates
    in kilometers using the haversine formula.
    """
    lat1_rad, lon1_rad = radians(a.lat), radians(a.lng)
    lat2_rad, lon2_rad = radians(b.lat), radians(b.lng)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    h = sin(dlat / 2) ** 2 + cos(lat1_rad) * cos(lat2_rad) * sin(dlon / 2) ** 2
    h = min(1.0, max(0.0, h))
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True, slots=True)
class TravelDuration:
    """Estimated travel time rounded to whole minutes."""

    total_minutes: int

    @property
    def hours(self) -> int:
        return self.total_minutes // 60

    @property
    def minutes(self) -> int:
        return self.total_minutes % 60

    def display(self, locale: DisplayLocale = "en") -> str:
        units = _UNITS[locale]
        if self.total_minutes < 60:
            return f"{self.total_minutes} {units['min']}"
        if self.minutes == 0:
            return f"{self.hours} {units['h']}"
        return f"{self.hours} {units['h']}{units['join']}{self.minutes} {units['min']}"

    def __str__(self) -> str:
        return self.display()


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def estimate_duration(
    distance: float, speed_kmh: float = DEFAULT_SPEED_KMH
) -> TravelDuration:
    """Estimate driving time for a distance at a constant average speed."""

    if distance < 0:
        raise ValueError(f"Distance must not be negative, got {distance!r}")
    if speed_kmh <= 0:
        raise ValueError(f"Speed must be positive, got {speed_kmh!r}")
    return TravelDuration(_round_half_up(distance / speed_kmh * 60))


def format_distance(distance: float, locale: DisplayLocale = "en") -> str:
    """Render meters below one kilometer, otherwise kilometers with one decimal."""

    units = _UNITS[locale]
    if distance < 1:
        return f"{_round_half_up(distance * 1000)} {units['m']}"
    return f"{distance:.1f} {units['km']}"


def sort_by_distance(
    locations: Iterable[Location], origin: Coordinate
) -> list[Location]:
    """Annotate copies with their distance from ``origin`` and sort nearest first."""

    annotated = [
        location.with_distance(distance_km(origin, location.coordinate))
        for location in locations
    ]
    return sorted(annotated, key=lambda item: item.distance_km or 0.0)
