from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from masar.domain.coordinates import Coordinate
from masar.domain.geometry import DisplayLocale, TravelDuration, format_distance
from masar.domain.locations import CurrentPosition, Location


@dataclass(frozen=True, slots=True)
class RouteLeg:
    order: int
    location: Location
    origin: Coordinate
    destination: Coordinate
    distance_km: float
    duration: TravelDuration
    cumulative_distance_km: float
    cumulative_duration: TravelDuration


@dataclass(frozen=True, slots=True)
class RouteSummary(Sequence[RouteLeg]):
    """Per-leg and aggregate estimates for an ordered route."""

    start: Coordinate
    legs: tuple[RouteLeg, ...] = ()
    total_distance_km: float = 0.0
    total_duration: TravelDuration = field(default_factory=lambda: TravelDuration(0))

    @property
    def stops(self) -> tuple[Location, ...]:
        return tuple(leg.location for leg in self.legs)

    def total_distance_label(self, locale: DisplayLocale = "en") -> str:
        return format_distance(self.total_distance_km, locale)

    def total_duration_label(self, locale: DisplayLocale = "en") -> str:
        return self.total_duration.display(locale)

    def __iter__(self) -> Iterator[RouteLeg]:
        return iter(self.legs)

    def __len__(self) -> int:
        return len(self.legs)

    def __getitem__(self, index: int) -> RouteLeg:  # type: ignore[override]
        return self.legs[index]


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Immutable inputs for one route computation, tagged with a revision."""

    revision: int
    origin: CurrentPosition | None
    locations: tuple[Location, ...]
