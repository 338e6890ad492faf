from __future__ import annotations

from typing import Sequence

from masar.core.config import get_settings
from masar.core.logging import get_logger
from masar.domain.coordinates import Coordinate
from masar.domain.geometry import distance_km, estimate_duration
from masar.domain.locations import Location
from masar.domain.optimization import build_route
from masar.domain.routes import RouteLeg, RouteSummary, SessionSnapshot


_logger = get_logger(__name__)


class MissingOriginError(RuntimeError):
    """Raised when a route is requested before a current position is set."""


def summarize(
    start: Coordinate,
    route: Sequence[Location],
    *,
    speed_kmh: float | None = None,
) -> RouteSummary:
    """Walk the route once and derive per-leg and total distance/time estimates."""

    speed = speed_kmh if speed_kmh is not None else get_settings().average_speed_kmh

    legs: list[RouteLeg] = []
    previous = start
    cumulative_distance = 0.0

    for order, location in enumerate(route):
        leg_distance = distance_km(previous, location.coordinate)
        cumulative_distance += leg_distance
        legs.append(
            RouteLeg(
                order=order,
                location=location.with_distance(leg_distance),
                origin=previous,
                destination=location.coordinate,
                distance_km=leg_distance,
                duration=estimate_duration(leg_distance, speed),
                cumulative_distance_km=cumulative_distance,
                cumulative_duration=estimate_duration(cumulative_distance, speed),
            )
        )
        previous = location.coordinate

    return RouteSummary(
        start=start,
        legs=tuple(legs),
        total_distance_km=cumulative_distance,
        total_duration=estimate_duration(cumulative_distance, speed),
    )


def plan_route(
    snapshot: SessionSnapshot,
    *,
    speed_kmh: float | None = None,
) -> RouteSummary:
    """Order the snapshot's locations from its origin and summarize the result."""

    if snapshot.origin is None:
        raise MissingOriginError("A current position is required to plan a route")

    start = snapshot.origin.coordinate
    _logger.info(
        "Route computation started",
        revision=snapshot.revision,
        stops=len(snapshot.locations),
    )

    ordered = build_route(start, snapshot.locations)
    summary = summarize(start, ordered, speed_kmh=speed_kmh)

    _logger.info(
        "Route computation finished",
        revision=snapshot.revision,
        legs=len(summary),
        total_distance_km=round(summary.total_distance_km, 3),
        total_minutes=summary.total_duration.total_minutes,
    )
    return summary
