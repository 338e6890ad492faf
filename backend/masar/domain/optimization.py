from __future__ import annotations

from typing import Iterable

from masar.domain.coordinates import Coordinate
from masar.domain.geometry import distance_km
from masar.domain.locations import Location


def build_route(
    start: Coordinate,
    destinations: Iterable[Location],
) -> tuple[Location, ...]:
    """
    Order destinations by greedy nearest-neighbor selection from ``start``.

    At every step the closest unvisited location becomes the next stop. Exact
    ties go to the element that appears first in the remaining pool, so the
    result depends only on the input order. The heuristic is O(n^2) and not
    globally optimal: layouts with stops on both sides of the start can make it
    run outward and double back.

    Args:
        start: Coordinate the route departs from.
        destinations: Locations to visit; the iterable is copied, never mutated.

    Returns:
        The same Location objects in visiting order.
    """
    # Repeated ids collapse to their first occurrence
    pool: list[Location] = []
    seen: set[str] = set()
    for location in destinations:
        if location.id not in seen:
            seen.add(location.id)
            pool.append(location)

    route: list[Location] = []
    current = start

    while pool:
        nearest_index = 0
        nearest_distance = distance_km(current, pool[0].coordinate)
        for index in range(1, len(pool)):
            candidate = distance_km(current, pool[index].coordinate)
            if candidate < nearest_distance:
                nearest_distance = candidate
                nearest_index = index

        nearest = pool.pop(nearest_index)
        route.append(nearest)
        current = nearest.coordinate

    return tuple(route)
