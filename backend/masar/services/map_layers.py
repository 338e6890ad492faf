from __future__ import annotations

from typing import Any, Sequence

from masar.domain.coordinates import Coordinate
from masar.domain.locations import CurrentPosition, Location


def _point(coordinate: Coordinate) -> dict[str, Any]:
    # GeoJSON positions are [longitude, latitude]
    return {"type": "Point", "coordinates": [coordinate.lng, coordinate.lat]}


def build_feature_collection(
    locations: Sequence[Location],
    origin: CurrentPosition | None = None,
    route: Sequence[Location] | None = None,
) -> dict[str, Any]:
    """Describe markers and the route path as a GeoJSON FeatureCollection."""

    features: list[dict[str, Any]] = []
    order_by_id = {location.id: order for order, location in enumerate(route or ())}

    if origin is not None:
        features.append(
            {
                "type": "Feature",
                "geometry": _point(origin.coordinate),
                "properties": {"kind": "origin", "address": origin.address},
            }
        )

    for location in locations:
        properties: dict[str, Any] = {
            "kind": "location",
            "id": location.id,
            "name": location.name,
            "address": location.address,
        }
        if location.id in order_by_id:
            properties["order"] = order_by_id[location.id] + 1
        features.append(
            {
                "type": "Feature",
                "geometry": _point(location.coordinate),
                "properties": properties,
            }
        )

    if route and origin is not None:
        path = [origin.coordinate, *(location.coordinate for location in route)]
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[point.lng, point.lat] for point in path],
                },
                "properties": {"kind": "route", "stops": len(route)},
            }
        )

    return {"type": "FeatureCollection", "features": features}
