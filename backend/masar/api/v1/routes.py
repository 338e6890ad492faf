from __future__ import annotations

import asyncio

from fastapi import APIRouter, status

from masar.core.config import get_settings
from masar.domain.coordinates import Coordinate
from masar.domain.locations import Location
from masar.domain.optimization import build_route
from masar.schemas.routes import RouteRequest, RouteSummaryPayload
from masar.services.navigation import build_navigation_links
from masar.services.routing import summarize


router = APIRouter()


@router.post(
    "/",
    response_model=RouteSummaryPayload,
    status_code=status.HTTP_200_OK,
)
async def create_route(payload: RouteRequest) -> RouteSummaryPayload:
    settings = get_settings()
    start = Coordinate(payload.origin.latitude, payload.origin.longitude)
    stops = [
        Location.create(
            stop.label or f"Stop {index}",
            Coordinate(stop.latitude, stop.longitude),
        )
        for index, stop in enumerate(payload.stops, start=1)
    ]

    ordered = await asyncio.to_thread(build_route, start, stops)
    summary = summarize(start, ordered)

    return RouteSummaryPayload.from_domain(
        summary,
        build_navigation_links(start, summary.stops),
        settings.display_locale,
    )
