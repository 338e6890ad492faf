from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from masar.core.config import get_settings
from masar.schemas.locations import (
    LocationCreateRequest,
    LocationPayload,
    OriginPayload,
    OriginRequest,
)
from masar.schemas.routes import RouteSummaryPayload, SessionResponse
from masar.services.map_layers import build_feature_collection
from masar.services.navigation import build_navigation_links
from masar.services.planner_service import (
    GeocodingError,
    LocationParseError,
    PlannerService,
    SessionNotFoundError,
    get_planner_service,
)
from masar.services.routing import MissingOriginError
from masar.services.session import LocationNotFoundError, PlannerSession


router = APIRouter()

_UNPROCESSABLE = 422


def get_service() -> PlannerService:
    return get_planner_service()


def _route_payload(session: PlannerSession) -> RouteSummaryPayload | None:
    summary = session.route
    if summary is None:
        return None
    return RouteSummaryPayload.from_domain(
        summary,
        build_navigation_links(summary.start, summary.stops),
        get_settings().display_locale,
    )


def _to_response(session: PlannerSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        created_at=session.created_at,
        updated_at=session.updated_at,
        revision=session.revision,
        origin=OriginPayload.from_domain(session.origin) if session.origin else None,
        locations=[LocationPayload.from_domain(item) for item in session.locations],
        route=_route_payload(session),
    )


async def _load(service: PlannerService, session_id: UUID) -> PlannerSession:
    try:
        return await service.get_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Session not found") from None


@router.post("/", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    service: PlannerService = Depends(get_service),
) -> SessionResponse:
    session = await service.create_session()
    return _to_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: UUID, service: PlannerService = Depends(get_service)
) -> SessionResponse:
    return _to_response(await _load(service, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: UUID, service: PlannerService = Depends(get_service)
) -> Response:
    try:
        await service.delete_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Session not found") from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{session_id}/origin", response_model=SessionResponse)
async def set_origin(
    session_id: UUID,
    payload: OriginRequest,
    service: PlannerService = Depends(get_service),
) -> SessionResponse:
    session = await _load(service, session_id)
    try:
        await service.set_origin(
            session_id,
            latitude=payload.latitude,
            longitude=payload.longitude,
            address=payload.address,
        )
    except (LocationParseError, GeocodingError) as exc:
        raise HTTPException(
            _UNPROCESSABLE, {"message": str(exc), "text": exc.text}
        ) from None
    return _to_response(session)


@router.post(
    "/{session_id}/locations",
    response_model=LocationPayload,
    status_code=status.HTTP_201_CREATED,
)
async def add_location(
    session_id: UUID,
    payload: LocationCreateRequest,
    service: PlannerService = Depends(get_service),
) -> LocationPayload:
    await _load(service, session_id)
    try:
        location = await service.add_location(
            session_id,
            name=payload.name,
            method=payload.method,
            address=payload.address,
            coordinates=payload.coordinates,
            link=payload.link,
        )
    except (LocationParseError, GeocodingError) as exc:
        raise HTTPException(
            _UNPROCESSABLE, {"message": str(exc), "text": exc.text}
        ) from None
    return LocationPayload.from_domain(location)


@router.delete(
    "/{session_id}/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_location(
    session_id: UUID,
    location_id: str,
    service: PlannerService = Depends(get_service),
) -> Response:
    await _load(service, session_id)
    try:
        await service.remove_location(session_id, location_id)
    except LocationNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Location not found") from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/route", response_model=RouteSummaryPayload)
async def optimize_route(
    session_id: UUID, service: PlannerService = Depends(get_service)
) -> RouteSummaryPayload:
    await _load(service, session_id)
    try:
        summary = await service.optimize(session_id)
    except MissingOriginError as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, str(exc)) from None
    if summary is None:
        raise HTTPException(
            status.HTTP_409_CONFLICT, "Session changed while the route was computed"
        )
    return RouteSummaryPayload.from_domain(
        summary,
        build_navigation_links(summary.start, summary.stops),
        get_settings().display_locale,
    )


@router.get("/{session_id}/map")
async def session_map(
    session_id: UUID, service: PlannerService = Depends(get_service)
) -> dict[str, Any]:
    session = await _load(service, session_id)
    route = session.route
    return build_feature_collection(
        session.locations,
        session.origin,
        route.stops if route is not None else None,
    )
