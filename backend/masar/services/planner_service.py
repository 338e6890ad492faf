from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Literal
from uuid import UUID

from masar.core.config import get_settings
from masar.core.logging import get_logger
from masar.domain.coordinates import Coordinate
from masar.domain.locations import (
    CurrentPosition,
    Location,
    coordinate_address,
    current_position_address,
    shared_location_address,
)
from masar.domain.routes import RouteSummary
from masar.parsing.coordinates import parse_coordinate_pair
from masar.parsing.links import extract_short_link, parse_coordinate_from_link
from masar.services.geocoding import GeocodeResult, geocode_address, reverse_geocode
from masar.services.links import resolve_short_link
from masar.services.repository import SessionRepository
from masar.services.routing import MissingOriginError, plan_route
from masar.services.session import PlannerSession


GeocoderCallable = Callable[[str], Awaitable[GeocodeResult]]
ReverseGeocoderCallable = Callable[[float, float], Awaitable[str | None]]
LinkResolverCallable = Callable[[str], Awaitable[str | None]]
RoutePlannerCallable = Callable[..., RouteSummary]

InputMethod = Literal["address", "coordinates", "link"]


_logger = get_logger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown or expired."""


class LocationParseError(ValueError):
    """Raised when user text cannot be turned into a coordinate."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class GeocodingError(ValueError):
    """Raised when an address cannot be resolved to a coordinate."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class PlannerService:
    """Owns planning sessions and wires parsing, geocoding and routing."""

    def __init__(
        self,
        repository: SessionRepository,
        *,
        geocoder: GeocoderCallable = geocode_address,
        reverse_geocoder: ReverseGeocoderCallable = reverse_geocode,
        link_resolver: LinkResolverCallable = resolve_short_link,
        route_planner: RoutePlannerCallable = plan_route,
    ) -> None:
        self._repository = repository
        self._lock = asyncio.Lock()
        self._geocoder = geocoder
        self._reverse_geocoder = reverse_geocoder
        self._link_resolver = link_resolver
        self._route_planner = route_planner

    async def create_session(self) -> PlannerSession:
        session = PlannerSession()
        self._repository.add(session)
        _logger.info("Session created", session_id=str(session.session_id))
        return session

    async def get_session(self, session_id: UUID) -> PlannerSession:
        session = self._repository.get(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    async def delete_session(self, session_id: UUID) -> None:
        if not self._repository.delete(session_id):
            raise SessionNotFoundError(str(session_id))
        _logger.info("Session deleted", session_id=str(session_id))

    async def set_origin(
        self,
        session_id: UUID,
        *,
        latitude: float | None = None,
        longitude: float | None = None,
        address: str | None = None,
    ) -> CurrentPosition:
        session = await self.get_session(session_id)
        label = (address or "").strip()

        if latitude is not None and longitude is not None:
            coordinate = Coordinate.create(latitude, longitude)
            if coordinate is None:
                raise LocationParseError(
                    "Current position is out of range", f"{latitude},{longitude}"
                )
            if not label:
                label = await self._describe_position(coordinate)
        elif label:
            coordinate = await self._geocode(label)
        else:
            raise LocationParseError("Provide coordinates or an address", "")

        origin = CurrentPosition(coordinate=coordinate, address=label)
        async with self._lock:
            session.set_origin(origin)

        _logger.info(
            "Current position set",
            session_id=str(session_id),
            latitude=coordinate.lat,
            longitude=coordinate.lng,
        )
        return origin

    async def add_location(
        self,
        session_id: UUID,
        *,
        name: str,
        method: InputMethod,
        address: str | None = None,
        coordinates: str | None = None,
        link: str | None = None,
    ) -> Location:
        session = await self.get_session(session_id)
        label = (address or "").strip()

        if method == "link":
            coordinate = await self._parse_link(link or "")
            label = label or shared_location_address(coordinate)
        elif method == "coordinates":
            text = coordinates or ""
            coordinate = parse_coordinate_pair(text)
            if coordinate is None:
                raise LocationParseError(
                    "Invalid coordinate format, expected latitude,longitude "
                    "(e.g. 30.0444,31.2357)",
                    text,
                )
            label = label or coordinate_address(coordinate)
        elif method == "address":
            if not label:
                raise GeocodingError("An address is required", "")
            coordinate = await self._geocode(label)
        else:
            raise ValueError(f"Unsupported input method '{method}'")

        location = Location.create(name, coordinate, label)
        async with self._lock:
            session.add_location(location)

        _logger.info(
            "Location added",
            session_id=str(session_id),
            location_id=location.id,
            method=method,
        )
        return location

    async def remove_location(self, session_id: UUID, location_id: str) -> Location:
        session = await self.get_session(session_id)
        async with self._lock:
            removed = session.remove_location(location_id)
        _logger.info(
            "Location removed", session_id=str(session_id), location_id=location_id
        )
        return removed

    async def optimize(self, session_id: UUID) -> RouteSummary | None:
        """
        Compute the route for the session's current inputs.

        Returns ``None`` when the inputs changed while the route was being
        computed; the newer request owns the result.
        """
        session = await self.get_session(session_id)
        async with self._lock:
            snapshot = session.snapshot()
        if snapshot.origin is None:
            raise MissingOriginError("Set the current position before optimizing")

        summary = await asyncio.to_thread(self._route_planner, snapshot)

        async with self._lock:
            applied = session.apply_route(snapshot, summary)
        if not applied:
            _logger.info(
                "Stale route discarded",
                session_id=str(session_id),
                revision=snapshot.revision,
                current_revision=session.revision,
            )
            return None
        return summary

    async def _parse_link(self, text: str) -> Coordinate:
        coordinate = parse_coordinate_from_link(text)
        if coordinate is None:
            short_link = extract_short_link(text)
            if short_link:
                resolved = await self._link_resolver(short_link)
                if resolved:
                    coordinate = parse_coordinate_from_link(resolved)
        if coordinate is None:
            raise LocationParseError(
                "Could not extract coordinates from the link; make sure it "
                "contains a valid location",
                text,
            )
        return coordinate

    async def _geocode(self, address: str) -> Coordinate:
        result = await self._geocoder(address)
        coordinate = result.coordinate
        if coordinate is None:
            raise GeocodingError(result.message or "Address not found", address)
        return coordinate

    async def _describe_position(self, coordinate: Coordinate) -> str:
        if get_settings().reverse_geocode_origin:
            resolved = await self._reverse_geocoder(coordinate.lat, coordinate.lng)
            if resolved:
                return resolved
        return current_position_address(coordinate)


_planner_service: PlannerService | None = None


def get_planner_service() -> PlannerService:
    global _planner_service
    if _planner_service is None:
        settings = get_settings()
        repository = SessionRepository(
            max_sessions=settings.max_sessions,
            ttl_seconds=settings.session_ttl_seconds,
        )
        _planner_service = PlannerService(repository)
    return _planner_service
