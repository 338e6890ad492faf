from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from masar.domain.geometry import DisplayLocale, format_distance
from masar.domain.routes import RouteLeg, RouteSummary
from masar.schemas.locations import LocationPayload, OriginPayload
from masar.services.navigation import NavigationLinks


class StopLinksPayload(BaseModel):
    location_id: str
    google_maps: str
    waze: str


class NavigationLinksPayload(BaseModel):
    google_directions: str
    google_path: str
    stops: list[StopLinksPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, links: NavigationLinks) -> "NavigationLinksPayload":
        return cls(
            google_directions=links.google_directions,
            google_path=links.google_path,
            stops=[
                StopLinksPayload(
                    location_id=stop.location_id,
                    google_maps=stop.google_maps,
                    waze=stop.waze,
                )
                for stop in links.stops
            ],
        )


class RouteLegPayload(BaseModel):
    order: int
    location: LocationPayload
    from_latitude: float
    from_longitude: float
    distance_km: float
    distance_label: str
    eta_minutes: int
    eta_label: str
    cumulative_distance_km: float
    cumulative_eta_minutes: int

    @classmethod
    def from_domain(cls, leg: RouteLeg, locale: DisplayLocale) -> "RouteLegPayload":
        return cls(
            order=leg.order,
            location=LocationPayload.from_domain(leg.location),
            from_latitude=leg.origin.lat,
            from_longitude=leg.origin.lng,
            distance_km=leg.distance_km,
            distance_label=format_distance(leg.distance_km, locale),
            eta_minutes=leg.duration.total_minutes,
            eta_label=leg.duration.display(locale),
            cumulative_distance_km=leg.cumulative_distance_km,
            cumulative_eta_minutes=leg.cumulative_duration.total_minutes,
        )


class RouteSummaryPayload(BaseModel):
    route: list[RouteLegPayload] = Field(default_factory=list)
    total_distance_km: float = 0.0
    total_distance_label: str
    total_eta_minutes: int = 0
    total_eta_label: str
    links: NavigationLinksPayload

    @classmethod
    def from_domain(
        cls,
        summary: RouteSummary,
        links: NavigationLinks,
        locale: DisplayLocale,
    ) -> "RouteSummaryPayload":
        return cls(
            route=[RouteLegPayload.from_domain(leg, locale) for leg in summary.legs],
            total_distance_km=summary.total_distance_km,
            total_distance_label=summary.total_distance_label(locale),
            total_eta_minutes=summary.total_duration.total_minutes,
            total_eta_label=summary.total_duration_label(locale),
            links=NavigationLinksPayload.from_domain(links),
        )


class RouteStop(BaseModel):
    label: str | None = Field(default=None)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    @field_validator("label", mode="before")
    def _normalize_label(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None


class RouteRequest(BaseModel):
    origin: RouteStop
    stops: list[RouteStop] = Field(default_factory=list, max_length=200)


class SessionResponse(BaseModel):
    session_id: UUID
    created_at: datetime
    updated_at: datetime
    revision: int
    origin: OriginPayload | None = None
    locations: list[LocationPayload] = Field(default_factory=list)
    route: RouteSummaryPayload | None = None
