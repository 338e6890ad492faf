from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from masar.domain.locations import CurrentPosition, Location


ParseKind = Literal["link", "coordinates", "auto"]
InputMethod = Literal["address", "coordinates", "link"]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


class ParseRequest(BaseModel):
    text: str = Field(..., max_length=4096)
    kind: ParseKind = "auto"


class ParseResponse(BaseModel):
    latitude: float
    longitude: float
    matched: Literal["link", "coordinates"]


class LocationPayload(BaseModel):
    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    distance_km: float | None = None

    @classmethod
    def from_domain(cls, location: Location) -> "LocationPayload":
        return cls(
            id=location.id,
            name=location.name,
            address=location.address,
            latitude=location.coordinate.lat,
            longitude=location.coordinate.lng,
            distance_km=location.distance_km,
        )


class LocationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    method: InputMethod = "address"
    address: str | None = Field(default=None, max_length=500)
    coordinates: str | None = Field(default=None, max_length=200)
    link: str | None = Field(default=None, max_length=4096)

    @field_validator("name", mode="before")
    def _normalize_name(cls, value: str) -> str:
        return str(value).strip() if value is not None else value

    @field_validator("address", "coordinates", "link", mode="before")
    def _normalize_optional(cls, value: str | None) -> str | None:
        return _clean(value)

    @model_validator(mode="after")
    def _require_method_input(self) -> "LocationCreateRequest":
        provided = {
            "address": self.address,
            "coordinates": self.coordinates,
            "link": self.link,
        }
        if provided[self.method] is None:
            raise ValueError(f"'{self.method}' is required for method '{self.method}'")
        return self


class OriginRequest(BaseModel):
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    address: str | None = Field(default=None, max_length=500)

    @field_validator("address", mode="before")
    def _normalize_address(cls, value: str | None) -> str | None:
        return _clean(value)

    @model_validator(mode="after")
    def _require_position(self) -> "OriginRequest":
        has_pair = self.latitude is not None and self.longitude is not None
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        if not has_pair and self.address is None:
            raise ValueError("Provide latitude/longitude or an address")
        return self


class OriginPayload(BaseModel):
    latitude: float
    longitude: float
    address: str

    @classmethod
    def from_domain(cls, origin: CurrentPosition) -> "OriginPayload":
        return cls(
            latitude=origin.coordinate.lat,
            longitude=origin.coordinate.lng,
            address=origin.address,
        )
