from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import uuid4

from masar.domain.coordinates import Coordinate


def new_location_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, slots=True)
class Location:
    """A named destination the user wants to visit."""

    id: str
    name: str
    address: str
    coordinate: Coordinate
    distance_km: float | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Location name must not be empty")

    @classmethod
    def create(
        cls, name: str, coordinate: Coordinate, address: str | None = None
    ) -> "Location":
        cleaned_name = name.strip()
        cleaned_address = (address or "").strip() or coordinate.label()
        return cls(new_location_id(), cleaned_name, cleaned_address, coordinate)

    def with_distance(self, distance_km: float) -> "Location":
        return replace(self, distance_km=distance_km)


@dataclass(frozen=True, slots=True)
class CurrentPosition:
    """The fixed starting point of a route."""

    coordinate: Coordinate
    address: str


def shared_location_address(coordinate: Coordinate) -> str:
    return f"Shared location ({coordinate.label()})"


def coordinate_address(coordinate: Coordinate) -> str:
    return f"Location ({coordinate.label()})"


def current_position_address(coordinate: Coordinate) -> str:
    return f"Current location ({coordinate.label()})"
