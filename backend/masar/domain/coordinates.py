from __future__ import annotations

from dataclasses import dataclass
from math import isfinite

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


class InvalidCoordinateError(ValueError):
    """Raised when a latitude/longitude pair falls outside the valid envelope."""


def is_valid_pair(lat: float, lng: float) -> bool:
    if not (isfinite(lat) and isfinite(lng)):
        return False
    return (
        LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]
        and LONGITUDE_RANGE[0] <= lng <= LONGITUDE_RANGE[1]
    )


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A validated latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not is_valid_pair(self.lat, self.lng):
            raise InvalidCoordinateError(
                f"Coordinate out of range: lat={self.lat!r}, lng={self.lng!r}"
            )

    @classmethod
    def create(cls, lat: float, lng: float) -> "Coordinate | None":
        """Build a coordinate, or return ``None`` when the pair is out of range."""

        if not is_valid_pair(lat, lng):
            return None
        return cls(float(lat), float(lng))

    def as_query(self) -> str:
        return f"{self.lat},{self.lng}"

    def label(self, precision: int = 4) -> str:
        return f"{self.lat:.{precision}f}, {self.lng:.{precision}f}"
