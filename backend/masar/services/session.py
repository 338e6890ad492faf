from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from masar.domain.locations import CurrentPosition, Location
from masar.domain.routes import RouteSummary, SessionSnapshot


class LocationNotFoundError(KeyError):
    """Raised when a location id is not part of the session."""


class PlannerSession:
    """
    Ephemeral planning state: destinations, current position and the route
    derived from them.

    Every change to the inputs bumps ``revision`` and drops the route, so a
    route is only ever shown for the inputs that produced it.
    """

    def __init__(self, session_id: UUID | None = None) -> None:
        self.session_id = session_id or uuid4()
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at
        self._locations: dict[str, Location] = {}
        self._origin: CurrentPosition | None = None
        self._route: RouteSummary | None = None
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def origin(self) -> CurrentPosition | None:
        return self._origin

    @property
    def locations(self) -> tuple[Location, ...]:
        return tuple(self._locations.values())

    @property
    def route(self) -> RouteSummary | None:
        return self._route

    def add_location(self, location: Location) -> Location:
        if location.id in self._locations:
            raise ValueError(f"Location id {location.id!r} already used")
        self._locations[location.id] = location
        self._touch()
        return location

    def remove_location(self, location_id: str) -> Location:
        try:
            removed = self._locations.pop(location_id)
        except KeyError:
            raise LocationNotFoundError(location_id) from None
        self._touch()
        return removed

    def set_origin(self, origin: CurrentPosition) -> None:
        self._origin = origin
        self._touch()

    def clear_route(self) -> None:
        self._route = None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            revision=self._revision,
            origin=self._origin,
            locations=self.locations,
        )

    def apply_route(self, snapshot: SessionSnapshot, summary: RouteSummary) -> bool:
        """Store a computed route unless newer input arrived in the meantime."""

        if snapshot.revision != self._revision:
            return False
        self._route = summary
        self.updated_at = datetime.now(timezone.utc)
        return True

    def _touch(self) -> None:
        self._revision += 1
        self._route = None
        self.updated_at = datetime.now(timezone.utc)
