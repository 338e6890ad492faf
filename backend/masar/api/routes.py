from __future__ import annotations

from fastapi import APIRouter

from masar.api.v1 import locations, routes, sessions

router = APIRouter()
router.include_router(locations.router, prefix="/v1/locations", tags=["locations"])
router.include_router(routes.router, prefix="/v1/routes", tags=["routes"])
router.include_router(sessions.router, prefix="/v1/sessions", tags=["sessions"])
