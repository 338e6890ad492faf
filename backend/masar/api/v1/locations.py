from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from masar.core.logging import get_logger
from masar.parsing.coordinates import parse_coordinate_pair
from masar.parsing.links import parse_coordinate_from_link
from masar.schemas.locations import ParseRequest, ParseResponse


router = APIRouter()
_logger = get_logger(__name__)


@router.post("/parse", response_model=ParseResponse, status_code=status.HTTP_200_OK)
async def parse_location(payload: ParseRequest) -> ParseResponse:
    if payload.kind in {"coordinates", "auto"}:
        coordinate = parse_coordinate_pair(payload.text)
        if coordinate is not None:
            return ParseResponse(
                latitude=coordinate.lat, longitude=coordinate.lng, matched="coordinates"
            )

    if payload.kind in {"link", "auto"}:
        coordinate = parse_coordinate_from_link(payload.text)
        if coordinate is not None:
            return ParseResponse(
                latitude=coordinate.lat, longitude=coordinate.lng, matched="link"
            )

    _logger.info("Location text not parsed", kind=payload.kind)
    raise HTTPException(
        422,
        {"message": "No valid coordinates found", "text": payload.text},
    )
