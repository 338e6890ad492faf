from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Mapping, TYPE_CHECKING, cast

from cachetools import TTLCache
from geopy.exc import (
    GeocoderQuotaExceeded,
    GeocoderServiceError,
    GeocoderTimedOut,
    GeocoderUnavailable,
    GeopyError,
)
from geopy.geocoders import get_geocoder_for_service
from geopy.geocoders.base import Geocoder

from masar.core.config import get_settings
from masar.core.logging import get_logger
from masar.domain.coordinates import Coordinate

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from geopy.location import Location as GeopyLocation

    from masar.core.config import Settings

_logger = get_logger(__name__)
_cache: TTLCache | None = None
_cache_lock = asyncio.Lock()
_geocoder_lock = asyncio.Lock()
_geocode_call_lock = asyncio.Lock()
_geocoder: Geocoder | None = None


class GeocodeConfigurationError(RuntimeError):
    """Raised when the geocoder cannot be configured with provided settings."""


@dataclass(slots=True)
class GeocodeResult:
    latitude: float | None
    longitude: float | None
    confidence: float
    message: str | None = None
    resolved_label: str | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate.create(self.latitude, self.longitude)


async def geocode_address(text: str) -> GeocodeResult:
    """Resolve a free-text address to coordinates using the configured geocoder."""

    query = " ".join(text.split())
    if not query:
        return GeocodeResult(None, None, 0.0, message="Empty address")

    _logger.info("Geocoding lookup", query=query)

    async with _cache_lock:
        cached = _get_cache().get(query)
    if cached:
        _logger.info("Geocoding cache hit", query=query)
        return cached

    try:
        result = await _fetch(query)
    except GeocodeConfigurationError as exc:
        _logger.error("Geocoding misconfiguration", error=str(exc))
        return GeocodeResult(None, None, 0.0, message=str(exc))

    if result.latitude is not None and result.longitude is not None:
        async with _cache_lock:
            _get_cache()[query] = result

    _logger.info(
        "Geocoding finished",
        query=query,
        latitude=result.latitude,
        longitude=result.longitude,
        confidence=result.confidence,
        message=result.message,
    )
    return result


async def reverse_geocode(latitude: float, longitude: float) -> str | None:
    """Return a display address for a coordinate, or ``None`` when unavailable."""

    try:
        geocoder = await _get_geocoder()
        async with _geocode_call_lock:
            location = await asyncio.to_thread(
                geocoder.reverse, (latitude, longitude), exactly_one=True
            )
    except (GeocodeConfigurationError, GeopyError) as exc:
        _logger.warning(
            "Reverse geocoding failed",
            latitude=latitude,
            longitude=longitude,
            error=str(exc),
        )
        return None

    if location is None:
        return None
    address = getattr(location, "address", None)
    return address if isinstance(address, str) and address.strip() else None


async def _fetch(query: str) -> GeocodeResult:
    settings = get_settings()
    try:
        location = await _geocode(query)
    except (GeocoderQuotaExceeded, GeocoderTimedOut) as exc:
        retry_message = (
            "Geocoding quota exceeded"
            if isinstance(exc, GeocoderQuotaExceeded)
            else "Geocoding timed out"
        )
        _logger.warning("Geocoding failed", query=query, error=retry_message)
        return GeocodeResult(None, None, 0.0, message=retry_message)
    except (GeocoderServiceError, GeocoderUnavailable, GeopyError) as exc:
        _logger.warning("Geocoding failed", query=query, error=str(exc))
        return GeocodeResult(None, None, 0.0, message=str(exc))

    if location is None:
        return GeocodeResult(None, None, 0.0, message="No geocoding candidates")

    latitude = getattr(location, "latitude", None)
    longitude = getattr(location, "longitude", None)
    if latitude is None or longitude is None:
        return GeocodeResult(None, None, 0.0, message="Invalid geocoder response")
    if Coordinate.create(float(latitude), float(longitude)) is None:
        return GeocodeResult(
            None, None, 0.0, message="Geocoder returned invalid coordinates"
        )

    resolved_label = getattr(location, "address", None)
    raw_obj = getattr(location, "raw", {}) or {}
    if isinstance(raw_obj, Mapping):
        raw: Mapping[str, object] = cast(Mapping[str, object], raw_obj)
    else:
        raw = {}

    if not resolved_label:
        display_name = raw.get("display_name")
        if isinstance(display_name, str):
            resolved_label = display_name

    return GeocodeResult(
        float(latitude),
        float(longitude),
        _extract_confidence(settings.geocoder_provider, raw),
        message=None,
        resolved_label=resolved_label,
    )


async def _geocode(query: str) -> "GeopyLocation | None":
    geocoder = await _get_geocoder()
    settings = get_settings()
    kwargs: dict[str, object] = {"exactly_one": True}
    if settings.geocoder_provider == "nominatim":
        kwargs["addressdetails"] = True

    async with _geocode_call_lock:
        return await asyncio.to_thread(geocoder.geocode, query, **kwargs)


def _get_cache() -> TTLCache:
    global _cache
    if _cache is None:
        _cache = TTLCache(maxsize=512, ttl=get_settings().geocoder_cache_ttl)
    return _cache


async def _get_geocoder() -> Geocoder:
    global _geocoder
    async with _geocoder_lock:
        if _geocoder is None:
            _geocoder = _create_geocoder(get_settings())
        return _geocoder


# geopy service name for each provider, and whether it needs an API key.
_PROVIDERS: dict[str, tuple[str, bool]] = {
    "nominatim": ("nominatim", False),
    "google": ("googlev3", True),
}

# Google reports precision as a location type rather than a score.
_GOOGLE_LOCATION_TYPES = {
    "ROOFTOP": 1.0,
    "RANGE_INTERPOLATED": 0.7,
    "GEOMETRIC_CENTER": 0.6,
    "APPROXIMATE": 0.4,
}
_DEFAULT_CONFIDENCE = 0.5


def _create_geocoder(settings: "Settings") -> Geocoder:
    provider = settings.geocoder_provider
    if provider not in _PROVIDERS:
        raise GeocodeConfigurationError(f"Unsupported geocoder provider '{provider}'")

    service, needs_key = _PROVIDERS[provider]
    kwargs: dict[str, object] = {
        "timeout": settings.geocoder_timeout,
        "user_agent": settings.geocoder_user_agent or "masar-geocoder",
    }
    if needs_key:
        api_key = (settings.geocoder_api_key or "").strip()
        if not api_key:
            raise GeocodeConfigurationError(
                f"Geocoder provider '{provider}' requires MASAR_GEOCODER_API_KEY"
            )
        kwargs["api_key"] = api_key
    if settings.geocoder_domain:
        kwargs["domain"] = settings.geocoder_domain
    return get_geocoder_for_service(service)(**kwargs)


def _extract_confidence(provider: str, raw: Mapping[str, object]) -> float:
    if provider == "nominatim":
        importance = raw.get("importance")
        if isinstance(importance, (int, float)):
            return max(0.0, min(1.0, float(importance)))
    elif provider == "google":
        geometry = raw.get("geometry")
        if isinstance(geometry, Mapping):
            location_type = geometry.get("location_type")
            if isinstance(location_type, str):
                return _GOOGLE_LOCATION_TYPES.get(location_type, _DEFAULT_CONFIDENCE)
    return _DEFAULT_CONFIDENCE
