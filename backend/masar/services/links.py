from __future__ import annotations

import httpx

from masar.core.config import get_settings
from masar.core.logging import get_logger


_logger = get_logger(__name__)


async def resolve_short_link(url: str) -> str | None:
    """Follow redirects of a shortened map link and return the final URL."""

    settings = get_settings()
    try:
        async with httpx.AsyncClient(
            follow_redirects=True, timeout=settings.short_link_timeout
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        _logger.warning("Short link resolution failed", url=url, error=str(exc))
        return None

    resolved = str(response.url)
    _logger.info("Short link resolved", url=url, resolved=resolved)
    return resolved
