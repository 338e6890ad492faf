from __future__ import annotations

import re
from urllib.parse import unquote

from masar.core.logging import get_logger
from masar.domain.coordinates import Coordinate
from masar.parsing.coordinates import (
    NUMBER,
    CoordinateMatcher,
    coordinate_from_text,
    first_match,
)

_logger = get_logger(__name__)

# Numbers must not start in the middle of another number
_PAIR = rf"(?<![\d.])({NUMBER})\s*,\s*({NUMBER})"

_SHORT_LINK = re.compile(
    r"(?:https?://)?(?:maps\.app\.goo\.gl|goo\.gl/maps|g\.co/kgs)/\S+",
    flags=re.IGNORECASE,
)


def pattern_matcher(pattern: str) -> CoordinateMatcher:
    """
    Build a matcher that tries every occurrence of ``pattern`` and returns the
    first pair inside the coordinate envelope.
    """
    compiled = re.compile(pattern, flags=re.IGNORECASE)

    def matcher(text: str) -> Coordinate | None:
        for match in compiled.finditer(text):
            coordinate = coordinate_from_text(match.group(1), match.group(2))
            if coordinate is not None:
                return coordinate
        return None

    return matcher


def query_matcher(host: str, params: str) -> CoordinateMatcher:
    return pattern_matcher(
        rf"{host}\S*?[?&](?:{params})=(?:loc:)?{_PAIR}"
    )


# Ordered from the most specific map-link shape to the bare fallback.
LINK_MATCHERS: list[CoordinateMatcher] = [
    # https://maps.google.com/?q=30.0444,31.2357
    # https://www.google.com/maps/search/?api=1&query=30.0444,31.2357
    query_matcher(
        r"(?:maps\.google\.[a-z.]+|google\.[a-z.]+/maps)",
        r"q|query|ll|destination|daddr|center",
    ),
    # https://www.google.com/maps/@30.0444,31.2357,15z
    pattern_matcher(rf"google\.[a-z.]+/maps/\S*?@{_PAIR}"),
    # https://maps.apple.com/?q=30.0444,31.2357
    query_matcher(r"maps\.apple\.com", r"q|ll|sll|daddr"),
    # https://waze.com/ul?ll=30.0444,31.2357&navigate=yes
    query_matcher(r"waze\.com", r"ll|q"),
    # WhatsApp shares: "Location: https://maps.google.com/?q=30.0444,31.2357"
    pattern_matcher(rf"Location:\s*https?://\S*?[?&]q={_PAIR}"),
    # Any other service using a q/query/ll parameter
    pattern_matcher(rf"[?&](?:q|query|ll)={_PAIR}"),
    # Any other service embedding "@lat,lng" in the path
    pattern_matcher(rf"@{_PAIR}"),
    # "30.0444,31.2357" anywhere in the text
    pattern_matcher(_PAIR),
]


def parse_coordinate_from_link(text: str) -> Coordinate | None:
    """
    Extract a coordinate from a pasted map link or message.

    Returns ``None`` when none of the known shapes yields an in-range pair.
    """
    if not isinstance(text, str):
        return None
    cleaned = unquote(text.strip())
    if not cleaned:
        return None

    coordinate = first_match(cleaned, LINK_MATCHERS)
    if coordinate is None:
        _logger.debug("No coordinates in link", length=len(cleaned))
    return coordinate


def is_short_link(text: str) -> bool:
    """Return True for shortened share links that hide their coordinates."""

    if not isinstance(text, str):
        return False
    return _SHORT_LINK.search(text) is not None


def extract_short_link(text: str) -> str | None:
    if not isinstance(text, str):
        return None
    match = _SHORT_LINK.search(text)
    if not match:
        return None
    url = match.group(0)
    if not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    return url
