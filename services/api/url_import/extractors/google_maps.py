"""
Google Maps link-only extractor.

Builds a draft from the URL alone, with no Places API call and no page fetch.
The place name is read from the link:

  /maps/place/<name>/...      "Tartine+Bakery"  -> "Tartine Bakery"
  /maps/search/<query>/...
  ?q=<text> or ?query=<text>  (a "place_id:..." value is not a name)

Everything else is left for the user to confirm, so the result always sets
requires_confirmation and low confidence for every field but the link.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import unquote_plus

import httpx

from services.api.url_import.extractors.base import ProviderExtractor
from services.api.url_import.models import (
    ConfidenceLevel,
    ImportResult,
    ImportSource,
    SpotCategory,
    SpotDraft,
)
from services.api.url_import.providers import ProviderKind, ProviderMatch

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Google Maps"
CONFIRM_WARNING = "Please confirm location details."
URL_ONLY_COMMENT = (
    "Google Maps link imported without Places API details. "
    "Please confirm the location and other fields."
)

_PLACE_PATH_RE = re.compile(r"/maps/place/([^/]+)", re.IGNORECASE)
_SEARCH_PATH_RE = re.compile(r"/maps/search/([^/]+)", re.IGNORECASE)
_PLACE_ID_QUERY_RE = re.compile(r"^place_id:", re.IGNORECASE)


def name_from_path(url: httpx.URL) -> Optional[str]:
    # raw_path keeps "+" and %-escapes intact; drop the query part first
    raw_path = url.raw_path.decode("ascii", errors="replace").split("?", 1)[0]
    m = _PLACE_PATH_RE.search(raw_path) or _SEARCH_PATH_RE.search(raw_path)
    if not m:
        return None
    return unquote_plus(m.group(1)).strip() or None


def name_from_query(url: httpx.URL) -> Optional[str]:
    q = (url.params.get("q") or url.params.get("query") or "").strip()
    if not q or _PLACE_ID_QUERY_RE.match(q):
        return None
    return q


class GoogleMapsUrlOnlyExtractor(ProviderExtractor):
    """
    Fallback for Google Maps links when no Places API integration is registered.

    `api_error` is set by a wrapping API extractor that failed and fell back here;
    it is surfaced as a warning.
    """

    PROVIDER_KIND = ProviderKind.GOOGLE_MAPS

    def __init__(self, api_error: str | None = None) -> None:
        self._api_error = api_error

    def _warnings(self) -> tuple[str, ...]:
        if self._api_error:
            first = f"Google Places API call failed: {self._api_error}"
        else:
            first = "Google Places API not configured; place details come from the link only."
        return (first, CONFIRM_WARNING)

    async def extract(self, match: ProviderMatch) -> ImportResult:
        url = match.url
        parsed_name = name_from_path(url) or name_from_query(url)
        name = parsed_name or FALLBACK_NAME

        logger.info(
            "Google Maps link-only import (place_id=%s, name_from_link=%s)",
            getattr(match, "place_id", None),
            parsed_name is not None,
        )

        low = ConfidenceLevel.LOW
        return ImportResult(
            provider_kind=ProviderKind.GOOGLE_MAPS,
            source=ImportSource.URL,
            draft=SpotDraft(
                link=str(url),
                name=name,
                category=SpotCategory.OTHER,
                comments=URL_ONLY_COMMENT,
            ),
            resolved_url=str(url),
            confidence={
                "name": ConfidenceLevel.MEDIUM if parsed_name else low,
                "address": low,
                "coordinates": low,
                "city": low,
                "country": low,
                "category": low,
                "link": ConfidenceLevel.HIGH,
            },
            warnings=self._warnings(),
            requires_confirmation=True,
        )
