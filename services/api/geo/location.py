"""Resolve a spot's location to a canonical city, preferring reverse-geocoded names."""

from __future__ import annotations

import logging
from typing import Optional

from services.api.geo.canonical_city import CanonicalCityResult, canonicalize_city
from services.api.geo.reverse_geocode import reverse_geocode

logger = logging.getLogger(__name__)

EVIDENCE_REVERSE_GEOCODE = "geo:reverse_geocode"


async def resolve_location(
    city: Optional[str],
    country: Optional[str],
    lat: Optional[float] = None,
    lng: Optional[float] = None,
) -> CanonicalCityResult:
    """
    Canonical city for a spot.

    With coordinates, the reverse-geocoded city/country win over the raw
    provider strings. Without them, or when the geocoder has nothing for a
    field, the raw text is canonicalised as-is.
    """
    if lat is None or lng is None:
        return canonicalize_city(city, country)

    geo = await reverse_geocode(lat, lng)
    # Neighbourhood or admin area alone says nothing about the city.
    if not (geo.canonical_city or geo.country):
        logger.info("No reverse-geocoded city for (%s, %s); using raw city %r", lat, lng, city)
        return canonicalize_city(city, country)

    result = canonicalize_city(geo.canonical_city or city, geo.country or country)
    return CanonicalCityResult(
        canonical_city=result.canonical_city,
        canonical_city_id=result.canonical_city_id,
        evidence=(EVIDENCE_REVERSE_GEOCODE, *result.evidence),
    )
