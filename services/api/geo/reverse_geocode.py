"""
Reverse geocoding via Nominatim (OpenStreetMap).

Reverse results depend heavily on `zoom`. The default of 8 resolves to
metro-city granularity; higher zooms return boroughs and neighbourhoods as
the "city", which breaks grouping by canonical city.

Nominatim /reverse?format=json&addressdetails=1 returns:
  {
    "display_name": "...",
    "address": {
      "city": "London", "state_district": "Greater London",
      "state": "England", "country": "United Kingdom", "country_code": "gb",
      ...
    }
  }

Best-effort: transport errors, non-2xx responses and non-JSON bodies yield an
all-None ReverseGeocodeResult, never an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from services.api.config import settings
from services.api.url_import.errors import GeocodeUnavailable

logger = logging.getLogger(__name__)

# First present, non-empty key wins, independently per field.
CITY_KEYS = ("city", "town", "municipality", "village", "hamlet")
NEIGHBORHOOD_KEYS = ("neighbourhood", "suburb", "quarter", "city_district", "borough", "ward")
ADMIN_AREA_KEYS = ("state_district", "state", "region", "province", "county")
COUNTRY_KEYS = ("country",)


@dataclass(frozen=True)
class ReverseGeocodeResult:
    canonical_city: Optional[str] = None
    neighborhood: Optional[str] = None
    admin_area: Optional[str] = None
    country: Optional[str] = None
    raw: Optional[Any] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.canonical_city, self.neighborhood, self.admin_area, self.country))


def pick_first(obj: Any, keys: tuple[str, ...]) -> Optional[str]:
    if not isinstance(obj, dict):
        return None
    for key in keys:
        value = obj.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _parse_address(payload: dict[str, Any]) -> ReverseGeocodeResult:
    address = payload.get("address") or {}
    return ReverseGeocodeResult(
        canonical_city=pick_first(address, CITY_KEYS),
        neighborhood=pick_first(address, NEIGHBORHOOD_KEYS),
        admin_area=pick_first(address, ADMIN_AREA_KEYS),
        country=pick_first(address, COUNTRY_KEYS),
        raw=payload,
    )


async def _fetch_reverse(lat: float, lng: float, zoom: int, timeout_s: float) -> dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=timeout_s) as client:
            resp = await client.get(
                settings.reverse_geocode_url,
                params={
                    "lat": str(lat),
                    "lon": str(lng),
                    "format": "json",
                    "addressdetails": "1",
                    "zoom": str(zoom),
                },
                headers={"User-Agent": settings.reverse_geocode_user_agent},
            )
            resp.raise_for_status()
            payload = resp.json()
    except httpx.HTTPStatusError as exc:
        raise GeocodeUnavailable(
            f"Nominatim returned {exc.response.status_code} for ({lat}, {lng})"
        ) from exc
    except httpx.HTTPError as exc:
        raise GeocodeUnavailable(f"Nominatim request failed for ({lat}, {lng}): {exc}") from exc
    except ValueError as exc:
        raise GeocodeUnavailable(f"Nominatim returned a non-JSON body for ({lat}, {lng})") from exc

    if not isinstance(payload, dict):
        raise GeocodeUnavailable(f"Unexpected Nominatim payload for ({lat}, {lng})")
    return payload


async def reverse_geocode(
    lat: float,
    lng: float,
    zoom: int | None = None,
    timeout_s: float | None = None,
) -> ReverseGeocodeResult:
    """
    Reverse geocode coordinates to city / neighbourhood / admin area / country.

    Returns an all-None result when the lookup is unavailable -- callers
    check `result.canonical_city is None` instead of handling errors.
    """
    zoom = settings.reverse_geocode_zoom if zoom is None else zoom
    timeout_s = settings.reverse_geocode_timeout_s if timeout_s is None else timeout_s

    try:
        payload = await _fetch_reverse(lat, lng, zoom, timeout_s)
    except GeocodeUnavailable as exc:
        logger.warning("Reverse geocode unavailable: %s", exc.message)
        return ReverseGeocodeResult()

    result = _parse_address(payload)
    logger.debug(
        "Reverse geocoded (%s, %s) zoom=%d -> city=%r country=%r",
        lat, lng, zoom, result.canonical_city, result.country,
    )
    return result
