"""
Provider detection and identifier extraction for import URLs.

Pattern-based only -- no network calls, no provider APIs. match_provider() is
total: any parseable URL yields exactly one ProviderMatch variant, and an
identifier that cannot be extracted is left as None rather than failing.

Host rules (case-insensitive, leading "www." ignored):
  google_maps  google.com suffix + /maps path or maps.* host; or maps.app.goo.gl
  yelp         yelp.com, yelp.<tld>, or any *.yelp.* host
  opentable    opentable.com suffix
  tripadvisor  tripadvisor.com suffix
  generic      everything else
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from urllib.parse import unquote

import httpx


class ProviderKind(str, Enum):
    GOOGLE_MAPS = "google_maps"
    YELP = "yelp"
    OPENTABLE = "opentable"
    TRIPADVISOR = "tripadvisor"
    GENERIC = "generic"


@dataclass(frozen=True)
class GoogleMapsMatch:
    url: httpx.URL
    place_id: Optional[str] = None
    cid: Optional[str] = None
    kind: ProviderKind = field(default=ProviderKind.GOOGLE_MAPS, init=False)


@dataclass(frozen=True)
class YelpMatch:
    url: httpx.URL
    business_id: Optional[str] = None
    kind: ProviderKind = field(default=ProviderKind.YELP, init=False)


@dataclass(frozen=True)
class OpenTableMatch:
    url: httpx.URL
    restaurant_id: Optional[str] = None
    slug: Optional[str] = None
    kind: ProviderKind = field(default=ProviderKind.OPENTABLE, init=False)


@dataclass(frozen=True)
class TripAdvisorMatch:
    url: httpx.URL
    location_id: Optional[str] = None
    kind: ProviderKind = field(default=ProviderKind.TRIPADVISOR, init=False)


@dataclass(frozen=True)
class GenericMatch:
    url: httpx.URL
    kind: ProviderKind = field(default=ProviderKind.GENERIC, init=False)


ProviderMatch = Union[GoogleMapsMatch, YelpMatch, OpenTableMatch, TripAdvisorMatch, GenericMatch]


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_Q_PLACE_ID_RE = re.compile(r"^place_id:(.+)$", re.IGNORECASE)
# Maps URLs can carry several "!1s..." segments; only ChI-prefixed ones are place ids
# (the others are feature ids like 0x...:0x...).
_EMBEDDED_PLACE_ID_RE = re.compile(r"!1s(ChI[^!&/?#]+)")

_YELP_BIZ_RE = re.compile(r"^/biz/([^/?#]+)", re.IGNORECASE)
_OPENTABLE_PROFILE_RE = re.compile(r"/restaurant/profile/(\d+)", re.IGNORECASE)
_OPENTABLE_SLUG_RE = re.compile(r"^/r/([^/?#]+)", re.IGNORECASE)
_TRIPADVISOR_INFIX_RE = re.compile(r"-d(\d+)-", re.IGNORECASE)
_TRIPADVISOR_FILENAME_RE = re.compile(r"^/.+_d(\d+)\.html$", re.IGNORECASE)


def _normalize_host(url: httpx.URL) -> str:
    host = url.host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def _host_ends_with(host: str, suffix: str) -> bool:
    return host == suffix or host.endswith(f".{suffix}")


def _first_group(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    return m.group(1) if m else None


def _non_empty(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# ---------------------------------------------------------------------------
# Per-provider matchers
# ---------------------------------------------------------------------------

def _is_google_maps(host: str, path: str) -> bool:
    if host == "maps.app.goo.gl":
        return True
    return _host_ends_with(host, "google.com") and (
        path.startswith("/maps") or host.startswith("maps.")
    )


def _match_google_maps(url: httpx.URL) -> GoogleMapsMatch:
    place_id = _non_empty(url.params.get("place_id"))
    cid = _non_empty(url.params.get("cid"))

    if place_id is None:
        q = url.params.get("q") or ""
        place_id = _non_empty(_first_group(_Q_PLACE_ID_RE, q))

    if place_id is None:
        place_id = _first_group(_EMBEDDED_PLACE_ID_RE, unquote(str(url)))

    return GoogleMapsMatch(url=url, place_id=place_id, cid=cid)


def _is_yelp(host: str) -> bool:
    return host == "yelp.com" or host.startswith("yelp.") or ".yelp." in host


def _match_yelp(url: httpx.URL) -> YelpMatch:
    return YelpMatch(url=url, business_id=_first_group(_YELP_BIZ_RE, url.path))


def _match_opentable(url: httpx.URL) -> OpenTableMatch:
    return OpenTableMatch(
        url=url,
        restaurant_id=_first_group(_OPENTABLE_PROFILE_RE, url.path),
        slug=_first_group(_OPENTABLE_SLUG_RE, url.path),
    )


def _match_tripadvisor(url: httpx.URL) -> TripAdvisorMatch:
    location_id = _first_group(_TRIPADVISOR_INFIX_RE, url.path)
    if location_id is None:
        location_id = _first_group(_TRIPADVISOR_FILENAME_RE, url.path)
    return TripAdvisorMatch(url=url, location_id=location_id)


def match_provider(url: httpx.URL | str) -> ProviderMatch:
    """
    Classify a URL into exactly one provider variant.

    Accepts an httpx.URL (normally the output of validate_url/resolve_short_link)
    or a URL string.
    """
    if not isinstance(url, httpx.URL):
        url = httpx.URL(url)

    host = _normalize_host(url)
    path = url.path

    if _is_google_maps(host, path):
        return _match_google_maps(url)
    if _is_yelp(host):
        return _match_yelp(url)
    if _host_ends_with(host, "opentable.com"):
        return _match_opentable(url)
    if _host_ends_with(host, "tripadvisor.com"):
        return _match_tripadvisor(url)
    return GenericMatch(url=url)
