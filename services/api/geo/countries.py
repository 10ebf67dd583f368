"""Country name canonicalisation using pycountry and custom aliases."""

from __future__ import annotations

import re
import unicodedata

import pycountry

UNKNOWN_COUNTRY = "Unknown"

# Global, rule-based aliases (not city-specific).
# Keys are cleaned tokens (see _clean_token).
COUNTRY_ALIASES: dict[str, str] = {
    # United Kingdom
    "uk": "United Kingdom",
    "u k": "United Kingdom",
    "gb": "United Kingdom",
    "great britain": "United Kingdom",
    "britain": "United Kingdom",
    "united kingdom of great britain and northern ireland": "United Kingdom",

    # United States
    "us": "United States",
    "usa": "United States",
    "u s": "United States",
    "united states of america": "United States",

    # Common non-English / alternate spellings
    "brasil": "Brazil",
    "cote d ivoire": "Côte d'Ivoire",
    "cote divoire": "Côte d'Ivoire",
    "ivory coast": "Côte d'Ivoire",
}

_ALPHA2_RE = re.compile(r"^[A-Z]{2}$")


def strip_diacritics(text: str) -> str:
    """'São Paulo' -> 'Sao Paulo'."""
    nfd = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in nfd if unicodedata.category(ch) != "Mn")


def _clean_token(text: str) -> str:
    token = strip_diacritics(text).lower().strip()
    token = token.replace(".", "")
    token = re.sub(r"['’]", "", token)
    return re.sub(r"\s+", " ", token)


def _name_for_alpha2(code: str) -> str | None:
    if code == "UK":
        code = "GB"
    country = pycountry.countries.get(alpha_2=code)
    if country is None:
        return None
    # Prefer common_name where pycountry has one ("Taiwan" over "Taiwan, Province of China")
    return getattr(country, "common_name", None) or country.name


def canonicalize_country_name(country: str | None) -> str:
    """
    Canonicalise a country string.

    - Empty -> "Unknown"
    - Aliases (UK/GB/USA/Brasil/...) -> English short name
    - ISO 3166-1 alpha-2 codes -> pycountry name
    - Anything else is returned trimmed but otherwise unchanged (no fuzzy rewrites)
    """
    raw = (country or "").strip()
    if not raw:
        return UNKNOWN_COUNTRY

    token = _clean_token(raw)
    alias = COUNTRY_ALIASES.get(token)
    if alias:
        return alias

    code = token.replace(" ", "").upper()
    if _ALPHA2_RE.match(code):
        name = _name_for_alpha2(code)
        if name:
            return name

    return raw
