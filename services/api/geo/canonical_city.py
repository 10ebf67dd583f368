"""
Metro-city canonicalisation for raw provider / geocoder location strings.

Global and rule-based: no city lists, no lookups. Same (city, country) in,
same result out.

Cleaning rules, in application order (each appends an evidence tag when it fires):
  1. trim; empty -> "Unknown"
  2. strip_admin_prefix         "City of Paris"            -> "Paris"
  3. strip_city_borough_of_x    "London Borough of Camden" -> "Camden"
  4. strip_parenthetical        "Paris (France)"           -> "Paris"
  5. strip_commas               "Brooklyn, Kings County"   -> "Brooklyn"

Rules 2-5 repeat until the value is stable, so a canonical city fed back in
comes out unchanged ("(North) City of Paris" -> "City of Paris" -> "Paris").

canonical_city_id is slugify("<city>-<canonical country>"). Two different
cities with the same spelling in the same country share an id.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

from services.api.geo.countries import canonicalize_country_name

UNKNOWN_CITY = "Unknown"

EVIDENCE_ADMIN_PREFIX = "city_clean:strip_admin_prefix"
EVIDENCE_BOROUGH_OF_X = "city_clean:strip_city_borough_of_x"
EVIDENCE_PARENTHETICAL = "city_clean:strip_parenthetical"
EVIDENCE_COMMAS = "city_clean:strip_commas"
EVIDENCE_CITY_ID = "city_id:slugify(city+normalized_country)"

# Longest alternatives first so "metropolitan borough of" wins over "metropolitan".
_ADMIN_PREFIX_RE = re.compile(
    r"^(metropolitan borough of|municipality of|metropolitan|borough of|district of|"
    r"province of|region of|commune de|ville de|city of|greater)\s+",
    re.IGNORECASE,
)
# Also matches the infix when the borough qualifier opens a parenthetical:
# "London (Borough of Camden)".
_BOROUGH_INFIX_RE = re.compile(r"\s+\(?\s*borough\s+of\s+", re.IGNORECASE)
_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*")
_STRAY_PAREN_RE = re.compile(r"[()]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class CanonicalCityResult:
    canonical_city: str
    canonical_city_id: str
    evidence: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "canonicalCity": self.canonical_city,
            "canonicalCityId": self.canonical_city_id,
            "evidence": list(self.evidence),
        }


def slugify(text: str) -> str:
    """
    ASCII slug used as a grouping key.

    'São Paulo-Brazil'        -> 'sao-paulo-brazil'
    "Val-d'Isère-France"      -> 'val-disere-france'
    """
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_str = decomposed.encode("ascii", "ignore").decode("ascii")
    ascii_str = re.sub(r"['’]", "", ascii_str.lower().strip())
    return re.sub(r"[^a-z0-9]+", "-", ascii_str).strip("-")


def _note(evidence: list[str], tag: str) -> None:
    if tag not in evidence:
        evidence.append(tag)


def _clean_once(value: str, evidence: list[str]) -> str:
    # Nested prefixes ("City of Greater Sudbury") strip in one go.
    while _ADMIN_PREFIX_RE.match(value):
        value = _ADMIN_PREFIX_RE.sub("", value, count=1).strip()
        _note(evidence, EVIDENCE_ADMIN_PREFIX)

    if _BOROUGH_INFIX_RE.search(value):
        parts = [p.strip() for p in _BOROUGH_INFIX_RE.split(value) if p.strip()]
        if len(parts) == 2:
            value = parts[1]
            _note(evidence, EVIDENCE_BOROUGH_OF_X)

    if "(" in value or ")" in value:
        value = _PARENTHETICAL_RE.sub(" ", value)
        value = _STRAY_PAREN_RE.sub("", value)
        value = _WHITESPACE_RE.sub(" ", value).strip()
        _note(evidence, EVIDENCE_PARENTHETICAL)

    if "," in value:
        value = value.split(",")[0].strip()
        _note(evidence, EVIDENCE_COMMAS)

    return value


def clean_city_name(raw: str | None) -> tuple[str, list[str]]:
    """
    Apply the cleaning rules until the value stops changing.

    Returns (value, evidence). Each tag appears at most once, in the order its
    rule first fired. Every rule only ever shortens the value, so the loop ends.
    """
    evidence: list[str] = []
    value = (raw or "").strip()
    while value:
        cleaned = _clean_once(value, evidence)
        if cleaned == value:
            break
        value = cleaned
    return value, evidence


def canonicalize_city(city: str | None, country: str | None) -> CanonicalCityResult:
    """
    Canonicalise a provider city/admin string into a user-recognisable metro city.

    Example:
        canonicalize_city("Greater London (Borough of Camden)", "United Kingdom")
        -> CanonicalCityResult("Camden", "camden-united-kingdom",
                               (strip_admin_prefix, strip_city_borough_of_x,
                                strip_parenthetical, city_id:...))
    """
    cleaned, evidence = clean_city_name(city)
    canonical_city = cleaned or (city or "").strip() or UNKNOWN_CITY

    canonical_country = canonicalize_country_name(country)
    canonical_city_id = slugify(f"{canonical_city}-{canonical_country}")
    evidence.append(EVIDENCE_CITY_ID)

    return CanonicalCityResult(
        canonical_city=canonical_city,
        canonical_city_id=canonical_city_id,
        evidence=tuple(evidence),
    )
