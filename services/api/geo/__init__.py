"""
Geo package.

City / country canonicalisation plus Nominatim reverse geocoding.
"""

from services.api.geo.canonical_city import CanonicalCityResult, canonicalize_city, slugify
from services.api.geo.countries import canonicalize_country_name
from services.api.geo.location import resolve_location
from services.api.geo.reverse_geocode import ReverseGeocodeResult, reverse_geocode

__all__ = [
    "CanonicalCityResult",
    "ReverseGeocodeResult",
    "canonicalize_city",
    "canonicalize_country_name",
    "resolve_location",
    "reverse_geocode",
    "slugify",
]
