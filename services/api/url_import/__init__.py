"""
Spot URL import package.

Turns a pasted Google Maps / Yelp / OpenTable / TripAdvisor / arbitrary link
into a structured SpotDraft.

Exports:
  validate_url        -- SSRF-safe URL validation
  resolve_short_link  -- shortener redirect resolution (degrades to the input)
  match_provider      -- provider detection + identifier extraction
  SpotImporter        -- full pipeline with per-provider extractor dispatch
"""

from services.api.url_import.errors import (
    BlockedHost,
    ExtractionFailed,
    GeocodeUnavailable,
    InvalidURL,
    ProviderUnavailable,
    SpotImportError,
)
from services.api.url_import.models import (
    ConfidenceLevel,
    Coordinates,
    ImportResult,
    ImportSource,
    SpotCategory,
    SpotDraft,
)
from services.api.url_import.pipeline import SpotImporter, default_registry
from services.api.url_import.providers import ProviderKind, ProviderMatch, match_provider
from services.api.url_import.resolver import resolve_short_link
from services.api.url_import.validator import validate_url

__all__ = [
    "BlockedHost",
    "ConfidenceLevel",
    "Coordinates",
    "ExtractionFailed",
    "GeocodeUnavailable",
    "ImportResult",
    "ImportSource",
    "InvalidURL",
    "ProviderKind",
    "ProviderMatch",
    "ProviderUnavailable",
    "SpotCategory",
    "SpotDraft",
    "SpotImportError",
    "SpotImporter",
    "default_registry",
    "match_provider",
    "resolve_short_link",
    "validate_url",
]
