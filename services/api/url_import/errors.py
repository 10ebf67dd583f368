"""
Typed failures for the spot URL import pipeline.

Propagation policy:
  InvalidURL / BlockedHost   -- always surfaced to the caller, never retried.
  ProviderUnavailable        -- extractor has no data source; caller offers manual entry.
  ExtractionFailed           -- provider recognised but fetch/parse failed; manual entry.
  GeocodeUnavailable         -- raised inside the reverse geocoder only, absorbed there.
"""

from __future__ import annotations


class SpotImportError(Exception):
    """Base class for every failure raised by the import pipeline."""

    code = "SPOT_IMPORT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidURL(SpotImportError):
    """The candidate string does not parse as an absolute URL."""

    code = "INVALID_URL"


class BlockedHost(SpotImportError):
    """Scheme or host is not allowed (SSRF denylist)."""

    code = "BLOCKED_HOST"


class ProviderUnavailable(SpotImportError):
    """No usable data source for this provider kind."""

    code = "PROVIDER_UNAVAILABLE"

    def __init__(self, message: str, provider_kind: str | None = None) -> None:
        super().__init__(message)
        self.provider_kind = provider_kind


class ExtractionFailed(SpotImportError):
    """Provider recognised, but the remote fetch or pattern extraction failed."""

    code = "EXTRACTION_FAILED"

    def __init__(self, message: str, provider_kind: str | None = None) -> None:
        super().__init__(message)
        self.provider_kind = provider_kind


class GeocodeUnavailable(SpotImportError):
    """Reverse geocoding returned nothing usable."""

    code = "GEOCODE_UNAVAILABLE"
