"""
URL import pipeline: validate -> resolve short link -> match provider -> extract.

One SpotImporter can serve many concurrent requests: it holds only the
extractor registry, and every step is either pure or an isolated outbound
request with its own timeout.

Failure surface (see services.api.url_import.errors):
  InvalidURL, BlockedHost     validation, including redirect targets
  ProviderUnavailable         no extractor / data source for the provider
  ExtractionFailed            the extractor failed; any unexpected extractor
                              exception is wrapped into this
"""

from __future__ import annotations

import dataclasses
import logging
import time

from services.api.url_import.errors import ExtractionFailed, SpotImportError
from services.api.url_import.extractors import (
    ExtractorRegistry,
    GoogleMapsUrlOnlyExtractor,
    OpenTableExtractor,
    TripAdvisorExtractor,
)
from services.api.url_import.models import ImportResult
from services.api.url_import.providers import ProviderKind, ProviderMatch, match_provider
from services.api.url_import.resolver import resolve_short_link
from services.api.url_import.validator import validate_url

logger = logging.getLogger(__name__)


def default_registry() -> ExtractorRegistry:
    """Registry with the built-in extractors; API-backed ones are registered by the app."""
    return ExtractorRegistry({
        ProviderKind.GOOGLE_MAPS: GoogleMapsUrlOnlyExtractor(),
        ProviderKind.OPENTABLE: OpenTableExtractor(),
        ProviderKind.TRIPADVISOR: TripAdvisorExtractor(),
    })


class SpotImporter:
    """
    Runs the import pipeline for a single user-supplied URL.

    Usage:
        importer = SpotImporter(default_registry())
        result = await importer.import_url("https://www.yelp.com/biz/foo")
    """

    def __init__(self, registry: ExtractorRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    @property
    def registry(self) -> ExtractorRegistry:
        return self._registry

    async def match_url(self, url_string: str) -> ProviderMatch:
        """Validate, resolve and classify a URL without extracting anything."""
        url = validate_url(url_string)
        resolved = await resolve_short_link(url)
        return match_provider(resolved)

    async def import_url(self, url_string: str) -> ImportResult:
        started = time.monotonic()
        match = await self.match_url(url_string)
        extractor = self._registry.get(match.kind)

        try:
            result = await extractor.extract(match)
        except SpotImportError:
            logger.info(
                "Import failed for provider=%s url=%s after %.0fms",
                match.kind.value,
                match.url,
                (time.monotonic() - started) * 1000,
            )
            raise
        except Exception as exc:
            logger.exception("Extractor %s raised unexpectedly", type(extractor).__name__)
            raise ExtractionFailed(
                f"{match.kind.value} extraction failed: {exc}",
                provider_kind=match.kind.value,
            ) from exc

        if result.resolved_url is None:
            result = dataclasses.replace(result, resolved_url=str(match.url))

        logger.info(
            "Imported spot from provider=%s source=%s in %.0fms",
            result.provider_kind.value,
            result.source.value,
            (time.monotonic() - started) * 1000,
        )
        return result
