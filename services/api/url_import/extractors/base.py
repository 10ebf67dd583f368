"""
Extractor contract and per-provider dispatch.

Every provider kind is served by one ProviderExtractor. An extractor either
returns an ImportResult built from real data (provider API or page metadata)
or raises:

  ProviderUnavailable -- no data source configured for this provider
  ExtractionFailed    -- source exists, but the fetch or parse failed

Returning an empty or half-filled draft in place of raising is not allowed;
callers treat both errors as "fall back to manual entry".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from services.api.url_import.errors import ProviderUnavailable
from services.api.url_import.models import ImportResult
from services.api.url_import.providers import ProviderKind, ProviderMatch

logger = logging.getLogger(__name__)


class ProviderExtractor(ABC):
    """Abstract base class for all provider extractors."""

    # Provider kind this extractor serves (override in subclasses)
    PROVIDER_KIND: Optional[ProviderKind] = None

    @abstractmethod
    async def extract(self, match: ProviderMatch) -> ImportResult:
        """
        Turn a provider match into an ImportResult.

        Raises:
            ProviderUnavailable, ExtractionFailed
        """


class UnconfiguredExtractor(ProviderExtractor):
    """Placeholder for a provider with no data source wired in."""

    def __init__(self, provider_kind: ProviderKind, reason: str | None = None) -> None:
        self.PROVIDER_KIND = provider_kind
        self._reason = reason or f"No extractor configured for provider {provider_kind.value}"

    async def extract(self, match: ProviderMatch) -> ImportResult:
        raise ProviderUnavailable(self._reason, provider_kind=match.kind.value)


class ExtractorRegistry:
    """
    Maps each ProviderKind to the extractor that serves it.

    Kinds with nothing registered resolve to an UnconfiguredExtractor, so
    dispatch never fails with a KeyError.

    Usage:
        registry = ExtractorRegistry()
        registry.register(ProviderKind.YELP, YelpPartnerExtractor(...))
        result = await registry.get(match.kind).extract(match)
    """

    def __init__(self, extractors: Mapping[ProviderKind, ProviderExtractor] | None = None) -> None:
        self._extractors: dict[ProviderKind, ProviderExtractor] = dict(extractors or {})

    def register(self, kind: ProviderKind, extractor: ProviderExtractor) -> None:
        if kind in self._extractors:
            logger.info("Replacing extractor for %s with %s", kind.value, type(extractor).__name__)
        self._extractors[kind] = extractor

    def get(self, kind: ProviderKind) -> ProviderExtractor:
        extractor = self._extractors.get(kind)
        if extractor is None:
            return UnconfiguredExtractor(kind)
        return extractor

    def is_configured(self, kind: ProviderKind) -> bool:
        extractor = self._extractors.get(kind)
        return extractor is not None and not isinstance(extractor, UnconfiguredExtractor)

    def kinds(self) -> list[ProviderKind]:
        return list(self._extractors)
