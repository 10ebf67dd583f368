"""
OpenTable strategy hook.

OpenTable has no generally-available place details API for arbitrary
clients. This extractor exists so a partner integration can be dropped in
without touching dispatch; until then it reports the provider as unavailable
and the caller falls back to manual entry.
"""

from __future__ import annotations

import logging

from services.api.url_import.errors import ProviderUnavailable
from services.api.url_import.extractors.base import ProviderExtractor
from services.api.url_import.models import ImportResult
from services.api.url_import.providers import ProviderKind, ProviderMatch

logger = logging.getLogger(__name__)


class OpenTableExtractor(ProviderExtractor):
    PROVIDER_KIND = ProviderKind.OPENTABLE

    async def extract(self, match: ProviderMatch) -> ImportResult:
        logger.info(
            "OpenTable import requested (restaurant_id=%s slug=%s); no partner API configured",
            getattr(match, "restaurant_id", None),
            getattr(match, "slug", None),
        )
        raise ProviderUnavailable("OpenTable API not configured", provider_kind=self.PROVIDER_KIND.value)
