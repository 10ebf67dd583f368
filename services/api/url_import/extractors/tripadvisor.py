"""
TripAdvisor strategy hook.

TripAdvisor only offers partner APIs. Kept as a registered extractor so that
credentials can be wired in later; raises ProviderUnavailable until then.
"""

from __future__ import annotations

import logging

from services.api.url_import.errors import ProviderUnavailable
from services.api.url_import.extractors.base import ProviderExtractor
from services.api.url_import.models import ImportResult
from services.api.url_import.providers import ProviderKind, ProviderMatch

logger = logging.getLogger(__name__)


class TripAdvisorExtractor(ProviderExtractor):
    PROVIDER_KIND = ProviderKind.TRIPADVISOR

    async def extract(self, match: ProviderMatch) -> ImportResult:
        logger.info(
            "TripAdvisor import requested (location_id=%s); no partner API configured",
            getattr(match, "location_id", None),
        )
        raise ProviderUnavailable("TripAdvisor API not configured", provider_kind=self.PROVIDER_KIND.value)
