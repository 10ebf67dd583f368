"""
Tests for SpotImporter dispatch and error policy.

Extractors are stubbed; the resolver is only hit for shortener hosts, which
these tests avoid or patch.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from services.api.url_import import (
    BlockedHost,
    Coordinates,
    ExtractionFailed,
    ImportResult,
    ImportSource,
    InvalidURL,
    ProviderKind,
    ProviderUnavailable,
    SpotCategory,
    SpotDraft,
    SpotImporter,
    default_registry,
)
from services.api.url_import.extractors import ExtractorRegistry, ProviderExtractor


class _StubOpenTableExtractor(ProviderExtractor):
    PROVIDER_KIND = ProviderKind.OPENTABLE

    def __init__(self):
        self.matches = []

    async def extract(self, match):
        self.matches.append(match)
        return ImportResult(
            provider_kind=ProviderKind.OPENTABLE,
            source=ImportSource.API,
            draft=SpotDraft(
                link=str(match.url),
                name="State Bird Provisions",
                category=SpotCategory.RESTAURANT,
                city="San Francisco",
                country="United States",
                coordinates=Coordinates(lat=37.7838, lng=-122.4330),
            ),
        )


class _ExplodingExtractor(ProviderExtractor):
    async def extract(self, match):
        raise RuntimeError("upstream returned garbage")


class _FailingExtractor(ProviderExtractor):
    async def extract(self, match):
        raise ExtractionFailed("Yelp returned 500", provider_kind=match.kind.value)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    @pytest.mark.asyncio
    async def test_registered_extractor_receives_match(self):
        stub = _StubOpenTableExtractor()
        importer = SpotImporter(ExtractorRegistry({ProviderKind.OPENTABLE: stub}))

        result = await importer.import_url("https://www.opentable.com/restaurant/profile/123456")

        assert result.provider_kind is ProviderKind.OPENTABLE
        assert result.source is ImportSource.API
        assert result.draft.name == "State Bird Provisions"
        assert stub.matches[0].restaurant_id == "123456"

    @pytest.mark.asyncio
    async def test_result_serialises_to_camel_case(self):
        importer = SpotImporter(ExtractorRegistry({ProviderKind.OPENTABLE: _StubOpenTableExtractor()}))
        result = await importer.import_url("https://www.opentable.com/restaurant/profile/123456")

        payload = result.to_dict()
        assert payload["providerKind"] == "opentable"
        assert payload["source"] == "api"
        assert payload["draft"]["category"] == "restaurant"
        assert payload["draft"]["coordinates"] == {"lat": 37.7838, "lng": -122.4330}
        assert "imageUrl" in payload["draft"]

    @pytest.mark.asyncio
    async def test_short_link_is_resolved_before_matching(self):
        stub = _StubOpenTableExtractor()
        importer = SpotImporter(ExtractorRegistry({ProviderKind.OPENTABLE: stub}))
        target = httpx.URL("https://www.opentable.com/r/state-bird-provisions")

        with patch(
            "services.api.url_import.pipeline.resolve_short_link",
            new=AsyncMock(return_value=target),
        ) as mock_resolve:
            result = await importer.import_url("https://bit.ly/sbp")

        mock_resolve.assert_awaited_once()
        assert result.provider_kind is ProviderKind.OPENTABLE
        assert stub.matches[0].slug == "state-bird-provisions"

    @pytest.mark.asyncio
    async def test_match_url_does_not_extract(self):
        stub = _StubOpenTableExtractor()
        importer = SpotImporter(ExtractorRegistry({ProviderKind.OPENTABLE: stub}))

        match = await importer.match_url("https://www.opentable.com/restaurant/profile/42")

        assert match.restaurant_id == "42"
        assert stub.matches == []


# ---------------------------------------------------------------------------
# Error policy
# ---------------------------------------------------------------------------

class TestErrors:
    @pytest.mark.asyncio
    async def test_invalid_url_propagates(self):
        with pytest.raises(InvalidURL):
            await SpotImporter().import_url("not a url")

    @pytest.mark.asyncio
    async def test_blocked_host_propagates(self):
        with pytest.raises(BlockedHost):
            await SpotImporter().import_url("http://169.254.169.254/latest/meta-data/")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url, expected_message",
        [
            ("https://www.opentable.com/restaurant/profile/123456", "OpenTable API not configured"),
            ("https://www.tripadvisor.com/Restaurant_Review-g1-d2-Reviews-X.html", "TripAdvisor API not configured"),
        ],
    )
    async def test_default_hooks_report_unconfigured(self, url, expected_message):
        with pytest.raises(ProviderUnavailable) as exc_info:
            await SpotImporter(default_registry()).import_url(url)
        assert exc_info.value.message == expected_message

    @pytest.mark.asyncio
    async def test_unregistered_kind_is_provider_unavailable(self):
        importer = SpotImporter(ExtractorRegistry())
        with pytest.raises(ProviderUnavailable) as exc_info:
            await importer.import_url("https://www.yelp.com/biz/tartine-bakery")
        assert exc_info.value.provider_kind == "yelp"

    @pytest.mark.asyncio
    async def test_extraction_failed_passes_through(self):
        importer = SpotImporter(ExtractorRegistry({ProviderKind.YELP: _FailingExtractor()}))
        with pytest.raises(ExtractionFailed) as exc_info:
            await importer.import_url("https://www.yelp.com/biz/tartine-bakery")
        assert exc_info.value.message == "Yelp returned 500"

    @pytest.mark.asyncio
    async def test_unexpected_extractor_error_is_wrapped(self):
        importer = SpotImporter(ExtractorRegistry({ProviderKind.GENERIC: _ExplodingExtractor()}))
        with pytest.raises(ExtractionFailed) as exc_info:
            await importer.import_url("https://example.com/some-bar")
        assert exc_info.value.provider_kind == "generic"
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_default_registry_kinds(self):
        registry = default_registry()
        assert set(registry.kinds()) == {ProviderKind.GOOGLE_MAPS, ProviderKind.OPENTABLE, ProviderKind.TRIPADVISOR}
        assert not registry.is_configured(ProviderKind.YELP)

    def test_register_replaces_existing(self):
        registry = ExtractorRegistry()
        first, second = _StubOpenTableExtractor(), _StubOpenTableExtractor()
        registry.register(ProviderKind.OPENTABLE, first)
        registry.register(ProviderKind.OPENTABLE, second)
        assert registry.get(ProviderKind.OPENTABLE) is second
        assert registry.is_configured(ProviderKind.OPENTABLE)

    @pytest.mark.asyncio
    async def test_resolved_url_is_filled_from_match(self):
        importer = SpotImporter(ExtractorRegistry({ProviderKind.OPENTABLE: _StubOpenTableExtractor()}))
        target = httpx.URL("https://www.opentable.com/r/state-bird-provisions")

        with patch(
            "services.api.url_import.pipeline.resolve_short_link",
            new=AsyncMock(return_value=target),
        ):
            result = await importer.import_url("https://bit.ly/sbp")

        assert result.resolved_url == "https://www.opentable.com/r/state-bird-provisions"
        assert result.to_dict()["resolvedUrl"] == "https://www.opentable.com/r/state-bird-provisions"
