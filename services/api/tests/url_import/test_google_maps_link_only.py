"""Tests for the Google Maps link-only extractor and its place-name parsing."""

from __future__ import annotations

import httpx
import pytest

from services.api.url_import import (
    ConfidenceLevel,
    ImportSource,
    ProviderKind,
    SpotImporter,
    default_registry,
    match_provider,
)
from services.api.url_import.extractors import GoogleMapsUrlOnlyExtractor
from services.api.url_import.extractors.google_maps import (
    CONFIRM_WARNING,
    FALLBACK_NAME,
    name_from_path,
    name_from_query,
)

TARTINE_URL = (
    "https://www.google.com/maps/place/Tartine+Bakery/"
    "@37.7614,-122.4241,17z/data=!3m1!4b1!4m6!3m5!1sChIJtartine123"
)


class TestNameParsing:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (TARTINE_URL, "Tartine Bakery"),
            ("https://www.google.com/maps/place/Caf%C3%A9+de+Flore/@48.85,2.33,17z", "Café de Flore"),
            ("https://www.google.com/maps/search/ramen+near+shibuya/", "ramen near shibuya"),
            ("https://www.google.com/maps/@37.76,-122.42,15z", None),
        ],
    )
    def test_name_from_path(self, value, expected):
        assert name_from_path(httpx.URL(value)) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://maps.google.com/?q=Blue+Bottle+Coffee", "Blue Bottle Coffee"),
            ("https://www.google.com/maps?query=Ferry+Building", "Ferry Building"),
            ("https://www.google.com/maps/search/?api=1&q=place_id:ChIJabc", None),
            ("https://maps.google.com/?cid=123", None),
        ],
    )
    def test_name_from_query(self, value, expected):
        assert name_from_query(httpx.URL(value)) == expected


class TestGoogleMapsUrlOnlyExtractor:
    @pytest.mark.asyncio
    async def test_place_link_builds_named_draft(self):
        result = await GoogleMapsUrlOnlyExtractor().extract(match_provider(TARTINE_URL))

        assert result.provider_kind is ProviderKind.GOOGLE_MAPS
        assert result.source is ImportSource.URL
        assert result.draft.name == "Tartine Bakery"
        assert result.draft.link == str(httpx.URL(TARTINE_URL))
        assert result.draft.coordinates is None
        assert result.requires_confirmation is True
        assert CONFIRM_WARNING in result.warnings
        assert result.confidence["name"] is ConfidenceLevel.MEDIUM
        assert result.confidence["link"] is ConfidenceLevel.HIGH
        assert result.confidence["city"] is ConfidenceLevel.LOW

    @pytest.mark.asyncio
    async def test_link_without_name_uses_fallback(self):
        result = await GoogleMapsUrlOnlyExtractor().extract(match_provider("https://maps.app.goo.gl/xyz"))

        assert result.draft.name == FALLBACK_NAME
        assert result.confidence["name"] is ConfidenceLevel.LOW

    @pytest.mark.asyncio
    async def test_api_error_is_surfaced_as_warning(self):
        extractor = GoogleMapsUrlOnlyExtractor(api_error="REQUEST_DENIED")
        result = await extractor.extract(match_provider(TARTINE_URL))

        assert result.warnings[0] == "Google Places API call failed: REQUEST_DENIED"
        assert result.warnings[-1] == CONFIRM_WARNING

    @pytest.mark.asyncio
    async def test_default_pipeline_imports_google_link(self):
        result = await SpotImporter(default_registry()).import_url(TARTINE_URL)

        payload = result.to_dict()
        assert payload["providerKind"] == "google_maps"
        assert payload["source"] == "url"
        assert payload["draft"]["name"] == "Tartine Bakery"
        assert payload["requiresConfirmation"] is True
        assert CONFIRM_WARNING in payload["warnings"]
        assert payload["resolvedUrl"] == str(httpx.URL(TARTINE_URL))
        assert payload["confidence"]["link"] == "high"
