"""Tests for resolve_location: reverse-geocoded names win over raw provider text."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from services.api.geo import ReverseGeocodeResult, resolve_location
from services.api.geo.location import EVIDENCE_REVERSE_GEOCODE

REVERSE_PATH = "services.api.geo.location.reverse_geocode"


class TestResolveLocation:
    @pytest.mark.asyncio
    async def test_without_coordinates_uses_raw_text(self):
        with patch(REVERSE_PATH, new=AsyncMock()) as mock_reverse:
            result = await resolve_location("City of Paris", "FR")

        mock_reverse.assert_not_awaited()
        assert result.canonical_city == "Paris"
        assert result.canonical_city_id == "paris-france"
        assert EVIDENCE_REVERSE_GEOCODE not in result.evidence

    @pytest.mark.asyncio
    async def test_geocoded_city_wins(self):
        geo = ReverseGeocodeResult(canonical_city="London", neighborhood="Camden Town", country="United Kingdom")
        with patch(REVERSE_PATH, new=AsyncMock(return_value=geo)) as mock_reverse:
            result = await resolve_location("Greater London (Borough of Camden)", "UK", 51.539, -0.1426)

        mock_reverse.assert_awaited_once_with(51.539, -0.1426)
        assert result.canonical_city == "London"
        assert result.canonical_city_id == "london-united-kingdom"
        assert result.evidence[0] == EVIDENCE_REVERSE_GEOCODE

    @pytest.mark.asyncio
    async def test_missing_geo_field_falls_back_to_raw(self):
        geo = ReverseGeocodeResult(canonical_city=None, country="Portugal")
        with patch(REVERSE_PATH, new=AsyncMock(return_value=geo)):
            result = await resolve_location("Lisbon", None, 38.72, -9.14)

        assert result.canonical_city == "Lisbon"
        assert result.canonical_city_id == "lisbon-portugal"

    @pytest.mark.asyncio
    async def test_empty_geocode_uses_raw_text(self):
        with patch(REVERSE_PATH, new=AsyncMock(return_value=ReverseGeocodeResult())):
            result = await resolve_location("Brooklyn, Kings County", "US", 40.67, -73.94)

        assert result.canonical_city == "Brooklyn"
        assert result.canonical_city_id == "brooklyn-united-states"
        assert EVIDENCE_REVERSE_GEOCODE not in result.evidence

    @pytest.mark.asyncio
    async def test_neighbourhood_only_geocode_is_not_credited(self):
        geo = ReverseGeocodeResult(neighborhood="Alfama", admin_area="Lisboa")
        with patch(REVERSE_PATH, new=AsyncMock(return_value=geo)):
            result = await resolve_location("Lisbon", "Portugal", 38.71, -9.13)

        assert result.canonical_city == "Lisbon"
        assert result.canonical_city_id == "lisbon-portugal"
        assert EVIDENCE_REVERSE_GEOCODE not in result.evidence

    @pytest.mark.asyncio
    async def test_country_only_geocode_is_credited(self):
        geo = ReverseGeocodeResult(country="Portugal")
        with patch(REVERSE_PATH, new=AsyncMock(return_value=geo)):
            result = await resolve_location("Lisbon", None, 38.71, -9.13)

        assert result.evidence[0] == EVIDENCE_REVERSE_GEOCODE
        assert isinstance(result.evidence, tuple)
