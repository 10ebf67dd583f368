"""Spot draft and import result types produced by the URL import pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from services.api.url_import.providers import ProviderKind


class SpotCategory(str, Enum):
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    BAR = "bar"
    MUSEUM = "museum"
    PARK = "park"
    ATTRACTION = "attraction"
    HOTEL = "hotel"
    CLUB = "club"
    SHOP = "shop"
    EVENT = "event"
    ACTIVITY = "activity"
    OTHER = "other"


class ImportSource(str, Enum):
    API = "api"
    HTML = "html"
    URL = "url"      # built from the link alone, nothing fetched


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class SpotDraft:
    """
    Partial spot record with no identity yet.

    city / country are the raw provider strings; canonicalisation happens
    downstream (services.api.geo). Enrichment steps outside the pipeline build
    new drafts with dataclasses.replace() rather than mutating this one.
    """

    link: str
    name: Optional[str] = None
    category: SpotCategory = SpotCategory.OTHER
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    comments: Optional[str] = None
    image_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "link": self.link,
            "name": self.name,
            "category": self.category.value,
            "address": self.address,
            "city": self.city,
            "country": self.country,
            "coordinates": self.coordinates.to_dict() if self.coordinates else None,
            "comments": self.comments,
            "imageUrl": self.image_url,
        }


@dataclass(frozen=True)
class ImportResult:
    """
    One successful import.

    resolved_url is the link after short-link resolution. confidence maps draft
    field names to a ConfidenceLevel; fields the extractor did not rate are
    omitted. warnings are user-facing and shown next to the draft.
    """

    provider_kind: ProviderKind
    draft: SpotDraft
    source: ImportSource
    resolved_url: Optional[str] = None
    confidence: Mapping[str, ConfidenceLevel] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()
    requires_confirmation: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "providerKind": self.provider_kind.value,
            "source": self.source.value,
            "resolvedUrl": self.resolved_url,
            "confidence": {name: level.value for name, level in self.confidence.items()},
            "warnings": list(self.warnings),
            "requiresConfirmation": self.requires_confirmation,
            "draft": self.draft.to_dict(),
        }
