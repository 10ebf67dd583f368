"""
Provider extractors for the URL import pipeline.

One ProviderExtractor per ProviderKind, dispatched through ExtractorRegistry.
"""

from .base import (
    ExtractorRegistry,
    ProviderExtractor,
    UnconfiguredExtractor,
)
from .google_maps import GoogleMapsUrlOnlyExtractor
from .opentable import OpenTableExtractor
from .tripadvisor import TripAdvisorExtractor

__all__ = [
    "ExtractorRegistry",
    "ProviderExtractor",
    "UnconfiguredExtractor",
    "GoogleMapsUrlOnlyExtractor",
    "OpenTableExtractor",
    "TripAdvisorExtractor",
]
