"""
Notification copy configuration.

Copy is served from a process-wide in-memory cache:
  - populated on first use
  - refreshed once older than the TTL (1 hour by default)
  - overwritten in place, no lock -- a redundant concurrent refresh is harmless

The default loader returns the built-in copy; a remote loader can be passed to
NotificationConfigCache without changing callers.

Copy strings use {placeholder} variables, filled by interpolate_copy():
  "You're in {city}!"  +  {"city": "Lisbon"}  ->  "You're in Lisbon!"
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional

from services.api.config import settings

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class NotificationCopy:
    title: str
    body: str
    action: Optional[str] = None


@dataclass(frozen=True)
class HomeCopy:
    weekend_suggestion: NotificationCopy   # at home with unvisited spots nearby
    revisit_reminder: NotificationCopy     # old unvisited spots


@dataclass(frozen=True)
class AwayCopy:
    city_spots_available: NotificationCopy  # arrived in a city with saved spots
    nearby_spots: NotificationCopy          # in a country with saved spots, not this city
    explore_prompt: NotificationCopy        # somewhere with no saved spots


@dataclass(frozen=True)
class NotificationConfig:
    home: HomeCopy
    away: AwayCopy


DEFAULT_NOTIFICATION_CONFIG = NotificationConfig(
    home=HomeCopy(
        weekend_suggestion=NotificationCopy(
            title="Weekend plans?",
            body="You've got {count} spots saved nearby. Time to check one off the list?",
            action="View spots",
        ),
        revisit_reminder=NotificationCopy(
            title="Remember these spots?",
            body="You saved some places a while ago. Did you get a chance to visit?",
            action="Review spots",
        ),
    ),
    away=AwayCopy(
        city_spots_available=NotificationCopy(
            title="You're in {city}!",
            body="You've got {count} spots saved here. Ready to explore?",
            action="View spots",
        ),
        nearby_spots=NotificationCopy(
            title="Spots nearby in {country}",
            body="You have {count} saved spots in {country}. Worth a detour?",
            action="See all",
        ),
        explore_prompt=NotificationCopy(
            title="Exploring {location}?",
            body="Save some spots for your trip so you don't forget them.",
            action="Add spot",
        ),
    ),
)


def interpolate_copy(copy: NotificationCopy, variables: dict[str, str | int | float]) -> NotificationCopy:
    """Fill {name} placeholders; unknown placeholders are left as-is."""

    def _fill(text: str) -> str:
        def _sub(m: re.Match) -> str:
            value = variables.get(m.group(1))
            return m.group(0) if value is None else str(value)

        return _PLACEHOLDER_RE.sub(_sub, text)

    return NotificationCopy(
        title=_fill(copy.title),
        body=_fill(copy.body),
        action=_fill(copy.action) if copy.action else None,
    )


def _default_loader() -> NotificationConfig:
    return DEFAULT_NOTIFICATION_CONFIG


class NotificationConfigCache:
    """
    Single owned cache of the notification config with a last-fetch timestamp.

    Usage:
        cache = NotificationConfigCache()
        config = cache.get()
        copy = interpolate_copy(config.away.city_spots_available, {"city": "Lisbon", "count": 3})
    """

    def __init__(
        self,
        loader: Callable[[], NotificationConfig] = _default_loader,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl_seconds = settings.notification_config_ttl_s if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._config: Optional[NotificationConfig] = None
        self._fetched_at: Optional[float] = None

    def _is_fresh(self, now: float) -> bool:
        return (
            self._config is not None
            and self._fetched_at is not None
            and now - self._fetched_at < self._ttl_seconds
        )

    def get(self) -> NotificationConfig:
        now = self._clock()
        if self._is_fresh(now):
            return self._config

        try:
            config = self._loader()
        except Exception:
            if self._config is not None:
                logger.warning("Notification config refresh failed; serving stale copy", exc_info=True)
                return self._config
            logger.warning("Notification config load failed; using built-in copy", exc_info=True)
            config = DEFAULT_NOTIFICATION_CONFIG

        self._config = config
        self._fetched_at = now
        return config

    def invalidate(self) -> None:
        """Drop the cached config so the next get() reloads (useful in tests)."""
        self._config = None
        self._fetched_at = None


_cache = NotificationConfigCache()


def get_notification_config() -> NotificationConfig:
    return _cache.get()
