"""
Short-link resolution (bit.ly, t.co, maps.app.goo.gl, ...).

Only hosts in SHORT_LINK_DOMAINS trigger a network call; everything else is
returned untouched. For shorteners:

  1. HEAD with redirects followed (some shorteners, notably maps.app.goo.gl,
     answer HEAD with 405 or a non-2xx status)
  2. otherwise GET in streaming mode -- the body is never read, we only need
     the final URL after redirects
  3. every outgoing hop is checked against the validator before it is sent,
     and the final URL is validated again

Transport errors and timeouts are logged and the original URL is returned.
BlockedHost is never absorbed.
"""

from __future__ import annotations

import logging

import httpx

from services.api.config import settings
from services.api.url_import.validator import check_host, validate_url

logger = logging.getLogger(__name__)

SHORT_LINK_DOMAINS = frozenset({
    "bit.ly",
    "t.co",
    "goo.gl",
    "tinyurl.com",
    "ow.ly",
    "maps.app.goo.gl",
    "pin.it",
})


def is_short_link(url: httpx.URL) -> bool:
    return url.host.lower() in SHORT_LINK_DOMAINS


async def _guard_redirect_hop(request: httpx.Request) -> None:
    # Runs for the initial request and for every redirect httpx follows.
    check_host(request.url)


async def resolve_short_link(
    url: httpx.URL,
    *,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.URL:
    """
    Follow a known shortener to its target URL.

    Args:
        url:       A URL that already passed validate_url().
        timeout_s: Per-request timeout (defaults to settings.short_link_timeout_s).
        transport: Optional httpx transport override.

    Returns:
        The validated target URL, or `url` itself when it is not a short link
        or resolution failed at the transport level.

    Raises:
        BlockedHost: a redirect hop or the final URL points at a denylisted host.
    """
    if not is_short_link(url):
        return url

    timeout = timeout_s if timeout_s is not None else settings.short_link_timeout_s

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.http_user_agent},
            event_hooks={"request": [_guard_redirect_hop]},
            transport=transport,
        ) as client:
            response = await client.head(url)
            final_url = response.url

            if not response.is_success or response.status_code == 405:
                async with client.stream("GET", url) as streamed:
                    final_url = streamed.url
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Short-link resolution failed for %s: %s", url, exc)
        return url

    resolved = validate_url(final_url)
    logger.info("Resolved short link %s -> %s", url, resolved)
    return resolved
