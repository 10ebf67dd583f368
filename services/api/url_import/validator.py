"""
URL validation for user-supplied import links (SSRF defense).

Pure and synchronous: no DNS lookups, no network I/O. Host checks run against
the literal hostname string, so a public hostname that resolves to a private
address is NOT caught here.
"""

from __future__ import annotations

import re

import httpx

from services.api.url_import.errors import BlockedHost, InvalidURL

ALLOWED_SCHEMES = frozenset({"http", "https"})

BLOCKED_HOSTS = frozenset({
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "::1",
    "169.254.169.254",           # AWS / GCP / Azure metadata
    "metadata.google.internal",  # GCP metadata
})

# RFC 1918 ranges, matched textually against the hostname.
BLOCKED_IP_RANGES: list[re.Pattern] = [
    re.compile(r"^10\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[01])\."),
    re.compile(r"^192\.168\."),
]


def parse_url(url_string: str) -> httpx.URL:
    """Parse an absolute URL or raise InvalidURL."""
    if not isinstance(url_string, str) or not url_string.strip():
        raise InvalidURL("Invalid URL format")

    try:
        url = httpx.URL(url_string.strip())
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise InvalidURL("Invalid URL format") from exc

    if not url.scheme:
        raise InvalidURL("Invalid URL format")
    return url


def check_host(url: httpx.URL) -> None:
    """Raise BlockedHost if scheme or host is on the denylist."""
    scheme = url.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise BlockedHost(f"Protocol {scheme}: not allowed. Use HTTP or HTTPS.")

    hostname = url.host.lower()
    if not hostname:
        raise InvalidURL("Invalid URL format")

    if hostname in BLOCKED_HOSTS:
        raise BlockedHost(f"Host {hostname} is blocked for security reasons")

    for pattern in BLOCKED_IP_RANGES:
        if pattern.match(hostname):
            raise BlockedHost("Private IP addresses are not allowed")


def validate_url(url_string: str | httpx.URL) -> httpx.URL:
    """
    Validate an untrusted URL string.

    Returns the parsed httpx.URL on success.

    Raises:
        InvalidURL:  not parseable as an absolute URL (no scheme or no host).
        BlockedHost: non-HTTP(S) scheme, denylisted host, or private-range IP literal.
    """
    url = url_string if isinstance(url_string, httpx.URL) else parse_url(url_string)
    check_host(url)
    return url
