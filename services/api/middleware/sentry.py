"""
Sentry instrumentation for the import service.

Disabled when SENTRY_DSN is unset. Sensitive headers are filtered from the
request payload and from breadcrumbs, and pasted URLs are dropped from
breadcrumb data since they can carry user tokens in query strings.
"""

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from services.api.config import settings

SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}
FILTERED = "[FILTERED]"


def _filter_headers(headers: Any) -> None:
    if not isinstance(headers, dict):
        return
    for key in list(headers.keys()):
        if key.lower() in SENSITIVE_HEADERS:
            headers[key] = FILTERED


def scrub_event(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """before_send hook."""
    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        data = breadcrumb.get("data")
        if not isinstance(data, dict):
            continue
        _filter_headers(data.get("headers"))
        # httpx breadcrumbs record the outbound url (short links, geocoder)
        if breadcrumb.get("category") == "httplib" and "url" in data:
            data["url"] = FILTERED

    request = event.get("request")
    if isinstance(request, dict):
        _filter_headers(request.get("headers"))
        if "data" in request:
            request["data"] = FILTERED
    return event


def setup_sentry() -> bool:
    """Initialise the SDK; returns False when no DSN is configured."""
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.app_name}@{settings.app_version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        before_send=scrub_event,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )
    return True
