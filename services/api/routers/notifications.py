"""
GET /notifications/config -- push-notification copy for the mobile client.

Served from the process-wide TTL cache; the client does its own placeholder
interpolation, so templates go out raw.
"""

from __future__ import annotations

import dataclasses

from fastapi import APIRouter, Request

from services.api.notifications import get_notification_config

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/config")
async def notification_config(request: Request) -> dict:
    config = get_notification_config()
    return {
        "success": True,
        "data": dataclasses.asdict(config),
        "requestId": request.state.request_id,
    }
