"""
POST /spot-import -- turn a pasted link into a spot draft.

Request:  {"url": "https://www.yelp.com/biz/...", "context": "optional, <= 2000 chars"}
Response: {"success": true, "data": {"providerKind", "source", "draft", "resolvedUrl",
                                    "confidence", "warnings", "requiresConfirmation"},
           "requestId"}

`context` is passed through untouched for the AI enrichment step, which runs
outside this service.

HTTP errors:
- 400 INVALID_URL / BLOCKED_HOST   -- validation failures, surfaced verbatim
- 422 PROVIDER_UNAVAILABLE         -- no data source; client shows the manual form
- 422 (FastAPI)                    -- malformed request body
- 502 EXTRACTION_FAILED            -- provider fetch/parse failed; manual form
- 500 INTERNAL_ERROR               -- anything unexpected
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from services.api.config import settings
from services.api.url_import import (
    BlockedHost,
    ExtractionFailed,
    InvalidURL,
    ProviderUnavailable,
    SpotImporter,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spot-import", tags=["spot-import"])

MAX_URL_LENGTH = 2048
MAX_CONTEXT_LENGTH = settings.spot_import_context_max_chars


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class SpotImportRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=MAX_URL_LENGTH)
    context: Optional[str] = Field(
        default=None,
        max_length=MAX_CONTEXT_LENGTH,
        description="Free-text trip context for enrichment (2000 char max)",
    )

    @field_validator("url")
    @classmethod
    def must_be_absolute_url(cls, v: str) -> str:
        v = v.strip()
        try:
            parsed = httpx.URL(v)
        except (httpx.InvalidURL, ValueError) as exc:
            raise ValueError(f"Must be a valid URL, got: {v!r}") from exc
        # Scheme allow-listing happens in the pipeline so it reports BLOCKED_HOST.
        if not parsed.scheme or not parsed.host:
            raise ValueError(f"Must be an absolute URL with a host, got: {v!r}")
        return v


class SpotImportResponse(BaseModel):
    success: bool
    data: dict
    requestId: str


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

def _error(status_code: int, code: str, message: str, fallback: str | None = None) -> HTTPException:
    detail: dict = {"code": code, "message": message}
    if fallback:
        detail["fallback"] = fallback
    return HTTPException(status_code=status_code, detail=detail)


@router.post("", response_model=SpotImportResponse)
async def import_spot(body: SpotImportRequest, request: Request) -> dict:
    """Run the URL import pipeline for a single link."""
    importer: SpotImporter = request.app.state.spot_importer
    request_id: str = getattr(request.state, "request_id", "")

    try:
        result = await importer.import_url(body.url)
    except (InvalidURL, BlockedHost) as exc:
        logger.info("Rejected import url (%s): %s", exc.code, exc.message)
        raise _error(400, exc.code, exc.message) from exc
    except ProviderUnavailable as exc:
        raise _error(422, exc.code, exc.message, fallback="manual") from exc
    except ExtractionFailed as exc:
        logger.warning("Extraction failed for provider=%s: %s", exc.provider_kind, exc.message)
        raise _error(502, exc.code, exc.message, fallback="manual") from exc
    except Exception as exc:
        logger.exception("Spot import raised unexpectedly")
        raise _error(500, "INTERNAL_ERROR", "Failed to import URL") from exc

    return {
        "success": True,
        "data": result.to_dict(),
        "requestId": request_id,
    }
