"""
Roamo spot-import service -- URL import, city canonicalisation, notification copy.

Entrypoint: uvicorn services.api.main:app --host 0.0.0.0 --port 8000
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from services.api.config import settings
from services.api.middleware.cors import setup_cors
from services.api.middleware.sentry import setup_sentry
from services.api.routers import health, notifications, spot_import
from services.api.url_import import SpotImporter, default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if setup_sentry():
        logger.info("Sentry enabled (environment=%s)", settings.environment)

    app.state.settings = settings
    app.state.spot_importer = SpotImporter(default_registry())
    logger.info(
        "Spot importer ready; configured providers: %s",
        ", ".join(sorted(k.value for k in app.state.spot_importer.registry.kinds())) or "none",
    )

    yield


app = FastAPI(
    title="Roamo API",
    version=settings.app_version,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url=None,
    lifespan=lifespan,
)

# -- Middleware (order matters: last added = outermost in Starlette) --

# Routers first (innermost)
app.include_router(health.router)
app.include_router(spot_import.router)
app.include_router(notifications.router)

# CORS (needs to be outermost to handle preflight)
setup_cors(app)


# Request ID injection
@app.middleware("http")
async def request_envelope_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# -- Exception Handlers --

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", str(uuid.uuid4()))


def _error_response(request: Request, status_code: int, error: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "requestId": _request_id(request),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routers raise HTTPException(detail={"code", "message", ...}); keep that shape.
    if isinstance(exc.detail, dict) and "code" in exc.detail:
        error = dict(exc.detail)
    elif exc.status_code == 404:
        error = {"code": "NOT_FOUND", "message": "Resource not found."}
    else:
        error = {"code": "HTTP_ERROR", "message": str(exc.detail)}
    return _error_response(request, exc.status_code, error)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Validation error.")
    return _error_response(
        request,
        422,
        {"code": "VALIDATION_ERROR", "message": f"{field}: {message}" if field else message},
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc) -> JSONResponse:
    return _error_response(
        request,
        500,
        {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
    )
