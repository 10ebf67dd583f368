"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    app_state = request.app.state
    registry = app_state.spot_importer.registry
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "version": app_state.settings.app_version,
            "configuredProviders": sorted(kind.value for kind in registry.kinds()),
        },
        "requestId": request.state.request_id,
    }
