from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from runtime_dynamics import __version__
from runtime_dynamics.core.config import Settings, get_settings
from runtime_dynamics.core.errors import NotFoundError

router = APIRouter()

# API endpoints are registered on this router and served under /api
# e.g. router.add_api_route("/exec-data-transit", exec_data_transit, methods=["GET"])


def render_error(err: Exception, status_code: int, message: str) -> JSONResponse:
    """JSON error body; missing entities always map to 404."""
    logger.error(f"{message}: {err}")
    if isinstance(err, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    return JSONResponse(status_code=status_code, content={"error": message})


def render_success() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content={"message": "success"})


def render_final(err: Exception | None, message: str) -> JSONResponse:
    if err is not None:
        return render_error(err, status.HTTP_500_INTERNAL_SERVER_ERROR, message)
    return render_success()


def render_final_content(content: Any, key: str, err: Exception | None) -> JSONResponse:
    """Wrap content as {key: content}, or return it bare when key is empty."""
    if err is not None:
        return render_error(err, status.HTTP_500_INTERNAL_SERVER_ERROR, key)
    if not key:
        return JSONResponse(status_code=status.HTTP_200_OK, content=content)
    return JSONResponse(status_code=status.HTTP_200_OK, content={key: content})


async def health_check(request: Request, settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    static_index = request.app.state.static_index
    return render_final_content(
        {
            "status": "healthy",
            "service": request.app.title,
            "version": __version__,
            "dev_mode": settings.IS_DEV,
            "static_enabled": settings.static_enabled,
            "static_routes": len(static_index) if static_index is not None else 0,
        },
        "",
        None,
    )
