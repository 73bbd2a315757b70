from fastapi import FastAPI

from runtime_dynamics.api import routes as api
from runtime_dynamics.core.config import Settings
from runtime_dynamics.web import home, seo
from runtime_dynamics.web.static_files import StaticFileIndex, register_static_routes


def register_web_routes(app: FastAPI) -> None:
    """Register the HTML and crawler routes (everything that is not /api)."""
    app.include_router(seo.router, tags=["seo"])
    app.include_router(home.router, tags=["pages"])


def register_routes(app: FastAPI, settings: Settings) -> StaticFileIndex | None:
    """
    Wire every route onto app: API first, then pages, then static files.

    Page handlers are registered before the static layer so reserved URLs such
    as "/" always reach them.

    Raises:
        TraversalError: production static directory could not be walked.
    """
    app.include_router(api.router, prefix="/api", tags=["api"])
    app.add_api_route("/health", api.health_check, methods=["GET"], tags=["health"])

    register_web_routes(app)

    return register_static_routes(app, settings)
