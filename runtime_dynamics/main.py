"""
runtime-dynamics web server
FastAPI application: API, HTML pages and static assets.
"""

import os
import sys
import tempfile
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from loguru import logger

from runtime_dynamics import __version__
from runtime_dynamics.core.config import Settings, decode_pem, load_settings
from runtime_dynamics.core.errors import TraversalError
from runtime_dynamics.core.logging import log_requests, setup_logging
from runtime_dynamics.web.routes import register_routes
from runtime_dynamics.web.templating import create_templates


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application from settings (read from the environment if omitted).

    Raises:
        TraversalError: the static directory could not be walked.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="runtime-dynamics",
        description="Minimal web server: pages, static assets and a JSON API",
        version=__version__,
        debug=settings.DEBUG,
        # /docs, /redoc and /openapi.json belong to the static tree
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.middleware("http")(log_requests)

    app.state.settings = settings
    app.state.templates = create_templates()
    app.state.static_index = register_routes(app, settings)

    return app


def _write_pem(content: str, suffix: str) -> str:
    with tempfile.NamedTemporaryFile("w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


def tls_options(settings: Settings) -> dict:
    """uvicorn ssl_* arguments for the configured certificate, if any."""
    if not settings.tls_enabled:
        return {}
    return {
        "ssl_certfile": _write_pem(decode_pem(settings.TLS_CERT, "TLS_CERT"), ".crt.pem"),
        "ssl_keyfile": _write_pem(decode_pem(settings.TLS_KEY, "TLS_KEY"), ".key.pem"),
    }


def main():
    """Main entry point for the application."""
    # Config fallbacks log while loading, so the sinks go in first
    setup_logging(debug=bool(os.environ.get("DEBUG", "").strip()))
    settings = load_settings()
    setup_logging(debug=settings.DEBUG, log_dir=settings.LOG_DIR)
    logger.info(f"Starting runtime-dynamics (Version: {__version__})")

    try:
        app = create_app(settings)
    except TraversalError as e:
        logger.critical(f"Error getting static files: {e}")
        sys.exit(1)

    scheme = "https" if settings.tls_enabled else "http"
    logger.info(f"Listening on {scheme}://{settings.HOST}:{settings.LISTEN_PORT}")
    ssl_files = tls_options(settings)
    try:
        uvicorn.run(
            app,
            host=settings.HOST,
            port=settings.LISTEN_PORT,
            log_level="debug" if settings.DEBUG else "info",
            access_log=False,
            **ssl_files,
        )
    finally:
        # Decoded private key must not outlive the process
        for path in ssl_files.values():
            Path(path).unlink(missing_ok=True)


if __name__ == "__main__":
    main()
