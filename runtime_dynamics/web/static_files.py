"""
Static asset discovery and serving.

Production builds a URL -> file index once at startup and serves every
indexed file through a single exact-match lookup route. Development mounts
a few asset directories live so edits show up without a restart.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from runtime_dynamics.core.config import Settings
from runtime_dynamics.core.errors import TraversalError

# Owned by dedicated page handlers, never served from the static tree
RESERVED_URLS = frozenset(
    {
        "/",
        "/index",
        "/index.html",
        "/desktop-login",
        "/desktop-login.html",
    }
)

# Directories mounted live in development mode
DEV_MOUNTS = ("images", "css", "js")

StaticFileIndex = Mapping[str, str]


def build_index(root_dir: str | os.PathLike) -> StaticFileIndex:
    """
    Walk root_dir and map every file to the URL it is served under.

    Each file is reachable at "/" + its path relative to root_dir; .html files
    are also reachable without the extension. Reserved URLs are left out.

    Raises:
        TraversalError: root_dir or one of its subdirectories cannot be read.
    """
    root = os.path.abspath(root_dir)
    index: dict[str, str] = {}

    def on_error(err: OSError):
        raise TraversalError(err.filename or root, "Error reading static directory") from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            url = "/" + Path(os.path.relpath(path, root)).as_posix()
            logger.debug(f"Found static file: {path}, setting url: {url}")

            _add(index, url, path)
            if url.endswith(".html"):
                _add(index, url.removesuffix(".html"), path)

    return MappingProxyType(index)


def _add(index: dict[str, str], url: str, path: str) -> None:
    if url in RESERVED_URLS:
        logger.debug(f"Skipping reserved url: {url}")
        return
    index[url] = path


def resolve(index: StaticFileIndex, url: str) -> str | None:
    """Exact-match lookup. None means not found."""
    if url in RESERVED_URLS:
        return None
    return index.get(url)


def _file_endpoint(index: StaticFileIndex):
    async def serve_static_file(static_path: str):
        path = resolve(index, "/" + static_path)
        if path is None:
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(path)

    return serve_static_file


def register_static_routes(app: FastAPI, settings: Settings) -> StaticFileIndex | None:
    """
    Expose the static tree on app according to the configured mode.

    Returns the index in production mode, None when the index is not used
    (development mounts or static serving disabled).
    """
    static_dir = Path(settings.STATIC_DIR)

    if settings.IS_DEV:
        for name in DEV_MOUNTS:
            directory = static_dir / name
            if not directory.is_dir():
                logger.warning(f"Static directory '{directory}' not found; /{name} not mounted")
                continue
            app.mount(f"/{name}", StaticFiles(directory=str(directory)), name=f"static-{name}")
            logger.info(f"Mounted /{name} -> {directory}")
        return None

    if not settings.static_enabled:
        logger.info("Static file serving disabled (NO_STATIC)")
        return None

    index = build_index(static_dir)
    # One lookup route instead of a route per file: file names are not route
    # templates, so "{name}.txt" must not turn into a path parameter.
    app.add_api_route(
        "/{static_path:path}",
        _file_endpoint(index),
        methods=["GET", "HEAD"],
        include_in_schema=False,
        name="static",
    )
    logger.info(f"Serving {len(index)} static urls from {static_dir}")
    return index
