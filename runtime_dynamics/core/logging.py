import sys
import time
from pathlib import Path

from fastapi import Request
from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level}</level> | "
    "<cyan>{function}</cyan> | {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} | {message}"


def setup_logging(debug: bool = False, log_dir: str = "") -> None:
    """Replace loguru's default handler with the console (and optional file) sinks."""
    level = "DEBUG" if debug else "INFO"

    logger.remove()
    logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT)

    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        logger.add(
            str(Path(log_dir) / "runtime-dynamics.log"),
            rotation="10 MB",
            retention="7 days",
            level=level,
            format=FILE_FORMAT,
        )


async def log_requests(request: Request, call_next):
    """HTTP middleware: one access log line per request."""
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000

    logger.info(
        f"{request.method} {request.url.path} host={request.headers.get('host', '-')} "
        f"status={response.status_code} latency={latency_ms:.2f}ms"
    )
    return response
