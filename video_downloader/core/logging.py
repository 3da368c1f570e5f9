from fastapi import Request
import logging
from typing import Any
from rich.logging import RichHandler
from video_downloader.config.settings import config

logger = logging.getLogger("video_downloader.request")

def setup_logging() -> None:
    """Install the console handler configured in config.logging"""
    if config.logging.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.logging.format))

    package_logger = logging.getLogger("video_downloader")
    package_logger.handlers = [handler]
    package_logger.setLevel(config.logging.level)

def log_with_context(
    request: Request,
    level: int,
    message: str,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    The request id set by RequestIDMiddleware prefixes every line.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    extra = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        **kwargs
    }
    logger.log(level, f"[{request_id}] {request.method} {request.url.path} {message}", extra=extra)

def log_info(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)

def log_error(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, **kwargs)
