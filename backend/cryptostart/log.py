"""Loguru sink setup and per-request API logging."""
from __future__ import annotations

import sys
import time

from flask import Flask, g, request
from loguru import logger

_configured = False


def configure_logging(level: str = "INFO") -> None:
    global _configured
    if _configured:
        return
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
    _configured = True


def install_request_logging(app: Flask) -> None:
    """Log every API call as ``[API] METHOD /path -> status | Xms``."""

    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_response(response):
        started = g.get("request_started")
        elapsed = f" | {int((time.perf_counter() - started) * 1000)}ms" if started else ""
        line = f"[API] {request.method} {request.path} -> {response.status_code}{elapsed}"
        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)
        return response
