"""Configuration, logging, request correlation and credential helpers."""

from __future__ import annotations

from .config import Settings, get_settings
from .logging import configure_logging
from .request_context import REQUEST_ID_HEADER, CorrelationIdMiddleware, current_request_id

__all__ = [
    "REQUEST_ID_HEADER",
    "CorrelationIdMiddleware",
    "Settings",
    "configure_logging",
    "current_request_id",
    "get_settings",
]
