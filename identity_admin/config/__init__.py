"""Configuration: pydantic-settings + structlog.

Usage:
    from identity_admin.config import get_settings, setup_logging, get_logger
    settings = get_settings()
    setup_logging()
    logger = get_logger(__name__)
"""

from .logging import (
    bind_operator_context,
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "bind_request_context",
    "bind_operator_context",
    "clear_request_context",
]
