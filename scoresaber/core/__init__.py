"""Core utilities for the client."""

from scoresaber.core.config import Settings, settings
from scoresaber.core.http_client import create_http_client
from scoresaber.core.logging import get_log_context, get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "create_http_client",
    "get_log_context",
    "get_logger",
    "setup_logging",
]
