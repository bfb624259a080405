"""Core modules for Hatchbot."""

from .http_server import WebhookServer
from .logging import setup_logging

__all__ = [
    "WebhookServer",
    "setup_logging",
]
