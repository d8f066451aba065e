# slashnote/utils/__init__.py
"""Logging and observability helpers."""

from slashnote.utils.logging import (
    configure_structured_logging,
    get_logger,
    get_request_id,
    request_context,
    set_request_id,
)
from slashnote.utils.observability import setup_logfire

__all__ = [
    "setup_logfire",
    "get_logger",
    "set_request_id",
    "get_request_id",
    "request_context",
    "configure_structured_logging",
]
