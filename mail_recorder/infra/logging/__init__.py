"""Structured logging for mail recorder.

Usage:
    from mail_recorder.infra.logging import setup_logging

    setup_logging()
"""

from __future__ import annotations

from .config import configure_logging, setup_logging
from .formatters import JSONFormatter

__all__ = ["JSONFormatter", "configure_logging", "setup_logging"]
