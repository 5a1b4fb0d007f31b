"""Pydantic Settings v2 configuration.

Settings are split by concern and loaded through LRU-cached loaders:
    from mail_recorder.core.settings import get_delivery_settings

Configuration precedence (highest to lowest):
    1. init kwargs (host configuration, testing)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .delivery import DeliverySettings, always_deliver, default_delivery_options
from .loader import get_delivery_settings, get_logging_settings, get_mailer_settings
from .logs import LoggingSettings
from .mailer import MailerSettings

__all__ = [
    "DeliverySettings",
    "LoggingSettings",
    "MailerSettings",
    "always_deliver",
    "default_delivery_options",
    "get_delivery_settings",
    "get_logging_settings",
    "get_mailer_settings",
]
