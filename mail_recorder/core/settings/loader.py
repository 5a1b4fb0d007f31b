"""Cached settings loaders.

Each loader builds its settings model once per process. Call
``cache_clear()`` on a loader in tests that change the environment.
"""

from __future__ import annotations

from functools import lru_cache

from .delivery import DeliverySettings
from .logs import LoggingSettings
from .mailer import MailerSettings


@lru_cache(maxsize=1)
def get_delivery_settings() -> DeliverySettings:
    """Get cached database delivery settings.

    Returns:
        Validated and frozen DeliverySettings instance.
    """
    return DeliverySettings()


@lru_cache(maxsize=1)
def get_mailer_settings() -> MailerSettings:
    """Get cached host mailer settings.

    Returns:
        Validated and frozen MailerSettings instance.
    """
    return MailerSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()
