"""Delivery method registry.

Delivery methods are registered by name together with a builder and their
default settings. The host mailer creates the active method per delivery,
and the database delivery method creates its chain target the same way,
so every method runs with its own settings.

Usage:
    registry = DeliveryMethodRegistry()
    registry.add_delivery_method("console", ConsoleDeliveryMethod)
    registry.configure("file", location="/tmp/emails")

    method = registry.create("console")
    method.deliver(message)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from mail_recorder.core.exceptions import UnknownDeliveryMethodError

from .base import DeliveryMethod

logger = logging.getLogger(__name__)

DeliveryMethodBuilder = Callable[[dict[str, Any]], DeliveryMethod]


@dataclass
class DeliveryMethodRegistration:
    """A registered delivery method.

    Attributes:
        builder: Callable creating the method from its settings
        defaults: Settings applied underneath configured values
        settings: Configured settings
    """

    builder: DeliveryMethodBuilder
    defaults: dict[str, Any] = field(default_factory=dict)
    settings: dict[str, Any] = field(default_factory=dict)

    @property
    def effective_settings(self) -> dict[str, Any]:
        return {**self.defaults, **self.settings}


class DeliveryMethodRegistry:
    """Explicit mapping from delivery method name to builder and settings."""

    def __init__(self) -> None:
        self._registry: dict[str, DeliveryMethodRegistration] = {}

    def add_delivery_method(
        self,
        name: str,
        builder: DeliveryMethodBuilder,
        default_settings: Mapping[str, Any] | None = None,
    ) -> None:
        """Register a delivery method.

        Registering an existing name replaces the builder and defaults but
        keeps already configured settings.

        Args:
            name: Delivery method identifier (e.g., "db", "console")
            builder: Class or callable taking the settings dict
            default_settings: Settings used when nothing is configured
        """
        existing = self._registry.get(name)
        self._registry[name] = DeliveryMethodRegistration(
            builder=builder,
            defaults=dict(default_settings or {}),
            settings=dict(existing.settings) if existing else {},
        )
        logger.debug("Registered delivery method: %s", name)

    def remove_delivery_method(self, name: str) -> bool:
        """Unregister a delivery method.

        Args:
            name: Delivery method identifier

        Returns:
            True if the method was registered and removed
        """
        if name in self._registry:
            del self._registry[name]
            logger.debug("Unregistered delivery method: %s", name)
            return True
        return False

    def _get(self, name: str | None) -> DeliveryMethodRegistration:
        if name is None or name not in self._registry:
            raise UnknownDeliveryMethodError(name, available=self.list_methods())
        return self._registry[name]

    def settings_for(self, name: str) -> dict[str, Any]:
        """Get the effective settings of a delivery method.

        Raises:
            UnknownDeliveryMethodError: If the method is not registered
        """
        return self._get(name).effective_settings

    def configure(self, name: str, **settings: Any) -> None:
        """Update configured settings of a delivery method.

        Raises:
            UnknownDeliveryMethodError: If the method is not registered
        """
        self._get(name).settings.update(settings)

    def replace_settings(self, name: str, settings: Mapping[str, Any]) -> None:
        """Replace all configured settings of a delivery method.

        Raises:
            UnknownDeliveryMethodError: If the method is not registered
        """
        self._get(name).settings = dict(settings)

    def create(self, name: str | None) -> DeliveryMethod:
        """Create a delivery method configured with its own settings.

        Args:
            name: Delivery method identifier

        Returns:
            New DeliveryMethod instance

        Raises:
            UnknownDeliveryMethodError: If the method is not registered
        """
        registration = self._get(name)
        return registration.builder(registration.effective_settings)

    def list_methods(self) -> list[str]:
        """List all registered delivery method names."""
        return list(self._registry.keys())

    def is_available(self, name: str) -> bool:
        """Check if a delivery method is registered."""
        return name in self._registry


__all__ = [
    "DeliveryMethodBuilder",
    "DeliveryMethodRegistration",
    "DeliveryMethodRegistry",
]
