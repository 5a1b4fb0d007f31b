"""Record factory registry.

Record factories are registered by name at startup and looked up by the
database delivery method on every delivery. Lookup fails closed: unknown
names and handles without ``create`` raise InvalidFactoryError.

Usage:
    registry = RecordFactoryRegistry()
    registry.register("sql", SQLAlchemyRecordFactory(session_factory))

    factory = registry.resolve("sql")
    factory.create(fields)
"""

from __future__ import annotations

import logging
from typing import Any

from mail_recorder.core.exceptions import InvalidFactoryError

from .base import RecordFactory
from .memory import InMemoryRecordFactory

logger = logging.getLogger(__name__)


class RecordFactoryRegistry:
    """Explicit mapping from factory name to record factory handle.

    Example:
        registry = RecordFactoryRegistry()
        registry.list_factories()  # ["memory"]
    """

    def __init__(self, *, register_builtins: bool = True) -> None:
        self._registry: dict[str, Any] = {}

        if register_builtins:
            self._register_builtin_factories()

    def _register_builtin_factories(self) -> None:
        """Register factories that need no configuration."""
        self.register("memory", InMemoryRecordFactory())

    def register(self, name: str, factory: Any) -> None:
        """Register a record factory handle.

        Capability is checked on resolve, so handles can be registered
        before they are fully wired.

        Args:
            name: Factory identifier referenced by the ``factory`` setting
            factory: Object exposing ``create(fields)``
        """
        self._registry[name] = factory
        logger.debug("Registered record factory: %s", name)

    def unregister(self, name: str) -> bool:
        """Unregister a record factory.

        Args:
            name: Factory identifier

        Returns:
            True if the factory was registered and removed
        """
        if name in self._registry:
            del self._registry[name]
            logger.debug("Unregistered record factory: %s", name)
            return True
        return False

    def resolve(self, reference: str | None) -> RecordFactory:
        """Resolve a factory reference to a usable handle.

        Args:
            reference: Factory identifier from configuration

        Returns:
            RecordFactory registered under the reference

        Raises:
            InvalidFactoryError: If the reference is unset, unknown or the
                registered handle has no ``create`` method
        """
        if reference is None:
            raise InvalidFactoryError(reference, reason="no factory configured")

        if reference not in self._registry:
            raise InvalidFactoryError(
                reference,
                reason=f"not registered, available: {self.list_factories()}",
            )

        factory = self._registry[reference]
        if not isinstance(factory, RecordFactory):
            raise InvalidFactoryError(reference, reason="missing create method")

        return factory

    def get(self, name: str) -> Any | None:
        """Get the raw handle registered under a name, if any."""
        return self._registry.get(name)

    def list_factories(self) -> list[str]:
        """List all registered factory names."""
        return list(self._registry.keys())

    def is_available(self, name: str) -> bool:
        """Check if a factory name is registered."""
        return name in self._registry


__all__ = ["RecordFactoryRegistry"]
