"""Host mailer.

The mailer is the application's mail-sending layer. It owns the delivery
method and record factory registries and applies the host error policy
around whichever delivery method is active.

Built-in delivery methods:
- db: Persist through a record factory (DatabaseDelivery)
- memory: Collect messages in ``Mailer.deliveries``
- console: Log messages
- file: Write messages to .eml files

Usage:
    mailer = initialize_mailer()
    mailer.configure("db", factory="memory", chain_delivery_method="console")
    mailer.deliver(message)
"""

from __future__ import annotations

from functools import partial
import logging
from typing import TYPE_CHECKING, Any

from mail_recorder.core.settings.delivery import default_delivery_options

from .adapter import DatabaseDelivery
from .methods import (
    ConsoleDeliveryMethod,
    DeliveryMethodRegistry,
    FileDeliveryMethod,
    MemoryDeliveryMethod,
)
from .records import RecordFactoryRegistry

if TYPE_CHECKING:
    from mail_recorder.core.settings.delivery import DeliverySettings
    from mail_recorder.core.settings.mailer import MailerSettings

    from .methods import DeliveryMethod, DeliveryMethodBuilder
    from .schemas import OutboundMessage

logger = logging.getLogger(__name__)


class Mailer:
    """Sends outgoing messages through the active delivery method.

    Example:
        mailer = Mailer(delivery_method="db")
        mailer.configure("db", factory="memory")
        mailer.deliver(message)

        mailer.record_factories.resolve("memory").records
    """

    def __init__(
        self,
        *,
        delivery_method: str = "db",
        raise_delivery_errors: bool = True,
        record_factories: RecordFactoryRegistry | None = None,
        delivery_methods: DeliveryMethodRegistry | None = None,
    ) -> None:
        """Initialize mailer and register built-in delivery methods.

        Args:
            delivery_method: Name of the active delivery method
            raise_delivery_errors: Propagate delivery errors; when False they
                are logged and swallowed
            record_factories: Record factory registry (a new one by default)
            delivery_methods: Delivery method registry (a new one by default)
        """
        self.delivery_method = delivery_method
        self.raise_delivery_errors = raise_delivery_errors
        self.record_factories = record_factories or RecordFactoryRegistry()
        self.delivery_methods = delivery_methods or DeliveryMethodRegistry()
        self.deliveries: list[OutboundMessage] = []

        self._register_builtin_methods()

    @classmethod
    def from_settings(
        cls,
        settings: MailerSettings,
        delivery_settings: DeliverySettings | None = None,
    ) -> Mailer:
        """Create a mailer from host settings.

        Args:
            settings: Host mailer settings
            delivery_settings: Settings applied to the db delivery method

        Returns:
            Configured Mailer
        """
        mailer = cls(
            delivery_method=settings.delivery_method,
            raise_delivery_errors=settings.raise_delivery_errors,
        )
        mailer.configure("file", location=settings.file_location)
        if delivery_settings is not None:
            mailer.configure(
                "db",
                factory=delivery_settings.factory,
                chain_delivery_method=delivery_settings.chain_delivery_method,
                chain_filter=delivery_settings.chain_filter,
            )
        return mailer

    def _register_builtin_methods(self) -> None:
        """Register the delivery methods shipped with the package."""
        self.add_delivery_method(
            "memory",
            partial(MemoryDeliveryMethod, deliveries=self.deliveries),
        )
        self.add_delivery_method("console", ConsoleDeliveryMethod)
        self.add_delivery_method("file", FileDeliveryMethod)
        self.add_delivery_method(
            "db",
            self._build_database_delivery,
            default_delivery_options(),
        )

    def _build_database_delivery(self, settings: dict[str, Any]) -> DatabaseDelivery:
        return DatabaseDelivery.from_settings(
            settings,
            factories=self.record_factories,
            methods=self.delivery_methods,
        )

    def add_delivery_method(
        self,
        name: str,
        builder: DeliveryMethodBuilder,
        default_settings: dict[str, Any] | None = None,
    ) -> None:
        """Register a delivery method with this mailer."""
        self.delivery_methods.add_delivery_method(name, builder, default_settings)

    def configure(self, name: str, **settings: Any) -> None:
        """Update the settings of a delivery method."""
        self.delivery_methods.configure(name, **settings)

    def replace_settings(self, name: str, settings: dict[str, Any]) -> None:
        """Replace the settings of a delivery method."""
        self.delivery_methods.replace_settings(name, settings)

    def settings_for(self, name: str) -> dict[str, Any]:
        """Get the effective settings of a delivery method."""
        return self.delivery_methods.settings_for(name)

    def active_method(self) -> DeliveryMethod:
        """Build the active delivery method with its current settings."""
        return self.delivery_methods.create(self.delivery_method)

    def deliver(self, message: OutboundMessage) -> bool:
        """Deliver a message through the active delivery method.

        Args:
            message: Message to deliver

        Returns:
            True if delivered, False if an error was suppressed

        Raises:
            Exception: Any delivery error, unless raise_delivery_errors is False
        """
        try:
            self.active_method().deliver(message)
        except Exception:
            if self.raise_delivery_errors:
                raise
            logger.exception(
                "Delivery failed, error suppressed",
                extra={
                    "delivery_method": self.delivery_method,
                    "subject": message.subject,
                },
            )
            return False
        return True


# Module-level singleton
_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    """Get the singleton mailer.

    Returns:
        Mailer instance

    Raises:
        RuntimeError: If mailer not initialized
    """
    if _mailer is None:
        msg = "Mailer not initialized. Call initialize_mailer() during app startup."
        raise RuntimeError(msg)
    return _mailer


def initialize_mailer(
    settings: MailerSettings | None = None,
    delivery_settings: DeliverySettings | None = None,
) -> Mailer:
    """Initialize the singleton mailer.

    Call this during application startup.

    Args:
        settings: Host mailer settings (loaded from the environment by default)
        delivery_settings: db delivery settings (loaded from the environment by default)

    Returns:
        Initialized Mailer
    """
    global _mailer
    from mail_recorder.core.settings import get_delivery_settings, get_mailer_settings

    if settings is None:
        settings = get_mailer_settings()
    if delivery_settings is None:
        delivery_settings = get_delivery_settings()

    _mailer = Mailer.from_settings(settings, delivery_settings)
    logger.info(
        "Mailer initialized",
        extra={
            "delivery_method": _mailer.delivery_method,
            "available_methods": _mailer.delivery_methods.list_methods(),
        },
    )
    return _mailer


def reset_mailer() -> None:
    """Drop the singleton mailer (tests and shutdown)."""
    global _mailer
    _mailer = None


__all__ = ["Mailer", "get_mailer", "initialize_mailer", "reset_mailer"]
