"""Base delivery method protocol and abstract class.

Defines the contract that all delivery methods must implement.

Usage:
    class MyMethod(BaseDeliveryMethod):
        @property
        def method_name(self) -> str:
            return "mine"

        def _do_deliver(self, message: OutboundMessage) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
import logging
import time
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from mail_recorder.infra.email.metrics import (
    email_delivery_duration_seconds,
    email_delivery_total,
)

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import OutboundMessage

logger = logging.getLogger(__name__)


@runtime_checkable
class DeliveryMethod(Protocol):
    """Protocol defining the delivery method interface.

    Example:
        def send_with(method: DeliveryMethod, message: OutboundMessage) -> None:
            method.deliver(message)
    """

    def deliver(self, message: OutboundMessage) -> None:
        """Deliver a message, raising on failure.

        Args:
            message: The message to deliver
        """
        ...


class BaseDeliveryMethod(ABC):
    """Abstract base class for delivery methods.

    Provides common functionality for all delivery methods:
    - Timing measurement
    - Logging
    - Metrics

    Errors raised by ``_do_deliver`` are logged and re-raised; deciding
    whether to suppress them is up to the host mailer.
    """

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        """Initialize delivery method with its settings.

        Args:
            settings: Method specific settings
        """
        self._settings: dict[str, Any] = dict(settings or {})

    @property
    @abstractmethod
    def method_name(self) -> str:
        """Get the delivery method name."""
        ...

    @abstractmethod
    def _do_deliver(self, message: OutboundMessage) -> None:
        """Implement the actual delivery logic.

        Args:
            message: The message to deliver
        """
        ...

    def deliver(self, message: OutboundMessage) -> None:
        """Deliver a message with timing, logging and metrics.

        Args:
            message: The message to deliver
        """
        start_time = time.perf_counter()

        try:
            self._do_deliver(message)
        except Exception as e:
            duration = time.perf_counter() - start_time
            email_delivery_total.labels(method=self.method_name, status="failed").inc()
            email_delivery_duration_seconds.labels(method=self.method_name).observe(duration)
            logger.warning(
                f"Delivery failed via {self.method_name}",
                extra={
                    "method": self.method_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "duration_ms": int(duration * 1000),
                },
            )
            raise

        duration = time.perf_counter() - start_time
        email_delivery_total.labels(method=self.method_name, status="success").inc()
        email_delivery_duration_seconds.labels(method=self.method_name).observe(duration)
        logger.info(
            f"Message delivered via {self.method_name}",
            extra={
                "method": self.method_name,
                "subject": message.subject,
                "recipients": len(message.all_recipients),
                "duration_ms": int(duration * 1000),
            },
        )

    @property
    def settings(self) -> dict[str, Any]:
        """Get a copy of the method settings."""
        return dict(self._settings)


__all__ = ["BaseDeliveryMethod", "DeliveryMethod"]
