"""In-memory delivery method for testing.

Appends delivered messages to a shared list instead of sending them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .base import BaseDeliveryMethod

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import OutboundMessage


class MemoryDeliveryMethod(BaseDeliveryMethod):
    """Collects delivered messages.

    Example:
        deliveries: list[OutboundMessage] = []
        method = MemoryDeliveryMethod(deliveries=deliveries)
        method.deliver(message)
        assert deliveries == [message]
    """

    def __init__(
        self,
        settings: Mapping[str, Any] | None = None,
        *,
        deliveries: list[OutboundMessage] | None = None,
    ) -> None:
        super().__init__(settings)
        self.deliveries = deliveries if deliveries is not None else []

    @property
    def method_name(self) -> str:
        return "memory"

    def _do_deliver(self, message: OutboundMessage) -> None:
        self.deliveries.append(message)


__all__ = ["MemoryDeliveryMethod"]
