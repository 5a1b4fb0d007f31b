"""Database delivery method.

Persists every outgoing message through a record factory, one record per
(sender, recipient) pair, and optionally hands the same message to a
chained delivery method.

Delivery steps, each a precondition for the next:
    1. Validate sender and recipient presence and address errors
    2. Resolve the configured record factory
    3. Create one record per sender (outer) and recipient (inner)
    4. Chain to the secondary delivery method if the chain filter passes

Usage:
    factories = RecordFactoryRegistry()
    methods = DeliveryMethodRegistry()
    methods.add_delivery_method("console", ConsoleDeliveryMethod)

    delivery = DatabaseDelivery.from_settings(
        {"factory": "memory", "chain_delivery_method": "console"},
        factories=factories,
        methods=methods,
    )
    delivery.deliver(message)
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any

from mail_recorder.core.exceptions import InvalidAddressError, MissingFieldError
from mail_recorder.core.settings.delivery import DeliverySettings
from mail_recorder.infra.email.metrics import (
    email_chained_total,
    email_records_persisted_total,
)
from mail_recorder.infra.email.methods.base import BaseDeliveryMethod

if TYPE_CHECKING:
    from mail_recorder.infra.email.methods.base import DeliveryMethod
    from mail_recorder.infra.email.methods.registry import DeliveryMethodRegistry
    from mail_recorder.infra.email.records.base import RecordFactory
    from mail_recorder.infra.email.records.registry import RecordFactoryRegistry
    from mail_recorder.infra.email.schemas import OutboundMessage, RecordFields

logger = logging.getLogger(__name__)

DB_METHOD_NAME = "db"
VALIDATED_FIELDS = ("from", "to")


def _present(addresses: list[str]) -> list[str]:
    return [address for address in addresses if address.strip()]


def _raise_attached_error(message: OutboundMessage, field: str) -> None:
    error = message.error_for(field)
    if error is not None:
        raise InvalidAddressError(field, error.message)


def check_delivery_params(message: OutboundMessage) -> list[str]:
    """Validate the envelope of a message.

    A message needs a sender and a destination. Messages addressed only
    through Cc or Bcc are accepted with a single empty recipient. Blank
    entries are dropped. A field left empty because its header could not
    be parsed is reported as invalid rather than missing.

    Args:
        message: Message to validate

    Returns:
        Recipients to fan out to

    Raises:
        MissingFieldError: If there is no sender, or no recipient at all
        InvalidAddressError: If the from or to field carries a parse error
    """
    if not _present(message.senders):
        _raise_attached_error(message, "from")
        raise MissingFieldError("from")

    recipients = _present(message.recipients)
    if not recipients:
        _raise_attached_error(message, "to")
        if not message.has_cc_or_bcc:
            raise MissingFieldError("to")
        recipients = [""]

    for field in VALIDATED_FIELDS:
        _raise_attached_error(message, field)

    return recipients


class DatabaseDelivery(BaseDeliveryMethod):
    """Delivery method persisting messages through a record factory.

    The record factory is resolved on every delivery so configuration
    errors surface on the delivery that hits them. The chained method is
    resolved once, when the delivery method is built.

    Example:
        delivery = DatabaseDelivery(
            DeliverySettings(factory="memory"),
            factories=RecordFactoryRegistry(),
        )
        delivery.deliver(message)
    """

    def __init__(
        self,
        settings: DeliverySettings,
        *,
        factories: RecordFactoryRegistry,
        chain: DeliveryMethod | None = None,
    ) -> None:
        """Initialize the database delivery method.

        Args:
            settings: Factory reference, chain method name and chain filter
            factories: Registry the factory reference is resolved in
            chain: Secondary delivery method; chaining is off without it
        """
        super().__init__(settings.model_dump())
        self._delivery_settings = settings
        self._factories = factories
        self._chain = chain

    @classmethod
    def from_settings(
        cls,
        settings: DeliverySettings | Mapping[str, Any],
        *,
        factories: RecordFactoryRegistry,
        methods: DeliveryMethodRegistry,
    ) -> DatabaseDelivery:
        """Build the delivery method and its chain target from settings.

        Args:
            settings: DeliverySettings or a mapping of its fields
            factories: Record factory registry
            methods: Registry the chain method is created from

        Returns:
            Configured DatabaseDelivery

        Raises:
            UnknownDeliveryMethodError: If the chain method is not registered
            ValueError: If the chain method is the db method itself
        """
        if not isinstance(settings, DeliverySettings):
            # unset keys fall back to the environment
            settings = DeliverySettings(
                **{key: value for key, value in settings.items() if value is not None},
            )

        chain = None
        if settings.chaining_enabled:
            if settings.chain_delivery_method == DB_METHOD_NAME:
                msg = f"'{DB_METHOD_NAME}' delivery cannot chain to itself"
                raise ValueError(msg)
            chain = methods.create(settings.chain_delivery_method)

        return cls(settings, factories=factories, chain=chain)

    @property
    def method_name(self) -> str:
        return DB_METHOD_NAME

    @property
    def delivery_settings(self) -> DeliverySettings:
        """Get the delivery settings."""
        return self._delivery_settings

    @property
    def chain(self) -> DeliveryMethod | None:
        """Get the chained delivery method, if any."""
        return self._chain

    def _do_deliver(self, message: OutboundMessage) -> None:
        recipients = check_delivery_params(message)
        factory = self._factories.resolve(self._delivery_settings.factory)

        count = self.persist(message, factory, recipients)
        logger.debug(
            "Persisted message records",
            extra={"factory": self._delivery_settings.factory, "records": count},
        )

        self.chain_delivery(message)

    def persist(
        self,
        message: OutboundMessage,
        factory: RecordFactory,
        recipients: list[str],
    ) -> int:
        """Create one record per sender and recipient.

        Records created before a failing pair stay persisted; the error
        propagates unchanged.
        Blank senders are skipped.

        Args:
            message: Validated message
            factory: Resolved record factory
            recipients: Recipients returned by check_delivery_params

        Returns:
            Number of records created
        """
        count = 0
        bcc = message.joined_bcc
        for sender in _present(message.senders):
            for recipient in recipients:
                fields: RecordFields = {
                    "from": sender,
                    "to": recipient,
                    "subject": message.subject,
                    "content": message.encoded,
                    "bcc": bcc,
                }
                factory.create(fields)
                email_records_persisted_total.labels(
                    factory=self._delivery_settings.factory,
                ).inc()
                count += 1
        return count

    def chain_delivery(self, message: OutboundMessage) -> bool:
        """Hand the message to the chained method if the filter passes.

        Args:
            message: The message that was just persisted

        Returns:
            True if the message was chained
        """
        if self._chain is None:
            return False

        if not self._delivery_settings.effective_chain_filter(message):
            logger.debug(
                "Chain filter rejected message",
                extra={"chain_delivery_method": self._delivery_settings.chain_delivery_method},
            )
            return False

        self._chain.deliver(message)
        email_chained_total.labels(
            method=self._delivery_settings.chain_delivery_method or "unknown",
        ).inc()
        return True


__all__ = ["DB_METHOD_NAME", "DatabaseDelivery", "check_delivery_params"]
