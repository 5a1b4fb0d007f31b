"""Email delivery infrastructure.

Outgoing messages are persisted through record factories by the database
delivery method and optionally chained to another delivery method.

Usage:
    from mail_recorder.infra.email import Mailer, message_from_email

    mailer = Mailer()
    mailer.configure("db", factory="memory")
    mailer.deliver(message_from_email(msg))
"""

from __future__ import annotations

from .adapter import DatabaseDelivery, check_delivery_params
from .mailer import Mailer, get_mailer, initialize_mailer, reset_mailer
from .methods import (
    BaseDeliveryMethod,
    ConsoleDeliveryMethod,
    DeliveryMethod,
    DeliveryMethodRegistry,
    FileDeliveryMethod,
    MemoryDeliveryMethod,
)
from .parsing import message_from_email, parse_addresses, parse_message
from .records import (
    InMemoryRecordFactory,
    RecordFactory,
    RecordFactoryRegistry,
    SQLAlchemyRecordFactory,
    StoredEmail,
    create_schema,
)
from .schemas import AddressError, OutboundMessage, RecordFields

__all__ = [
    "AddressError",
    "BaseDeliveryMethod",
    "ConsoleDeliveryMethod",
    "DatabaseDelivery",
    "DeliveryMethod",
    "DeliveryMethodRegistry",
    "FileDeliveryMethod",
    "InMemoryRecordFactory",
    "Mailer",
    "MemoryDeliveryMethod",
    "OutboundMessage",
    "RecordFactory",
    "RecordFactoryRegistry",
    "RecordFields",
    "SQLAlchemyRecordFactory",
    "StoredEmail",
    "check_delivery_params",
    "create_schema",
    "get_mailer",
    "initialize_mailer",
    "message_from_email",
    "parse_addresses",
    "parse_message",
    "reset_mailer",
]
