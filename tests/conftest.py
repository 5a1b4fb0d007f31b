"""Pytest configuration and shared fixtures.

Organization:
    - Message Fixtures: outbound messages in common shapes
    - Registry Fixtures: record factory and delivery method registries
    - Mailer Fixtures: host mailer wired to an in-memory record factory
"""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from mail_recorder.infra.email.mailer import Mailer, reset_mailer
from mail_recorder.infra.email.methods import DeliveryMethodRegistry, MemoryDeliveryMethod
from mail_recorder.infra.email.records import InMemoryRecordFactory, RecordFactoryRegistry
from mail_recorder.infra.email.schemas import OutboundMessage

ENCODED = (
    "From: someone@example.com\r\n"
    "To: foo@example.com\r\n"
    "Subject: hey\r\n"
    "\r\n"
    "Hello\r\n"
)


# ============================================================================
# Message Fixtures
# ============================================================================


@pytest.fixture
def message() -> OutboundMessage:
    """Single sender, single recipient message."""
    return OutboundMessage(
        senders=["someone@example.com"],
        recipients=["foo@example.com"],
        subject="hey",
        encoded=ENCODED,
    )


@pytest.fixture
def make_message():
    """Factory for messages with overridable fields.

    Example:
        def test_something(make_message):
            msg = make_message(recipients=[], cc=["c@example.com"])
    """

    def _make(**overrides) -> OutboundMessage:
        fields = {
            "senders": ["someone@example.com"],
            "recipients": ["foo@example.com"],
            "subject": "hey",
            "encoded": ENCODED,
        }
        fields.update(overrides)
        return OutboundMessage(**fields)

    return _make


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def record_factory() -> MagicMock:
    """Mock record factory recording every create call."""
    factory = MagicMock()
    factory.create.return_value = True
    return factory


@pytest.fixture
def factories(record_factory: MagicMock) -> RecordFactoryRegistry:
    """Record factory registry with the mock registered as "mock"."""
    registry = RecordFactoryRegistry()
    registry.register("mock", record_factory)
    return registry


@pytest.fixture
def deliveries() -> list[OutboundMessage]:
    """Messages captured by the memory delivery method."""
    return []


@pytest.fixture
def methods(deliveries: list[OutboundMessage]) -> DeliveryMethodRegistry:
    """Delivery method registry with a memory method registered as "test"."""
    registry = DeliveryMethodRegistry()
    registry.add_delivery_method(
        "test",
        lambda settings: MemoryDeliveryMethod(settings, deliveries=deliveries),
    )
    return registry


# ============================================================================
# Mailer Fixtures
# ============================================================================


@pytest.fixture
def mailer() -> Mailer:
    """Mailer delivering through the db method into the memory factory."""
    mailer = Mailer(delivery_method="db")
    mailer.configure("db", factory="memory")
    return mailer


@pytest.fixture
def memory_records(mailer: Mailer) -> InMemoryRecordFactory:
    """The in-memory record factory used by the mailer fixture."""
    return mailer.record_factories.resolve("memory")  # type: ignore[return-value]


@pytest.fixture(autouse=True)
def _reset_mailer_singleton():
    """Drop the module-level mailer after each test."""
    yield
    reset_mailer()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after reconfiguring logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
