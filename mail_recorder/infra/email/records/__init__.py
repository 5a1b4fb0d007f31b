"""Record factory implementations.

This package contains the persistence backends for delivered messages:
- Memory: Keep records in a list (development, testing)
- SQLAlchemy: One StoredEmail row per record

Usage:
    from mail_recorder.infra.email.records import RecordFactoryRegistry

    registry = RecordFactoryRegistry()
    factory = registry.resolve("memory")
"""

from .base import RecordFactory
from .database import SQLAlchemyRecordFactory, create_schema
from .memory import InMemoryRecordFactory
from .models import StoredEmail
from .registry import RecordFactoryRegistry

__all__ = [
    "InMemoryRecordFactory",
    "RecordFactory",
    "RecordFactoryRegistry",
    "SQLAlchemyRecordFactory",
    "StoredEmail",
    "create_schema",
]
