"""Delivery method implementations.

This package contains the delivery methods a message can be chained to:
- Memory: Collect messages in a list (testing)
- Console: Log messages (development)
- File: Write messages to .eml files (testing)

Usage:
    from mail_recorder.infra.email.methods import DeliveryMethodRegistry

    registry = DeliveryMethodRegistry()
    registry.add_delivery_method("console", ConsoleDeliveryMethod)
    registry.create("console").deliver(message)
"""

from .base import BaseDeliveryMethod, DeliveryMethod
from .console import ConsoleDeliveryMethod
from .file import FileDeliveryMethod
from .memory import MemoryDeliveryMethod
from .registry import DeliveryMethodBuilder, DeliveryMethodRegistration, DeliveryMethodRegistry

__all__ = [
    "BaseDeliveryMethod",
    "ConsoleDeliveryMethod",
    "DeliveryMethod",
    "DeliveryMethodBuilder",
    "DeliveryMethodRegistration",
    "DeliveryMethodRegistry",
    "FileDeliveryMethod",
    "MemoryDeliveryMethod",
]
