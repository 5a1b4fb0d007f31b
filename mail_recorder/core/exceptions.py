"""Custom exceptions for mail recording.

Provides domain-specific exceptions for delivery validation, record factory
resolution and delivery method lookup.
"""

from __future__ import annotations


class MailRecorderError(Exception):
    """Base exception for mail recorder errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DeliveryParamsError(MailRecorderError, ValueError):
    """Raised when a message cannot be delivered as addressed."""

    def __init__(self, message: str, *, field: str) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(DeliveryParamsError):
    """Raised when a required address field is absent or empty."""

    def __init__(self, field: str) -> None:
        super().__init__(
            f"An address is required in the '{field}' field to deliver this message",
            field=field,
        )


class InvalidAddressError(DeliveryParamsError):
    """Raised when an address field failed upstream syntax validation."""

    def __init__(self, field: str, detail: str | None = None) -> None:
        self.detail = detail or f"invalid value in '{field}' field"
        super().__init__(self.detail, field=field)


class InvalidFactoryError(MailRecorderError, ValueError):
    """Raised when the configured record factory cannot be used."""

    def __init__(self, reference: str | None, *, reason: str | None = None) -> None:
        self.reference = reference
        self.reason = reason
        message = f"configured factory '{reference}' is not a valid record factory"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownDeliveryMethodError(MailRecorderError, LookupError):
    """Raised when a delivery method name is not registered."""

    def __init__(self, name: str | None, *, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        super().__init__(
            f"Unknown delivery method: {name}. Available: {self.available}",
        )


__all__ = [
    "DeliveryParamsError",
    "InvalidAddressError",
    "InvalidFactoryError",
    "MailRecorderError",
    "MissingFieldError",
    "UnknownDeliveryMethodError",
]
