"""Unit tests for mail recorder exceptions."""

from __future__ import annotations

import pytest

from mail_recorder.core.exceptions import (
    DeliveryParamsError,
    InvalidAddressError,
    InvalidFactoryError,
    MailRecorderError,
    MissingFieldError,
    UnknownDeliveryMethodError,
)


class TestExceptionHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize(
        "exc",
        [
            MissingFieldError("from"),
            InvalidAddressError("to", "bad"),
            InvalidFactoryError("FooBar"),
            UnknownDeliveryMethodError("pigeon"),
        ],
    )
    def test_all_inherit_from_base(self, exc) -> None:
        """Test every error is a MailRecorderError."""
        assert isinstance(exc, MailRecorderError)
        assert exc.message == str(exc)

    def test_address_errors_are_delivery_params_errors(self) -> None:
        """Test validation errors share a base and are ValueErrors."""
        assert issubclass(MissingFieldError, DeliveryParamsError)
        assert issubclass(InvalidAddressError, DeliveryParamsError)
        assert issubclass(DeliveryParamsError, ValueError)


class TestMessages:
    """Test exception attributes and messages."""

    def test_missing_field(self) -> None:
        """Test MissingFieldError names the field."""
        exc = MissingFieldError("to")

        assert exc.field == "to"
        assert "'to'" in str(exc)

    def test_invalid_address_with_detail(self) -> None:
        """Test InvalidAddressError uses the attached detail."""
        exc = InvalidAddressError("from", "foo@bar: no dot in domain")

        assert exc.field == "from"
        assert str(exc) == "foo@bar: no dot in domain"

    def test_invalid_address_without_detail(self) -> None:
        """Test InvalidAddressError falls back to a generic message."""
        assert str(InvalidAddressError("to")) == "invalid value in 'to' field"

    def test_invalid_factory_reason(self) -> None:
        """Test InvalidFactoryError includes reference and reason."""
        exc = InvalidFactoryError("FooBar", reason="missing create method")

        assert exc.reference == "FooBar"
        assert exc.reason == "missing create method"
        assert str(exc) == (
            "configured factory 'FooBar' is not a valid record factory (missing create method)"
        )

    def test_unknown_delivery_method_lists_available(self) -> None:
        """Test UnknownDeliveryMethodError lists available methods."""
        exc = UnknownDeliveryMethodError("pigeon", available=["db", "memory"])

        assert exc.name == "pigeon"
        assert "['db', 'memory']" in str(exc)
