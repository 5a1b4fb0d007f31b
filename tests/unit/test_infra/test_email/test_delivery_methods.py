"""Unit tests for delivery methods and their registry."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from prometheus_client import REGISTRY

from mail_recorder.core.exceptions import UnknownDeliveryMethodError
from mail_recorder.infra.email.methods import (
    BaseDeliveryMethod,
    ConsoleDeliveryMethod,
    DeliveryMethod,
    DeliveryMethodRegistry,
    FileDeliveryMethod,
    MemoryDeliveryMethod,
)


class FailingMethod(BaseDeliveryMethod):
    @property
    def method_name(self) -> str:
        return "failing"

    def _do_deliver(self, message) -> None:
        raise ConnectionError("relay refused")


class TestBaseDeliveryMethod:
    """Tests for the logging wrapper of BaseDeliveryMethod."""

    def test_errors_are_logged_and_reraised(self, message, caplog) -> None:
        """Test failures propagate after being logged."""
        with caplog.at_level(logging.WARNING, logger="mail_recorder.infra.email.methods.base"):
            with pytest.raises(ConnectionError, match="relay refused"):
                FailingMethod().deliver(message)

        assert "Delivery failed via failing" in caplog.text

    def test_success_is_logged(self, message, caplog) -> None:
        """Test successful deliveries are logged with the method name."""
        with caplog.at_level(logging.INFO, logger="mail_recorder.infra.email.methods.base"):
            MemoryDeliveryMethod().deliver(message)

        record = next(r for r in caplog.records if r.getMessage() == "Message delivered via memory")
        assert record.method == "memory"
        assert record.recipients == 1

    def test_settings_are_copied(self) -> None:
        """Test settings cannot be mutated through the property."""
        method = FileDeliveryMethod({"location": "/tmp/mail"})
        method.settings["location"] = "/elsewhere"

        assert method.settings == {"location": "/tmp/mail"}

    def test_builtins_satisfy_protocol(self) -> None:
        """Test built-in methods implement the DeliveryMethod protocol."""
        assert isinstance(MemoryDeliveryMethod(), DeliveryMethod)
        assert isinstance(ConsoleDeliveryMethod(), DeliveryMethod)


class TestBuiltinMethods:
    """Tests for the memory, console and file methods."""

    def test_memory_appends_same_instance(self, message) -> None:
        """Test the memory method keeps the delivered instance."""
        deliveries = []
        MemoryDeliveryMethod(deliveries=deliveries).deliver(message)

        assert deliveries[0] is message

    def test_console_formats_summary(self, make_message) -> None:
        """Test the console summary includes addresses and subject."""
        msg = make_message(cc=["cc@example.com"], bcc=["a@example.com", "b@example.com"])

        output = ConsoleDeliveryMethod().format_message(msg)

        assert "From: someone@example.com" in output
        assert "Cc: cc@example.com" in output
        assert "Bcc: a@example.com, b@example.com" in output
        assert "Subject: hey" in output

    def test_console_truncates_long_content(self, make_message) -> None:
        """Test content beyond the preview length is summarized."""
        msg = make_message(encoded="x" * 600)

        output = ConsoleDeliveryMethod().format_message(msg)

        assert "... (100 more characters)" in output

    def test_file_writes_encoded_message(self, message, tmp_path) -> None:
        """Test the file method writes the encoded message to its location."""
        method = FileDeliveryMethod({"location": str(tmp_path / "out")})

        method.deliver(message)
        method.deliver(message)

        files = method.list_messages()
        assert len(files) == 2
        assert all(f.read_bytes() == message.encoded.encode("utf-8") for f in files)

    def test_file_keeps_crlf_line_endings(self, make_message, tmp_path) -> None:
        """Test line endings are written without translation."""
        method = FileDeliveryMethod({"location": str(tmp_path)})

        method.deliver(make_message(encoded="A: b\r\n\r\nbody\r\n"))

        assert method.list_messages()[0].read_bytes() == b"A: b\r\n\r\nbody\r\n"

    def test_file_lists_nothing_before_first_delivery(self, tmp_path) -> None:
        """Test a missing output directory lists no messages."""
        method = FileDeliveryMethod({"location": str(tmp_path / "missing")})

        assert method.list_messages() == []


class TestDeliveryMethodRegistry:
    """Tests for DeliveryMethodRegistry."""

    def test_create_passes_effective_settings(self) -> None:
        """Test configured settings are layered over defaults."""
        registry = DeliveryMethodRegistry()
        builder = MagicMock()
        registry.add_delivery_method("custom", builder, {"a": 1, "b": 2})
        registry.configure("custom", b=3)

        registry.create("custom")

        builder.assert_called_once_with({"a": 1, "b": 3})

    def test_replace_settings_keeps_defaults(self) -> None:
        """Test replacing settings drops configured values only."""
        registry = DeliveryMethodRegistry()
        registry.add_delivery_method("custom", MagicMock(), {"a": 1})
        registry.configure("custom", b=2)

        registry.replace_settings("custom", {"c": 3})

        assert registry.settings_for("custom") == {"a": 1, "c": 3}

    def test_re_registering_keeps_configured_settings(self) -> None:
        """Test a new builder keeps settings configured for the name."""
        registry = DeliveryMethodRegistry()
        registry.add_delivery_method("custom", MagicMock())
        registry.configure("custom", location="/tmp/mail")
        replacement = MagicMock()

        registry.add_delivery_method("custom", replacement)
        registry.create("custom")

        replacement.assert_called_once_with({"location": "/tmp/mail"})

    @pytest.mark.parametrize("name", ["unknown", None])
    def test_unknown_method(self, name) -> None:
        """Test unknown names raise UnknownDeliveryMethodError."""
        registry = DeliveryMethodRegistry()
        registry.add_delivery_method("console", ConsoleDeliveryMethod)

        with pytest.raises(UnknownDeliveryMethodError) as exc_info:
            registry.create(name)

        assert exc_info.value.available == ["console"]

    def test_configure_unknown_method(self) -> None:
        """Test configuring an unregistered method fails."""
        with pytest.raises(UnknownDeliveryMethodError):
            DeliveryMethodRegistry().configure("unknown", location="/tmp")

    def test_remove_delivery_method(self) -> None:
        """Test removed methods are no longer available."""
        registry = DeliveryMethodRegistry()
        registry.add_delivery_method("console", ConsoleDeliveryMethod)

        assert registry.remove_delivery_method("console") is True
        assert registry.remove_delivery_method("console") is False
        assert not registry.is_available("console")


class TestDeliveryMetrics:
    """Tests for delivery metrics."""

    @staticmethod
    def sample(name: str, **labels: str) -> float:
        return REGISTRY.get_sample_value(name, labels) or 0.0

    def test_success_and_failure_are_counted(self, message) -> None:
        """Test delivery outcomes increment the delivery counter."""
        ok_before = self.sample("mail_recorder_delivery_total", method="memory", status="success")
        failed_before = self.sample("mail_recorder_delivery_total", method="failing", status="failed")

        MemoryDeliveryMethod().deliver(message)
        with pytest.raises(ConnectionError):
            FailingMethod().deliver(message)

        assert self.sample("mail_recorder_delivery_total", method="memory", status="success") == ok_before + 1
        assert self.sample("mail_recorder_delivery_total", method="failing", status="failed") == failed_before + 1

    def test_persisted_records_are_counted(self, mailer, make_message) -> None:
        """Test each created record increments the persisted counter."""
        before = self.sample("mail_recorder_records_persisted_total", factory="memory")

        mailer.deliver(make_message(recipients=["a@example.com", "b@example.com"]))

        assert self.sample("mail_recorder_records_persisted_total", factory="memory") == before + 2
