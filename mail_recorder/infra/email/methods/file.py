"""File delivery method for testing.

Writes each message, exactly as encoded, to an .eml file in a directory.

Usage:
    method = FileDeliveryMethod({"location": "/tmp/emails"})
    method.deliver(message)  # Writes /tmp/emails/20241202T120000123456_<id>.eml
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any
import uuid

from mail_recorder.core.settings.mailer import DEFAULT_MAIL_FILE_DIR

from .base import BaseDeliveryMethod

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import OutboundMessage

logger = logging.getLogger(__name__)


class FileDeliveryMethod(BaseDeliveryMethod):
    """Writes messages as .eml files.

    File format: {timestamp}_{uuid}.eml

    Settings:
        location: Output directory (created on first delivery)
    """

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        super().__init__(settings)
        self._output_dir = Path(self._settings.get("location") or DEFAULT_MAIL_FILE_DIR)

    @property
    def method_name(self) -> str:
        return "file"

    @property
    def output_dir(self) -> Path:
        """Get the directory messages are written to."""
        return self._output_dir

    def _do_deliver(self, message: OutboundMessage) -> None:
        self._output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%f")
        path = self._output_dir / f"{timestamp}_{uuid.uuid4().hex}.eml"
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(message.encoded)

        logger.debug("Message written to file", extra={"path": str(path)})

    def list_messages(self) -> list[Path]:
        """List written message files, oldest first."""
        if not self._output_dir.exists():
            return []
        return sorted(self._output_dir.glob("*.eml"))


__all__ = ["FileDeliveryMethod"]
