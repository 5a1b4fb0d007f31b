"""Console delivery method for development.

Logs messages instead of sending them.
Useful for local development and debugging.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import BaseDeliveryMethod

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import OutboundMessage

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 500


class ConsoleDeliveryMethod(BaseDeliveryMethod):
    """Console delivery method for development.

    Instead of sending messages, this method logs a formatted summary.
    Always succeeds (no real delivery).
    """

    @property
    def method_name(self) -> str:
        return "console"

    def format_message(self, message: OutboundMessage) -> str:
        """Render a human readable summary of the message.

        Args:
            message: Message to render

        Returns:
            Multi-line summary with headers and a content preview
        """
        separator = "=" * 60
        output_lines = [
            "",
            separator,
            "EMAIL (Console Delivery - Development Mode)",
            separator,
            f"From: {', '.join(message.senders)}",
            f"To: {', '.join(message.recipients)}",
        ]

        if message.cc:
            output_lines.append(f"Cc: {', '.join(message.cc)}")
        if message.joined_bcc:
            output_lines.append(f"Bcc: {message.joined_bcc}")

        output_lines.extend([
            f"Subject: {message.subject or ''}",
            separator,
            message.encoded[:PREVIEW_LENGTH],
        ])

        if len(message.encoded) > PREVIEW_LENGTH:
            output_lines.append(
                f"... ({len(message.encoded) - PREVIEW_LENGTH} more characters)"
            )

        output_lines.extend([separator, ""])
        return "\n".join(output_lines)

    def _do_deliver(self, message: OutboundMessage) -> None:
        logger.info(self.format_message(message))


__all__ = ["ConsoleDeliveryMethod"]
