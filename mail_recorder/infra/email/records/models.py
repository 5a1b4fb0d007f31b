"""Database models for persisted email.

Models:
- StoredEmail: One row per (sender, recipient) pair of a delivered message
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mail_recorder.core.database.base import Base, IntegerPKMixin, TimestampMixin


class StoredEmail(Base, IntegerPKMixin, TimestampMixin):
    """Email persisted instead of (or before) being sent.

    Example:
        StoredEmail(
            from_address="someone@example.com",
            to_address="foo@example.com",
            subject="hey",
            content="From: someone@example.com\\r\\n...",
        )
    """

    __tablename__ = "stored_emails"

    from_address: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        index=True,
        comment="Sender address",
    )
    to_address: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        index=True,
        comment="Recipient address (empty for Cc/Bcc-only messages)",
    )
    subject: Mapped[str | None] = mapped_column(
        String(998),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Fully encoded message",
    )
    bcc: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Comma-joined BCC addresses",
    )

    def __repr__(self) -> str:
        return f"<StoredEmail(id={self.id}, from={self.from_address}, to={self.to_address})>"


__all__ = ["StoredEmail"]
