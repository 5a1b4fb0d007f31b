"""Email schemas and data models.

Defines the outbound message handed to delivery methods and the record
fields produced for each (sender, recipient) pair.
"""

from __future__ import annotations

from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field

# "from" is a keyword, hence the functional TypedDict syntax
RecordFields = TypedDict(
    "RecordFields",
    {
        "from": str,
        "to": str,
        "subject": str | None,
        "content": str,
        "bcc": str | None,
    },
)


class AddressError(BaseModel):
    """Validation error attached to an address field by the upstream parser.

    Example:
        error = AddressError(kind="syntax", message="The email address is not valid.")
    """

    model_config = ConfigDict(frozen=True)

    kind: str = Field(
        default="syntax",
        description="Error category (syntax, parse)",
    )
    message: str | None = Field(
        default=None,
        description="Human-readable error detail",
    )


class OutboundMessage(BaseModel):
    """An outgoing email as seen by delivery methods.

    Delivery methods only read the message; it is frozen so the same
    instance can be passed on to a chained delivery method unchanged.

    Example:
        message = OutboundMessage(
            senders=["someone@example.com"],
            recipients=["foo@example.com"],
            subject="hey",
            encoded="From: someone@example.com\\r\\n...",
        )
    """

    model_config = ConfigDict(frozen=True)

    senders: list[str] = Field(
        default_factory=list,
        description="Sender addresses (From)",
    )
    recipients: list[str] = Field(
        default_factory=list,
        description="Primary recipients (To)",
    )
    cc: list[str] = Field(
        default_factory=list,
        description="CC recipients",
    )
    bcc: str | list[str] | None = Field(
        default=None,
        description="BCC recipients, a single string or a list",
    )
    subject: str | None = Field(
        default=None,
        description="Email subject line",
    )
    encoded: str = Field(
        default="",
        description="Fully serialized message, exactly as it would be transmitted",
    )
    address_errors: dict[str, AddressError] = Field(
        default_factory=dict,
        description="Parse errors keyed by field name (from, to, cc, bcc)",
    )

    def error_for(self, field: str) -> AddressError | None:
        """Get the parse error attached to an address field, if any."""
        return self.address_errors.get(field)

    @property
    def joined_bcc(self) -> str | None:
        """BCC as stored on records: verbatim string, comma-joined list, or None when empty."""
        if not self.bcc:
            return None
        if isinstance(self.bcc, str):
            return self.bcc
        return ", ".join(self.bcc)

    @property
    def has_cc_or_bcc(self) -> bool:
        """Check if any CC or BCC address is present."""
        if any(address.strip() for address in self.cc):
            return True
        if isinstance(self.bcc, str):
            return bool(self.bcc.strip())
        return any(address.strip() for address in self.bcc or [])

    @property
    def all_recipients(self) -> list[str]:
        """Get all recipients (to, cc, bcc)."""
        bcc = [self.bcc] if isinstance(self.bcc, str) else list(self.bcc or [])
        return list(self.recipients) + list(self.cc) + bcc


__all__ = ["AddressError", "OutboundMessage", "RecordFields"]
