"""Build outbound messages from standard library email messages.

Addresses are extracted with ``email.utils.getaddresses`` and checked with
email-validator. Addresses that fail validation are kept in place, values
that cannot be parsed at all are dropped, and the first problem of each
field is attached to the message as an ``AddressError``; deciding
whether that blocks delivery is left to the delivery method.

Usage:
    msg = EmailMessage()
    msg["From"] = "someone@example.com"
    msg["To"] = "foo@example.com, bar@example.com"
    msg["Subject"] = "hey"
    msg.set_content("Hello")

    message = message_from_email(msg)
"""

from __future__ import annotations

import email
from email import policy
from email.message import Message
from email.utils import getaddresses
import logging

from email_validator import EmailNotValidError, validate_email

from .schemas import AddressError, OutboundMessage

logger = logging.getLogger(__name__)

ADDRESS_HEADERS = {
    "from": "From",
    "to": "To",
    "cc": "Cc",
    "bcc": "Bcc",
}


def parse_addresses(values: list[str]) -> tuple[list[str], AddressError | None]:
    """Parse raw header values into addresses.

    Args:
        values: Raw header values (a header may appear more than once)

    Returns:
        Tuple of (addresses, first error found or None)
    """
    values = [str(value) for value in values if str(value).strip()]
    addresses: list[str] = []
    error: AddressError | None = None

    for _display_name, address in getaddresses(values):
        if not address:
            if error is None:
                error = AddressError(
                    kind="parse",
                    message=f"could not parse address in {', '.join(values)!r}",
                )
            continue

        try:
            validate_email(address, check_deliverability=False)
        except EmailNotValidError as e:
            if error is None:
                error = AddressError(kind="syntax", message=f"{address}: {e}")

        addresses.append(address)

    if values and not addresses and error is None:
        # groups such as "undisclosed-recipients:;" carry no address
        error = AddressError(
            kind="parse",
            message=f"no address found in {', '.join(values)!r}",
        )

    return addresses, error


def message_from_email(msg: Message) -> OutboundMessage:
    """Convert a standard library email message into an OutboundMessage.

    Args:
        msg: Parsed or composed email message

    Returns:
        OutboundMessage with address errors attached per field
    """
    fields: dict[str, list[str]] = {}
    errors: dict[str, AddressError] = {}

    for field, header in ADDRESS_HEADERS.items():
        addresses, error = parse_addresses(msg.get_all(header, []))
        fields[field] = addresses
        if error is not None:
            errors[field] = error

    if errors:
        logger.debug(
            "Address errors attached to outbound message",
            extra={"fields": sorted(errors)},
        )

    subject = msg.get("Subject")

    return OutboundMessage(
        senders=fields["from"],
        recipients=fields["to"],
        cc=fields["cc"],
        bcc=fields["bcc"] or None,
        subject=str(subject) if subject is not None else None,
        encoded=msg.as_string(),
        address_errors=errors,
    )


def parse_message(raw: str | bytes) -> OutboundMessage:
    """Parse a serialized email into an OutboundMessage.

    Args:
        raw: RFC 5322 message as text or bytes

    Returns:
        OutboundMessage for the parsed message
    """
    if isinstance(raw, bytes):
        msg = email.message_from_bytes(raw, policy=policy.default)
    else:
        msg = email.message_from_string(raw, policy=policy.default)
    return message_from_email(msg)


__all__ = ["ADDRESS_HEADERS", "message_from_email", "parse_addresses", "parse_message"]
