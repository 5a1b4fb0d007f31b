"""Record factory protocol.

A record factory turns the fields of one (sender, recipient) pair into a
stored record. Anything with a ``create(fields)`` method qualifies:

    class MyFactory:
        def create(self, fields: RecordFields) -> MyRecord:
            ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import RecordFields


@runtime_checkable
class RecordFactory(Protocol):
    """Protocol defining the persistence backend interface.

    ``create`` must be safe to call from concurrent deliveries, or must
    serialize internally. Errors it raises propagate to the caller of
    the delivery unchanged.
    """

    def create(self, fields: RecordFields) -> Any:
        """Persist one record.

        Args:
            fields: Mapping with from, to, subject, content and bcc

        Returns:
            The created record (backend specific)
        """
        ...


__all__ = ["RecordFactory"]
