"""In-memory record factory for development and testing."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mail_recorder.infra.email.schemas import RecordFields

logger = logging.getLogger(__name__)


class InMemoryRecordFactory:
    """Keeps created records in a list.

    Example:
        factory = InMemoryRecordFactory()
        factory.create({"from": "a@example.com", "to": "b@example.com", ...})
        assert len(factory.records) == 1
    """

    def __init__(self) -> None:
        self._records: list[RecordFields] = []
        self._lock = threading.Lock()

    def create(self, fields: RecordFields) -> RecordFields:
        record = dict(fields)
        with self._lock:
            self._records.append(record)  # type: ignore[arg-type]
        logger.debug(
            "Stored email record in memory",
            extra={"from": record["from"], "to": record["to"]},
        )
        return record  # type: ignore[return-value]

    @property
    def records(self) -> list[RecordFields]:
        """Get a snapshot of the stored records."""
        with self._lock:
            return list(self._records)

    def clear(self) -> int:
        """Remove all stored records.

        Returns:
            Number of records removed
        """
        with self._lock:
            count = len(self._records)
            self._records.clear()
        return count


__all__ = ["InMemoryRecordFactory"]
