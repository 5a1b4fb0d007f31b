"""SQLAlchemy record factory.

Persists each record as a StoredEmail row, one session and commit per
record so rows created before a failing pair stay committed.

Usage:
    engine = create_engine("postgresql+psycopg://...")
    create_schema(engine)
    factory = SQLAlchemyRecordFactory(sessionmaker(engine, expire_on_commit=False))
    registry.register("sql", factory)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from mail_recorder.core.database.base import Base

from .models import StoredEmail

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session, sessionmaker

    from mail_recorder.infra.email.schemas import RecordFields

logger = logging.getLogger(__name__)


def create_schema(engine: Engine) -> None:
    """Create the stored email table if it does not exist."""
    Base.metadata.create_all(engine, tables=[StoredEmail.__table__])


class SQLAlchemyRecordFactory:
    """Record factory backed by a SQLAlchemy session factory.

    Sessions are created per call, so the factory is safe to share
    between threads as long as the engine is.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def create(self, fields: RecordFields) -> StoredEmail:
        record = StoredEmail(
            from_address=fields["from"],
            to_address=fields["to"],
            subject=fields.get("subject"),
            content=fields["content"],
            bcc=fields.get("bcc"),
        )
        with self._session_factory() as session:
            session.add(record)
            session.commit()
            session.refresh(record)

        logger.debug(
            "Stored email record",
            extra={"record_id": record.id, "to": record.to_address},
        )
        return record

    def list_records(self, *, to_address: str | None = None) -> list[StoredEmail]:
        """List stored records in insertion order.

        Args:
            to_address: Only return records for this recipient

        Returns:
            List of StoredEmail rows
        """
        stmt = select(StoredEmail).order_by(StoredEmail.id)
        if to_address is not None:
            stmt = stmt.where(StoredEmail.to_address == to_address)
        with self._session_factory() as session:
            return list(session.scalars(stmt).all())


__all__ = ["SQLAlchemyRecordFactory", "create_schema"]
