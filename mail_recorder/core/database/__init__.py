"""Database model foundations."""

from __future__ import annotations

from .base import NAMING_CONVENTION, Base, IntegerPKMixin, TimestampMixin

__all__ = ["NAMING_CONVENTION", "Base", "IntegerPKMixin", "TimestampMixin"]
