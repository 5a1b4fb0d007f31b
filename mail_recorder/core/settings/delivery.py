"""Database delivery method settings.

Environment variables use MAIL_DB_ prefix.
Example: MAIL_DB_FACTORY=sql, MAIL_DB_CHAIN_DELIVERY_METHOD=console
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def always_deliver(_message: Any) -> bool:
    """Default chain filter: every message passes."""
    return True


class DeliverySettings(BaseSettings):
    """Configuration of the database delivery method.

    Settings are read on every delivery and never mutated by it. Hosts
    usually pass them as a mapping when registering the method:

        mailer.configure("db", factory="sql", chain_delivery_method="console")
    """

    factory: str | None = Field(
        default=None,
        description="Registry key of the record factory that persists messages",
    )
    chain_delivery_method: str | None = Field(
        default=None,
        description="Delivery method that also receives persisted messages",
    )
    chain_filter: Callable[[Any], Any] | None = Field(
        default=None,
        description="Predicate deciding whether a message is chained (None = always)",
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_prefix="MAIL_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("factory", "chain_delivery_method", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat blank strings from the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def effective_chain_filter(self) -> Callable[[Any], Any]:
        """Chain filter with the always-true default applied."""
        return self.chain_filter or always_deliver

    @property
    def chaining_enabled(self) -> bool:
        """Check if a chain delivery method is configured."""
        return self.chain_delivery_method is not None


def default_delivery_options() -> dict[str, Any]:
    """Default settings registered with the database delivery method."""
    return {
        "chain_delivery_method": None,
        "chain_filter": None,
    }
