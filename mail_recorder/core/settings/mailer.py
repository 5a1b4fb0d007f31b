"""Host mailer settings.

Environment variables use MAILER_ prefix.
Example: MAILER_DELIVERY_METHOD=db, MAILER_RAISE_DELIVERY_ERRORS=false
"""

from __future__ import annotations

from pathlib import Path
from tempfile import gettempdir

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAIL_FILE_DIR = Path(gettempdir()) / "mail_recorder_emails"


class MailerSettings(BaseSettings):
    """Host mail-sending layer configuration.

    Environment variables use MAILER_ prefix.
    Example: MAILER_DELIVERY_METHOD=memory
    """

    delivery_method: str = Field(
        default="db",
        min_length=1,
        description="Delivery method used for outgoing messages",
    )
    raise_delivery_errors: bool = Field(
        default=True,
        description="Propagate delivery errors (False logs and swallows them)",
    )
    file_location: str = Field(
        default=str(DEFAULT_MAIL_FILE_DIR),
        description="Directory the file delivery method writes messages to",
    )

    model_config = SettingsConfigDict(
        env_prefix="MAILER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )
