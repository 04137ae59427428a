"""Centralized, typed configuration using pydantic-settings.

Provides a ``Settings`` class backed by environment variables (and an
optional ``.env`` file for local runs), a cached ``get_settings()`` accessor,
and the parsing that turns the raw sender and directory variables into an
immutable ``ContactConfig``.

Parsing never raises: a missing or malformed sender becomes ``None`` and
malformed directory entries are dropped.  Problems are reported per request
by the handler instead.

IMPORTANT: Apart from the domain models, this module has no imports from the
``contact_relay`` package, to prevent circular imports.
"""

from __future__ import annotations

import sys
from functools import lru_cache

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from contact_relay.domain.models import Email

logger = structlog.get_logger()

VERIFIED_EMAIL_KEY = "verified_SES_email"
RECEIVER_EMAIL_BY_NAME_KEY = "receiver_email_by_name_csv"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and ``.env`` file.

    Variable names are matched case-insensitively, so ``verified_SES_email``
    populates ``verified_ses_email``.  The Lambda runtime sets ``AWS_REGION``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Contact relay ---------------------------------------------------------
    verified_ses_email: str = ""
    receiver_email_by_name_csv: str = ""

    # -- AWS -------------------------------------------------------------------
    aws_region: str = "eu-west-1"

    # -- Logging ---------------------------------------------------------------
    log_production: bool = True


class ContactConfig(BaseModel):
    """Process-wide, read-only configuration for the contact handler.

    ``verified_sender_email`` is ``None`` when the variable was absent or not
    a valid address.  ``receiver_directory`` keeps the order of the CSV (with
    later duplicates overwriting earlier ones in place).
    """

    model_config = ConfigDict(frozen=True)

    verified_sender_email: Email | None = None
    receiver_directory: dict[str, str] = {}


def parse_sender_email(raw: str | None) -> Email | None:
    """Trim *raw* and parse it as an ``Email``.

    Args:
        raw: The raw environment value, or ``None`` if unset.

    Returns:
        The sender ``Email``, or ``None`` when absent or invalid.
    """
    if raw is None:
        return None
    return Email.new_or_none(raw.strip())


def parse_receiver_directory(raw: str | None) -> dict[str, str]:
    """Parse a ``name=email`` CSV into a name-to-email mapping.

    Each comma-separated entry is trimmed and split on ``=``.  Entries that
    do not yield exactly two parts are dropped.  When a name repeats, the
    last entry wins.

    Args:
        raw: The raw environment value, or ``None`` if unset.

    Returns:
        The directory mapping; empty when *raw* is absent or has no valid pairs.

    Example:
        >>> parse_receiver_directory("a=x@y.com, b=z@w.com")
        {'a': 'x@y.com', 'b': 'z@w.com'}
    """
    if raw is None:
        return {}

    directory: dict[str, str] = {}
    for entry in raw.split(","):
        parts = entry.strip().split("=")
        if len(parts) != 2:
            continue
        name, email = parts
        directory[name.strip()] = email.strip()
    return directory


def load_contact_config(settings: Settings) -> ContactConfig:
    """Build the ``ContactConfig`` from loaded settings.

    Empty strings are treated as unset so that a declared-but-blank variable
    behaves like a missing one.

    Args:
        settings: The application settings.

    Returns:
        The immutable contact configuration.
    """
    config = ContactConfig(
        verified_sender_email=parse_sender_email(settings.verified_ses_email or None),
        receiver_directory=parse_receiver_directory(
            settings.receiver_email_by_name_csv or None
        ),
    )
    logger.info(
        "contact_config_loaded",
        has_verified_sender=config.verified_sender_email is not None,
        receiver_names=list(config.receiver_directory),
    )
    return config


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    The ``@lru_cache`` decorator ensures environment variables are parsed
    exactly once per process.  Call ``get_settings.cache_clear()`` in tests
    to reset.

    Returns:
        The application ``Settings``.
    """
    try:
        return Settings()
    except ValidationError as exc:
        logger.error("settings_validation_failed", errors=exc.errors())
        sys.exit(1)
