"""Tests for Settings, the sender/directory parsers, and get_settings cache.

Covers: defaults, env-override (including the mixed-case variable name),
directory parsing edge cases, and lru_cache behavior.
"""

from __future__ import annotations

import pytest

from contact_relay.config import (
    ContactConfig,
    Settings,
    get_settings,
    load_contact_config,
    parse_receiver_directory,
    parse_sender_email,
)
from contact_relay.domain.models import Email

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    """Clear get_settings lru_cache before each test."""
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    """Verify Settings defaults and environment overrides."""

    def test_settings_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.delenv("verified_SES_email", raising=False)
        monkeypatch.delenv("receiver_email_by_name_csv", raising=False)

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.verified_ses_email == ""
        assert s.receiver_email_by_name_csv == ""
        assert s.aws_region == "eu-west-1"
        assert s.log_production is True

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("verified_SES_email", " sender@x.com ")
        monkeypatch.setenv("receiver_email_by_name_csv", "bob=bob@y.com")
        monkeypatch.setenv("AWS_REGION", "us-east-1")
        monkeypatch.setenv("LOG_PRODUCTION", "false")

        s = Settings(_env_file=None)  # type: ignore[call-arg]

        assert s.verified_ses_email == " sender@x.com "
        assert s.receiver_email_by_name_csv == "bob=bob@y.com"
        assert s.aws_region == "us-east-1"
        assert s.log_production is False


# ---------------------------------------------------------------------------
# Sender parsing
# ---------------------------------------------------------------------------


class TestParseSenderEmail:
    def test_trims_and_parses(self) -> None:
        assert parse_sender_email("  sender@x.com\n") == Email(address="sender@x.com")

    def test_absent_is_none(self) -> None:
        assert parse_sender_email(None) is None

    def test_invalid_is_none(self) -> None:
        assert parse_sender_email("sender-at-x.com") is None

    def test_blank_is_none(self) -> None:
        assert parse_sender_email("   ") is None


# ---------------------------------------------------------------------------
# Directory parsing
# ---------------------------------------------------------------------------


class TestParseReceiverDirectory:
    def test_parses_pairs_and_trims(self) -> None:
        assert parse_receiver_directory("a=x@y.com, b=z@w.com") == {
            "a": "x@y.com",
            "b": "z@w.com",
        }

    def test_trims_around_equals(self) -> None:
        assert parse_receiver_directory(" alice = alice@example.com ") == {
            "alice": "alice@example.com"
        }

    def test_drops_malformed_pairs(self) -> None:
        assert parse_receiver_directory("bad,  c=d=e") == {}

    def test_keeps_valid_pairs_next_to_malformed(self) -> None:
        assert parse_receiver_directory("bad, c=d=e, bob=bob@y.com,") == {
            "bob": "bob@y.com"
        }

    def test_last_duplicate_wins(self) -> None:
        directory = parse_receiver_directory("bob=old@y.com, alice=a@y.com, bob=new@y.com")
        assert directory == {"bob": "new@y.com", "alice": "a@y.com"}
        assert list(directory) == ["bob", "alice"]

    def test_absent_is_empty(self) -> None:
        assert parse_receiver_directory(None) == {}

    def test_empty_string_is_empty(self) -> None:
        assert parse_receiver_directory("") == {}


# ---------------------------------------------------------------------------
# load_contact_config
# ---------------------------------------------------------------------------


class TestLoadContactConfig:
    def test_builds_config_from_settings(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            verified_ses_email=" sender@x.com ",
            receiver_email_by_name_csv="bob=bob@y.com, broken",
        )

        config = load_contact_config(settings)

        assert config == ContactConfig(
            verified_sender_email=Email(address="sender@x.com"),
            receiver_directory={"bob": "bob@y.com"},
        )

    def test_blank_settings_give_empty_config(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            verified_ses_email="",
            receiver_email_by_name_csv="",
        )

        config = load_contact_config(settings)

        assert config.verified_sender_email is None
        assert config.receiver_directory == {}


# ---------------------------------------------------------------------------
# get_settings cache
# ---------------------------------------------------------------------------


class TestGetSettingsCached:
    def test_get_settings_cached(self) -> None:
        """Calling get_settings() twice returns the exact same object."""
        first = get_settings()
        second = get_settings()

        assert first is second
