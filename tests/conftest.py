"""Shared pytest fixtures for the contact relay test suite."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from contact_relay.config import ContactConfig
from contact_relay.domain.models import Email
from contact_relay.email.client import SesClient
from contact_relay.handler import ContactHandler


@pytest.fixture
def sample_config() -> ContactConfig:
    """A valid configuration with a single receiver named bob."""
    return ContactConfig(
        verified_sender_email=Email(address="sender@x.com"),
        receiver_directory={"bob": "bob@y.com"},
    )


@pytest.fixture
def mock_email_client() -> MagicMock:
    """A SesClient stand-in that accepts every message."""
    client = MagicMock(spec=SesClient)
    client.send.return_value = "msg-0001"
    return client


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    """A minimal Lambda context object."""
    return SimpleNamespace(function_name="contact-relay-test", aws_request_id="req-123")


@pytest.fixture
def handler(sample_config: ContactConfig, mock_email_client: MagicMock) -> ContactHandler:
    """A ContactHandler wired to the sample config and mock SES client."""
    return ContactHandler(config=sample_config, email_client=mock_email_client)
