"""Email domain: Amazon SES client wrapper."""

from contact_relay.email.client import SesClient, create_ses_client

__all__ = [
    "SesClient",
    "create_ses_client",
]
