"""Domain models and errors for the contact relay."""

from contact_relay.domain.errors import ContactRelayError, EmailDeliveryError
from contact_relay.domain.models import (
    ContactRequest,
    ContactResponse,
    Email,
    OutboundEmail,
)

__all__ = [
    "ContactRelayError",
    "ContactRequest",
    "ContactResponse",
    "Email",
    "EmailDeliveryError",
    "OutboundEmail",
]
