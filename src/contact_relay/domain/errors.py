"""Domain-specific exception classes for the contact relay."""


class ContactRelayError(Exception):
    """Base class for all domain errors in the contact relay."""


class EmailDeliveryError(ContactRelayError):
    """Raised when the email provider rejects or fails to perform a send.

    Attributes:
        provider_message: The human-readable message reported by the provider.
        error_code: The provider's error code, when one was returned.
    """

    def __init__(self, provider_message: str, error_code: str | None = None) -> None:
        self.provider_message = provider_message
        self.error_code = error_code
        super().__init__(provider_message)
