"""Pydantic v2 models for the contact relay domain.

Provides frozen (immutable) models for the validated email value, the
incoming contact-form request, the response returned to the caller, and the
fully rendered outbound message handed to the email provider.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Email(BaseModel):
    """A validated email address.

    The only rule enforced is that the address contains an ``@``.  Use
    ``Email.new_or_none`` to parse untrusted text without raising.
    """

    model_config = ConfigDict(frozen=True)

    address: str

    @field_validator("address")
    @classmethod
    def address_must_contain_at(cls, v: str) -> str:
        """Reject strings without an ``@`` character."""
        if "@" not in v:
            raise ValueError(f"not an email address: {v!r}")
        return v

    @classmethod
    def new_or_none(cls, value: str | None) -> Email | None:
        """Parse *value* into an ``Email``, returning ``None`` if it is not valid.

        Args:
            value: Candidate address text, or ``None``.

        Returns:
            An ``Email`` when *value* contains ``@``, otherwise ``None``.
        """
        if value is None or "@" not in value:
            return None
        return cls(address=value)

    def __str__(self) -> str:
        return self.address


class ContactRequest(BaseModel):
    """A contact-form submission as received from the invocation runtime.

    All fields are optional free text.  Field names follow the JSON payload
    (``senderEmail``, ``receiverName``); snake_case names are accepted too.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    subject: str | None = None
    message: str | None = None
    sender_email: str | None = Field(default=None, alias="senderEmail")
    receiver_name: str | None = Field(default=None, alias="receiverName")


class ContactResponse(BaseModel):
    """Outcome of a single invocation.

    ``error_message`` is empty on success.  Serialize with
    ``model_dump(by_alias=True)`` to get the ``wasSuccessful`` /
    ``errorMessage`` wire format.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    was_successful: bool = Field(alias="wasSuccessful")
    error_message: str = Field(default="", alias="errorMessage")

    @classmethod
    def success(cls) -> ContactResponse:
        return cls(was_successful=True)

    @classmethod
    def failure(cls, error_message: str) -> ContactResponse:
        return cls(was_successful=False, error_message=error_message)


class OutboundEmail(BaseModel):
    """A fully rendered plain-text email ready to be handed to the provider."""

    model_config = ConfigDict(frozen=True)

    sender: Email
    to: Email
    subject: str
    body: str
