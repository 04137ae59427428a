"""Contact-form handler: validation, receiver resolution, and relay via SES.

``ContactHandler.handle`` never raises for expected failures.  Configuration
problems, missing request fields, and provider rejections are all returned
as a failed ``ContactResponse`` with a human-readable message.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

import structlog

from contact_relay.config import (
    RECEIVER_EMAIL_BY_NAME_KEY,
    VERIFIED_EMAIL_KEY,
    ContactConfig,
)
from contact_relay.domain.errors import EmailDeliveryError
from contact_relay.domain.models import (
    ContactRequest,
    ContactResponse,
    Email,
    OutboundEmail,
)
from contact_relay.email.client import SesClient

logger = structlog.get_logger()


class InvocationContext(Protocol):
    """The part of the Lambda context object the handler relies on."""

    function_name: str


def normalize_field(value: str | None) -> str | None:
    """Trim *value*, mapping ``None`` and blank strings to ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def lookup_receiver_email(
    receiver_name: str | None, directory: Mapping[str, str]
) -> str | None:
    """Return the raw directory entry for *receiver_name*, if any."""
    if receiver_name is None:
        return None
    return directory.get(receiver_name)


def resolve_receiver_email(
    receiver_name: str | None, directory: Mapping[str, str]
) -> Email | None:
    """Look up *receiver_name* and validate the result as an ``Email``."""
    return Email.new_or_none(lookup_receiver_email(receiver_name, directory))


def render_subject(receiver_name: str, subject: str) -> str:
    return f"{receiver_name} contact msg: {subject}"


def render_body(sender_email: str | None, message: str) -> str:
    # The sender is optional: an absent value is rendered literally as "None".
    return f"sender: {sender_email}\n\nmessage: {message}"


class ContactHandler:
    """Relays contact-form submissions to a receiver from a static directory.

    Both collaborators are built once per process and only read afterwards.

    Args:
        config: Sender address and receiver directory.
        email_client: The SES wrapper used for the single outbound send.
    """

    def __init__(self, config: ContactConfig, email_client: SesClient) -> None:
        self._config = config
        self._email_client = email_client

    @property
    def config(self) -> ContactConfig:
        return self._config

    def handle(self, request: ContactRequest, context: InvocationContext) -> ContactResponse:
        """Validate *request*, resolve the receiver, and send the email.

        Configuration errors take precedence over request errors, so a
        misconfigured deployment never attempts a send.

        Args:
            request: The contact-form submission.
            context: The invocation context; its ``function_name`` is used
                in configuration error messages.

        Returns:
            A successful response once SES accepted the message, otherwise a
            failed response describing every problem found.
        """
        subject = normalize_field(request.subject)
        message = normalize_field(request.message)
        sender_email = normalize_field(request.sender_email)
        receiver_name = normalize_field(request.receiver_name)
        directory = self._config.receiver_directory
        receiver_email = resolve_receiver_email(receiver_name, directory)

        verified_sender = self._config.verified_sender_email
        if verified_sender is None or not directory:
            return self._config_error_response(context)

        if subject is None or message is None or receiver_name is None or receiver_email is None:
            return self._parameter_error_response(
                subject, message, receiver_name, receiver_email
            )

        outbound = OutboundEmail(
            sender=verified_sender,
            to=receiver_email,
            subject=render_subject(receiver_name, subject),
            body=render_body(sender_email, message),
        )
        try:
            message_id = self._email_client.send(outbound)
        except EmailDeliveryError as exc:
            logger.error(
                "contact_email_delivery_failed",
                receiver_name=receiver_name,
                error_code=exc.error_code,
                error=exc.provider_message,
            )
            return ContactResponse.failure(
                f"failed to send email because: {exc.provider_message}"
            )

        logger.info(
            "contact_email_sent",
            receiver_name=receiver_name,
            message_id=message_id,
        )
        return ContactResponse.success()

    def _config_error_response(self, context: InvocationContext) -> ContactResponse:
        errors: list[str] = []
        if self._config.verified_sender_email is None:
            errors.append(f"No verified email found for key {VERIFIED_EMAIL_KEY}")
        if not self._config.receiver_directory:
            errors.append(
                f"No receiver email and name found for key {RECEIVER_EMAIL_BY_NAME_KEY}"
            )

        logger.warning(
            "contact_config_error",
            function_name=context.function_name,
            problems=errors,
        )
        return ContactResponse.failure(
            f"AWS LAMBDA {context.function_name} misconfigured. {', '.join(errors)}"
        )

    def _parameter_error_response(
        self,
        subject: str | None,
        message: str | None,
        receiver_name: str | None,
        receiver_email: Email | None,
    ) -> ContactResponse:
        errors: list[str] = []
        if subject is None:
            errors.append("no subject provided")
        if message is None:
            errors.append("no message provided")
        if receiver_name is None:
            errors.append("no receiver specified (probably a config issue)")
        elif receiver_email is None:
            known = ", ".join(self._config.receiver_directory)
            errors.append(
                f"no receiver email found for name {receiver_name}. "
                f"Known receiver are {known}."
            )

        logger.info("contact_parameter_error", problems=errors)
        if len(errors) == 1:
            return ContactResponse.failure(errors[0])
        return ContactResponse.failure(f"problems: {', '.join(errors)}")
