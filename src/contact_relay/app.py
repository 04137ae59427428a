"""AWS Lambda entry point for the contact relay.

Configures:
- **structlog** with JSON rendering (production, read by CloudWatch) or
  colored console rendering (development)
- A process-wide ``ContactHandler`` built on cold start and reused on warm
  invocations
- ``lambda_handler``, which maps the raw event to a ``ContactRequest`` and the
  resulting ``ContactResponse`` back to a JSON-serializable dict
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import structlog
from pydantic import ValidationError

from contact_relay.config import Settings, get_settings, load_contact_config
from contact_relay.domain.models import ContactRequest, ContactResponse
from contact_relay.email.client import SesClient, create_ses_client
from contact_relay.handler import ContactHandler

logger = structlog.get_logger()


def configure_logging(production: bool = False) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.

    Args:
        production: Enable production mode if ``True``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        log_level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        log_level = logging.DEBUG

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="contact-relay")


def build_handler(settings: Settings) -> ContactHandler:
    """Create the ``ContactHandler`` and its SES client from *settings*.

    Args:
        settings: Application settings.

    Returns:
        A ready-to-use ``ContactHandler``.
    """
    config = load_contact_config(settings)
    email_client = SesClient(create_ses_client(settings.aws_region))
    return ContactHandler(config=config, email_client=email_client)


@lru_cache
def get_handler() -> ContactHandler:
    """Return the process-wide ``ContactHandler``, building it on first use.

    Logging is configured here as well, so a cold start sets up everything
    exactly once.  Call ``get_handler.cache_clear()`` in tests to reset.
    """
    settings = get_settings()
    configure_logging(production=settings.log_production)
    return build_handler(settings)


def lambda_handler(event: Any, context: Any) -> dict[str, Any]:
    """Lambda entry point.

    Args:
        event: The invocation payload with optional ``subject``, ``message``,
            ``senderEmail``, and ``receiverName`` keys.
        context: The Lambda context object.

    Returns:
        ``{"wasSuccessful": bool, "errorMessage": str}``.
    """
    handler = get_handler()
    structlog.contextvars.bind_contextvars(
        request_id=getattr(context, "aws_request_id", None)
    )
    try:
        response = _handle_event(handler, event, context)
    finally:
        structlog.contextvars.unbind_contextvars("request_id")

    return response.model_dump(by_alias=True)


def _handle_event(handler: ContactHandler, event: Any, context: Any) -> ContactResponse:
    try:
        request = ContactRequest.model_validate(event if isinstance(event, dict) else {})
    except ValidationError as exc:
        # Only field locations are reported; the submitted values may hold message text.
        errors = exc.errors(include_input=False, include_url=False)
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in errors)
        logger.info("contact_request_invalid", errors=errors)
        return ContactResponse.failure(f"invalid request fields: {fields}")
    return handler.handle(request, context)
