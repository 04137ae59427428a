"""Amazon SES client wrapper for sending plain-text emails.

Provides the ``SesClient`` class that turns an ``OutboundEmail`` into an SES
``SendEmail`` call and translates botocore failures into
``EmailDeliveryError`` so callers only deal with one exception type.
"""

from __future__ import annotations

from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from contact_relay.domain.errors import EmailDeliveryError
from contact_relay.domain.models import OutboundEmail

logger = structlog.get_logger()

DEFAULT_CHARSET = "UTF-8"


def create_ses_client(region: str) -> Any:
    """Create a boto3 SES client for *region*.

    Args:
        region: The AWS region the sender address is verified in.

    Returns:
        A low-level boto3 ``ses`` client.
    """
    return boto3.client("ses", region_name=region)


class SesClient:
    """Wrapper around the boto3 SES client.

    No network calls are made by this class directly -- the wrapped client
    handles transport, which keeps it easy to replace with a mock in tests.

    Args:
        client: A boto3 ``ses`` client.
        charset: Character set declared for both subject and body.
    """

    def __init__(self, client: Any, charset: str = DEFAULT_CHARSET) -> None:
        self._client = client
        self._charset = charset

    def send(self, outbound: OutboundEmail) -> str:
        """Send *outbound* as a single-recipient plain-text email.

        Args:
            outbound: The rendered email to send.

        Returns:
            The SES ``MessageId`` of the accepted message.

        Raises:
            EmailDeliveryError: If SES rejects the request or the call fails
                before reaching SES (missing credentials, network errors).
        """
        try:
            result: dict[str, Any] = self._client.send_email(
                Source=str(outbound.sender),
                Destination={"ToAddresses": [str(outbound.to)]},
                Message={
                    "Subject": {"Data": outbound.subject, "Charset": self._charset},
                    "Body": {
                        "Text": {"Data": outbound.body, "Charset": self._charset},
                    },
                },
            )
        except ClientError as exc:
            error = exc.response.get("Error", {})
            raise EmailDeliveryError(
                error.get("Message") or str(exc),
                error_code=error.get("Code"),
            ) from exc
        except BotoCoreError as exc:
            raise EmailDeliveryError(str(exc)) from exc

        message_id: str = result.get("MessageId", "")
        logger.debug("ses_send_email_accepted", message_id=message_id)
        return message_id
