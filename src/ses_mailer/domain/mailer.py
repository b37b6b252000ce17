"""
SES mailer - core delivery logic.

Sends one message per call through SES v2 in raw content mode:
1. Read SES control headers
2. Resolve envelope sender and recipients
3. Build the SendEmail request
4. Call SES (no retries)
5. Write the SES message id back onto the message

deliver() returns a DeliveryResult and never raises DeliveryError; send()
raises it instead.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ..integrations import sesv2
from ..services.request_builder import build_send_email_request
from .errors import DeliveryError
from .models import DeliveryResult, MailerSettings, OutboundEmail, SendEmailRequest

logger = logging.getLogger(__name__)


class Mailer:
    """
    Delivers outbound messages through Amazon SES v2.

    The settings are read-only after construction and the boto3 client is
    thread-safe, so one Mailer can serve concurrent deliveries.
    """

    def __init__(
        self,
        settings: Optional[Union[Mapping[str, Any], MailerSettings]] = None,
        client=None
    ):
        """
        Initialize the mailer.

        Args:
            settings: Flat settings mapping (boto3 client options plus an
                optional 'configuration_set_name') or MailerSettings
            client: Pre-built sesv2 client; created from the settings if None

        Raises:
            ConfigurationError: If the settings mapping has unknown keys
        """
        self._settings = settings if settings is not None else {}

        if isinstance(self._settings, MailerSettings):
            self._mailer_settings = self._settings
        else:
            self._mailer_settings = MailerSettings.from_dict(self._settings)

        self._client = client if client is not None else sesv2.create_client(
            self._mailer_settings.client_options
        )

    @classmethod
    def from_env(cls, client=None) -> 'Mailer':
        """Create a mailer configured from environment variables."""
        return cls(MailerSettings.from_env(), client=client)

    @property
    def settings(self) -> Union[Mapping[str, Any], MailerSettings]:
        """The settings exactly as passed to the constructor."""
        return self._settings

    @property
    def client(self):
        return self._client

    def build_request(self, email: OutboundEmail, **extra_params: Any) -> SendEmailRequest:
        """
        Build the SendEmail request for a message without sending it.

        Raises:
            SerializationError: If the message cannot be rendered
            ValueError: If extra_params sets a builder-owned field
        """
        return build_send_email_request(email, self._mailer_settings, **extra_params)

    def send(self, email: OutboundEmail, **extra_params: Any) -> str:
        """
        Send a message and return the SES message id.

        On success the id is also written onto the message as the
        'ses-message-id' header.

        Args:
            email: Fully rendered outbound message
            **extra_params: Additional SendEmail parameters (e.g. EmailTags)

        Returns:
            str: SES message id

        Raises:
            DeliveryError: On serialization, transport or API failure
        """
        request = self.build_request(email, **extra_params)
        logger.info("Delivery state: built")

        logger.info("Delivery state: sending")
        message_id = sesv2.send_email(self._client, request)
        logger.info("Delivery state: sent")

        email.record_message_id(message_id)
        logger.info(f"Delivery state: succeeded (message_id={message_id})")

        return message_id

    def deliver(self, email: OutboundEmail, **extra_params: Any) -> DeliveryResult:
        """
        Send a message and report the outcome as a DeliveryResult.

        Args:
            email: Fully rendered outbound message
            **extra_params: Additional SendEmail parameters (e.g. EmailTags)

        Returns:
            DeliveryResult with the message id, or the DeliveryError that
            stopped the delivery
        """
        try:
            message_id = self.send(email, **extra_params)
        except DeliveryError as e:
            logger.warning(f"Delivery state: failed ({e.kind.value}: {e.message})")
            return DeliveryResult.failed(e)

        return DeliveryResult.succeeded(message_id)
