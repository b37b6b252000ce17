"""
SendEmail request assembly.

Combines the raw message, resolved addresses and the configuration set into a
SendEmailRequest. This is a pure data transform: nothing is validated or sent,
and the message is left unchanged.
"""

import copy
import logging
from email.errors import MessageError
from typing import Any, Optional

from ..domain.errors import SerializationError
from ..domain.models import (
    RESERVED_PARAM_KEYS,
    ControlHeaders,
    MailerSettings,
    OutboundEmail,
    SendEmailRequest,
)
from .addresses import resolve_destination, resolve_sender
from .headers import extract_control_headers

logger = logging.getLogger(__name__)


def render_raw_message(email: OutboundEmail) -> bytes:
    """
    Serialize the full message (headers + body) to bytes.

    Bcc and Resent-Bcc are left out of a copy of the message, the same way
    smtplib.send_message() does; blind recipients reach SES only through the
    Destination. The original message is not modified.

    Raises:
        SerializationError: If the message cannot be rendered
    """
    try:
        transport_message = copy.copy(email.message)
        del transport_message['Bcc']
        del transport_message['Resent-Bcc']
        return OutboundEmail(message=transport_message).as_bytes()
    except (MessageError, LookupError, TypeError, ValueError) as e:
        logger.error(f"Failed to render message: {e}")
        raise SerializationError(f"Failed to render message: {e}") from e


def resolve_configuration_set(
    control: ControlHeaders,
    settings: MailerSettings
) -> Optional[str]:
    """
    Pick the configuration set for the request.

    Priority: X-SES-CONFIGURATION-SET header > settings default > None.
    A blank header value counts as not set.
    """
    if control.configuration_set and control.configuration_set.strip():
        return control.configuration_set
    return settings.configuration_set_name or None


def build_send_email_request(
    email: OutboundEmail,
    settings: MailerSettings,
    **extra_params: Any
) -> SendEmailRequest:
    """
    Build the SendEmail parameters for a message.

    Args:
        email: Fully rendered outbound message
        settings: Mailer settings (for the default configuration set)
        **extra_params: Additional SendEmail parameters passed through as-is
            (any key except Content, FromEmailAddress, Destination and
            ConfigurationSetName)

    Returns:
        SendEmailRequest: Request ready for the SES integration

    Raises:
        SerializationError: If the message cannot be rendered to bytes
        ValueError: If extra_params sets a field the builder resolves itself
    """
    reserved = sorted(set(extra_params) & RESERVED_PARAM_KEYS)
    if reserved:
        raise ValueError(
            f"SendEmail parameters {', '.join(reserved)} are set by the request builder "
            f"and cannot be passed as extra parameters"
        )

    control = extract_control_headers(email)
    raw = render_raw_message(email)

    request = SendEmailRequest(
        raw=raw,
        from_email_address=resolve_sender(email),
        destination=resolve_destination(email),
        configuration_set_name=resolve_configuration_set(control, settings),
        extra_params=dict(extra_params)
    )

    logger.info(
        f"Built SendEmail request: raw_size={len(raw):,} bytes, "
        f"from_email_address={request.from_email_address}, "
        f"configuration_set={request.configuration_set_name}"
    )
    return request
