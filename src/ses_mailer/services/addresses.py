"""
Sender and recipient resolution for SendEmail requests.

Envelope overrides (SMTP envelope from/to) take precedence over the visible
From/To headers. Cc and Bcc always come from the headers.
"""

import logging
from typing import Optional

from ..domain.models import Destination, OutboundEmail

logger = logging.getLogger(__name__)


def resolve_sender(email: OutboundEmail) -> Optional[str]:
    """
    Determine the FromEmailAddress for the request.

    Only an explicit envelope-from override is sent. Without one the field is
    left out so SES takes the sender (including its display name) from the
    raw From header.

    Args:
        email: Outbound message

    Returns:
        The envelope-from address verbatim, or None
    """
    if email.envelope_from:
        logger.info(f"Using envelope sender: {email.envelope_from}")
        return email.envelope_from
    return None


def resolve_destination(email: OutboundEmail) -> Destination:
    """
    Determine the request destination.

    To recipients are the envelope-to override when one is set, otherwise the
    addresses of the To header. Cc and Bcc are always read from their headers.
    Empty lists are reported as None so they are left out of the request.

    Args:
        email: Outbound message

    Returns:
        Destination: Resolved recipients (may be empty)

    Example:
        >>> email.envelope_to = 'bounce-test@example.com'
        >>> resolve_destination(email).to_addresses
        ['bounce-test@example.com']
    """
    envelope_to = email.envelope_to_addresses
    if envelope_to:
        logger.info(f"Using envelope recipients: {envelope_to}")
        to_addresses = envelope_to
    else:
        to_addresses = email.to

    destination = Destination(
        to_addresses=to_addresses or None,
        cc_addresses=email.cc or None,
        bcc_addresses=email.bcc or None
    )

    if destination.is_empty:
        logger.warning(
            "No recipients found in headers or envelope; "
            "SES will derive recipients from the raw content"
        )

    return destination
