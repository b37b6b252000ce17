"""
SES control header utilities.

SES recognizes a few X-SES-* headers inside raw messages. This module reads
their values so the request builder can populate matching SendEmail fields.
The headers themselves are left in place and travel in the raw content.
"""

import logging
from typing import Optional

from ..domain.models import ControlHeaders, OutboundEmail

logger = logging.getLogger(__name__)

CONFIGURATION_SET_HEADER = 'X-SES-CONFIGURATION-SET'
LIST_MANAGEMENT_OPTIONS_HEADER = 'X-SES-LIST-MANAGEMENT-OPTIONS'


def extract_control_headers(email: OutboundEmail) -> ControlHeaders:
    """
    Read SES control headers from a fully rendered message.

    Lookup is case-insensitive and the first occurrence wins when a header
    is repeated. The message is not modified.

    Args:
        email: Outbound message with finalized headers

    Returns:
        ControlHeaders: Header values (None for headers that are absent)

    Example:
        >>> email = OutboundEmail.from_bytes(
        ...     b"X-SES-Configuration-Set: Marketing\\r\\n\\r\\nHello"
        ... )
        >>> extract_control_headers(email).configuration_set
        'Marketing'
    """
    control = ControlHeaders(
        configuration_set=_first_header_value(email, CONFIGURATION_SET_HEADER),
        list_management_options=_first_header_value(email, LIST_MANAGEMENT_OPTIONS_HEADER)
    )

    present = [
        name for name, value in (
            (CONFIGURATION_SET_HEADER, control.configuration_set),
            (LIST_MANAGEMENT_OPTIONS_HEADER, control.list_management_options),
        )
        if value is not None
    ]
    if present:
        logger.info(f"Found SES control headers: {present}")

    return control


def _first_header_value(email: OutboundEmail, name: str) -> Optional[str]:
    # Message.get() is case-insensitive and returns the first occurrence
    value = email.headers.get(name)
    if value is None:
        return None
    return str(value)
