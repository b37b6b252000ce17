"""
Amazon SES v2 mailer.

Turns outbound email messages into SES v2 SendEmail requests (raw content
mode) and writes the SES message id back onto the message.
"""

from .domain.errors import (
    ApiError,
    ConfigurationError,
    DeliveryError,
    DeliveryErrorKind,
    MessageRejectedError,
    SerializationError,
    ThrottlingError,
    TransportError,
)
from .domain.mailer import Mailer
from .domain.models import (
    ControlHeaders,
    DeliveryResult,
    DeliveryStatus,
    Destination,
    MailerSettings,
    OutboundEmail,
    SendEmailRequest,
)

__all__ = [
    'ApiError',
    'ConfigurationError',
    'ControlHeaders',
    'DeliveryError',
    'DeliveryErrorKind',
    'DeliveryResult',
    'DeliveryStatus',
    'Destination',
    'Mailer',
    'MailerSettings',
    'MessageRejectedError',
    'OutboundEmail',
    'SendEmailRequest',
    'SerializationError',
    'ThrottlingError',
    'TransportError',
]
