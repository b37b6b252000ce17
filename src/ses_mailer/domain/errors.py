"""
Exceptions raised while building and delivering SES messages.

Every failure carries a DeliveryErrorKind plus whatever detail the provider
returned, so callers can decide on retries themselves.
"""

from enum import Enum
from typing import Optional


class DeliveryErrorKind(str, Enum):
    """Failure categories surfaced to callers."""
    SERIALIZATION = 'serialization'
    TRANSPORT = 'transport'
    API = 'api'


# ============================================================================
# Custom Exception Classes
# ============================================================================

class ConfigurationError(Exception):
    """Raised when mailer settings are invalid."""
    pass


class DeliveryError(Exception):
    """
    Base class for every failure on the send path.

    Only subclasses are raised; each one sets its own kind.

    Attributes:
        kind: Failure category
        message: Human-readable detail (provider message when available)
        code: Provider error code (e.g. "MessageRejected"), if any
    """

    kind: Optional[DeliveryErrorKind] = None

    def __init__(self, message: str, code: Optional[str] = None):
        if self.kind is None:
            raise TypeError(f"{type(self).__name__} has no kind; raise one of its subclasses")
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, code={self.code}, message={self.message!r})"


class SerializationError(DeliveryError):
    """Raised when the message cannot be rendered to raw bytes."""
    kind = DeliveryErrorKind.SERIALIZATION


class TransportError(DeliveryError):
    """Raised when SES cannot be reached (connection, timeout, credentials)."""
    kind = DeliveryErrorKind.TRANSPORT


class ApiError(DeliveryError):
    """Raised when SES rejects the SendEmail call."""
    kind = DeliveryErrorKind.API


class ThrottlingError(ApiError):
    """Raised when SES throttles the request or a sending quota is exceeded."""
    pass


class MessageRejectedError(ApiError):
    """Raised when SES refuses the message itself (content or sender identity)."""
    pass
