"""
Data models for the SES mailer domain.

These type-safe data structures define clear contracts between the header
extractor, address resolver, request builder and the SES integration.
"""

import os
from dataclasses import dataclass, field
from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import getaddresses
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .errors import ConfigurationError, DeliveryError, DeliveryErrorKind

# Header written back onto a message after SES accepts it
SES_MESSAGE_ID_HEADER = 'ses-message-id'

# SendEmail parameters owned by the request builder
RESERVED_PARAM_KEYS = frozenset({
    'Content',
    'FromEmailAddress',
    'Destination',
    'ConfigurationSetName',
})

# Keyword arguments accepted by boto3.client() that may appear in settings
CLIENT_OPTION_KEYS = frozenset({
    'region_name',
    'endpoint_url',
    'aws_access_key_id',
    'aws_secret_access_key',
    'aws_session_token',
    'verify',
    'use_ssl',
    'api_version',
    'config',
})


@dataclass(frozen=True)
class MailerSettings:
    """
    Mailer-level configuration.

    Attributes:
        client_options: Keyword arguments for boto3.client('sesv2', ...)
        configuration_set_name: Default configuration set, used when a
            message has no X-SES-CONFIGURATION-SET header
    """
    client_options: Dict[str, Any] = field(default_factory=dict)
    configuration_set_name: Optional[str] = None

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> 'MailerSettings':
        """
        Split a flat settings mapping into client options and mailer options.

        Raises:
            ConfigurationError: If the mapping contains keys that are neither
                boto3 client options nor 'configuration_set_name'
        """
        options = dict(settings)
        configuration_set_name = options.pop('configuration_set_name', None)

        unknown = sorted(set(options) - CLIENT_OPTION_KEYS)
        if unknown:
            raise ConfigurationError(
                f"Unknown mailer settings: {', '.join(unknown)}. "
                f"Expected 'configuration_set_name' or one of: "
                f"{', '.join(sorted(CLIENT_OPTION_KEYS))}"
            )

        return cls(client_options=options, configuration_set_name=configuration_set_name)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MailerSettings':
        """
        Build settings from environment variables.

        Reads AWS_REGION (falling back to AWS_DEFAULT_REGION, then us-west-2),
        SES_ENDPOINT_URL and SES_CONFIGURATION_SET_NAME.
        """
        environ = os.environ if environ is None else environ

        options: Dict[str, Any] = {
            'region_name': environ.get('AWS_REGION', environ.get('AWS_DEFAULT_REGION', 'us-west-2'))
        }
        endpoint_url = environ.get('SES_ENDPOINT_URL')
        if endpoint_url:
            options['endpoint_url'] = endpoint_url

        return cls(
            client_options=options,
            configuration_set_name=environ.get('SES_CONFIGURATION_SET_NAME') or None
        )


@dataclass
class OutboundEmail:
    """
    An outbound message plus its optional SMTP envelope overrides.

    Attributes:
        message: The rendered message (headers and body are final)
        envelope_from: Transport-level sender, distinct from the From header
        envelope_to: Transport-level recipient(s), replaces the To header
            recipients when set
    """
    message: Message
    envelope_from: Optional[str] = None
    envelope_to: Optional[Union[str, Sequence[str]]] = None

    @classmethod
    def from_bytes(
        cls,
        raw: bytes,
        envelope_from: Optional[str] = None,
        envelope_to: Optional[Union[str, Sequence[str]]] = None
    ) -> 'OutboundEmail':
        """Parse raw RFC 822 bytes into an OutboundEmail."""
        message = BytesParser(policy=policy.default).parsebytes(raw)
        return cls(message=message, envelope_from=envelope_from, envelope_to=envelope_to)

    @property
    def headers(self) -> Message:
        """Ordered, case-insensitive header access."""
        return self.message

    @property
    def from_address(self) -> Optional[str]:
        addresses = self._addresses('From')
        return addresses[0] if addresses else None

    @property
    def to(self) -> List[str]:
        return self._addresses('To')

    @property
    def cc(self) -> List[str]:
        return self._addresses('Cc')

    @property
    def bcc(self) -> List[str]:
        return self._addresses('Bcc')

    @property
    def envelope_to_addresses(self) -> List[str]:
        """Envelope recipients as a list (empty when no override is set)."""
        if not self.envelope_to:
            return []
        if isinstance(self.envelope_to, str):
            return [self.envelope_to]
        return list(self.envelope_to)

    @property
    def ses_message_id(self) -> Optional[str]:
        """SES message id written back after a successful delivery."""
        value = self.message.get(SES_MESSAGE_ID_HEADER)
        return str(value) if value is not None else None

    def record_message_id(self, message_id: str) -> None:
        """Attach the SES message id to the message, replacing any earlier one."""
        del self.message[SES_MESSAGE_ID_HEADER]
        self.message[SES_MESSAGE_ID_HEADER] = message_id

    def as_bytes(self) -> bytes:
        """Render headers and body with CRLF line endings."""
        return self.message.as_bytes(policy=self.message.policy.clone(linesep='\r\n'))

    def _addresses(self, header_name: str) -> List[str]:
        # All occurrences of the header, bare addresses only (display names dropped)
        values = self.message.get_all(header_name) or []
        return [address for _, address in getaddresses([str(v) for v in values]) if address]


@dataclass(frozen=True)
class ControlHeaders:
    """
    Values of the SES control headers found on a message.

    None means the header is absent; an empty string means it is present
    but empty.
    """
    configuration_set: Optional[str] = None
    list_management_options: Optional[str] = None


@dataclass(frozen=True)
class Destination:
    """
    SendEmail destination.

    Each list is either None or non-empty; only non-empty lists are sent.
    """
    to_addresses: Optional[List[str]] = None
    cc_addresses: Optional[List[str]] = None
    bcc_addresses: Optional[List[str]] = None

    def to_params(self) -> Dict[str, List[str]]:
        """Convert to the SESv2 Destination shape, omitting empty lists."""
        params = {}
        if self.to_addresses:
            params['ToAddresses'] = list(self.to_addresses)
        if self.cc_addresses:
            params['CcAddresses'] = list(self.cc_addresses)
        if self.bcc_addresses:
            params['BccAddresses'] = list(self.bcc_addresses)
        return params

    @property
    def is_empty(self) -> bool:
        return not (self.to_addresses or self.cc_addresses or self.bcc_addresses)


@dataclass(frozen=True)
class SendEmailRequest:
    """
    Parameters for a single SESv2 SendEmail call in raw content mode.

    Attributes:
        raw: Serialized message (headers + body)
        from_email_address: Envelope sender; None lets SES use the From header
        destination: Resolved recipients
        configuration_set_name: Configuration set; None omits the field
        extra_params: Additional SendEmail parameters passed through verbatim
            (e.g. EmailTags); builder-owned keys are ignored
    """
    raw: bytes
    from_email_address: Optional[str] = None
    destination: Destination = field(default_factory=Destination)
    configuration_set_name: Optional[str] = None
    extra_params: Dict[str, Any] = field(default_factory=dict)

    def to_params(self) -> Dict[str, Any]:
        """
        Convert to boto3 keyword arguments for sesv2.send_email().

        Optional fields that were not determined are left out entirely,
        never sent as None.
        """
        params = {
            key: value for key, value in self.extra_params.items()
            if key not in RESERVED_PARAM_KEYS
        }
        params['Content'] = {'Raw': {'Data': self.raw}}

        if self.from_email_address is not None:
            params['FromEmailAddress'] = self.from_email_address

        destination = self.destination.to_params()
        if destination:
            params['Destination'] = destination

        if self.configuration_set_name is not None:
            params['ConfigurationSetName'] = self.configuration_set_name

        return params


class DeliveryStatus(str, Enum):
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass(frozen=True)
class DeliveryResult:
    """
    Result of a single delivery.

    This explicit result type makes success/failure handling clear: either
    message_id is set (SUCCEEDED) or error is set (FAILED), never both.
    """
    status: DeliveryStatus
    message_id: Optional[str] = None
    error: Optional[DeliveryError] = None

    @classmethod
    def succeeded(cls, message_id: str) -> 'DeliveryResult':
        return cls(status=DeliveryStatus.SUCCEEDED, message_id=message_id)

    @classmethod
    def failed(cls, error: DeliveryError) -> 'DeliveryResult':
        return cls(status=DeliveryStatus.FAILED, error=error)

    @property
    def success(self) -> bool:
        return self.status is DeliveryStatus.SUCCEEDED

    @property
    def error_kind(self) -> Optional[DeliveryErrorKind]:
        return self.error.kind if self.error else None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    def raise_for_error(self) -> None:
        """Re-raise the wrapped DeliveryError, if any."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"DeliveryResult(success=True, message_id={self.message_id})"
        else:
            return f"DeliveryResult(success=False, kind={self.error.kind.value}, error={self.error_message})"
