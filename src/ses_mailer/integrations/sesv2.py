"""
Amazon SES v2 SendEmail integration.

This module creates the boto3 sesv2 client and performs the SendEmail call,
mapping botocore failures onto the mailer's DeliveryError hierarchy.

Usage:
    from ses_mailer.integrations import sesv2

    client = sesv2.create_client({'region_name': 'us-west-2'})
    message_id = sesv2.send_email(client, request)
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..domain.errors import ApiError, MessageRejectedError, ThrottlingError, TransportError
from ..domain.models import SendEmailRequest

logger = logging.getLogger(__name__)

USER_AGENT_EXTRA = 'ses-mailer'

THROTTLING_ERROR_CODES = frozenset({
    'TooManyRequestsException',
    'LimitExceededException',
    'ThrottlingException',
})

REJECTION_ERROR_CODES = frozenset({
    'MessageRejected',
    'MailFromDomainNotVerifiedException',
})


# ============================================================================
# Client Initialization
# ============================================================================

def _default_client_config() -> Config:
    """
    Client config with NO retries and strict timeouts.

    Retry policy belongs to the caller, so every failure surfaces after a
    single attempt.
    """
    return Config(
        retries={
            'max_attempts': 0,  # 0 attempts = 1 total call, NO retries
            'mode': 'standard'
        },
        connect_timeout=10,  # 10 seconds to establish connection
        read_timeout=30,     # 30 seconds max for reading response
        user_agent_extra=USER_AGENT_EXTRA
    )


def create_client(client_options: Optional[Mapping[str, Any]] = None):
    """
    Initialize a boto3 SES v2 client.

    A botocore Config passed as client_options['config'] is merged over the
    defaults, so callers can override timeouts or retries.

    Args:
        client_options: Keyword arguments for boto3.client()

    Returns:
        boto3.client: Configured sesv2 client
    """
    options: Dict[str, Any] = dict(client_options or {})
    config = _default_client_config()
    if options.get('config') is not None:
        config = config.merge(options['config'])
    options['config'] = config

    client = boto3.client('sesv2', **options)

    logger.info(
        f"SES v2 client initialized: region={client.meta.region_name}, "
        f"connect_timeout={config.connect_timeout}s, read_timeout={config.read_timeout}s"
    )
    return client


# ============================================================================
# SendEmail
# ============================================================================

def send_email(client, request: SendEmailRequest) -> str:
    """
    Submit a SendEmail request to SES.

    Fails fast: nothing is retried and every error is raised.

    Args:
        client: boto3 sesv2 client
        request: Request built by the request builder

    Returns:
        str: The SES-assigned message id

    Raises:
        ThrottlingError: If SES throttles the request or a quota is exceeded
        MessageRejectedError: If SES rejects the message or sender identity
        ApiError: For any other SES error response
        TransportError: If SES cannot be reached
    """
    start_time = time.time()
    params = request.to_params()

    logger.info(
        f"Sending email via SES: raw_size={len(request.raw):,} bytes, "
        f"destination={params.get('Destination', {})}"
    )

    try:
        response = client.send_email(**params)

    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_message = e.response.get('Error', {}).get('Message', str(e))

        # Map AWS errors to domain-specific exceptions
        if error_code in THROTTLING_ERROR_CODES:
            logger.error(f"SendEmail throttled: error_code={error_code}, error_message={error_message}")
            raise ThrottlingError(f"Request throttled by SES: {error_message}", code=error_code) from e
        elif error_code in REJECTION_ERROR_CODES:
            logger.error(f"SendEmail rejected: error_code={error_code}, error_message={error_message}")
            raise MessageRejectedError(f"Message rejected by SES: {error_message}", code=error_code) from e
        else:
            logger.error(f"SendEmail failed: error_code={error_code}, error_message={error_message}")
            raise ApiError(f"SES SendEmail failed: {error_message}", code=error_code) from e

    except BotoCoreError as e:
        logger.error(f"Could not reach SES: {e}")
        raise TransportError(f"Could not reach SES: {e}", code=type(e).__name__) from e

    message_id = response['MessageId']

    execution_time = time.time() - start_time
    logger.info(f"SendEmail succeeded: message_id={message_id}, execution_time={execution_time:.2f}s")

    return message_id
