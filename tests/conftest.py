"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
from email.message import EmailMessage

import boto3
import pytest
from botocore.stub import Stubber

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Dummy AWS environment so no test ever picks up real credentials
os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')

from ses_mailer.domain.models import OutboundEmail  # noqa: E402

SES_MESSAGE_ID = '0000000000000000-1111111-2222-3333-4444-555555555555-666666'


def make_message(**headers):
    """Build a plain-text EmailMessage; header names use underscores for dashes."""
    message = EmailMessage()
    for name, value in headers.items():
        message[name.replace('_', '-')] = value
    message.set_content('Hallo')
    return message


@pytest.fixture
def sample_message():
    """Message with From/To/Cc/Bcc and both SES control headers."""
    return make_message(
        From='Sender <sender@example.com>',
        Subject='This is a test',
        To='Recipient <recipient@example.com>',
        Cc='Recipient CC <recipient_cc@example.com>',
        Bcc='Recipient BCC <recipient_bcc@example.com>',
        X_SES_CONFIGURATION_SET='TestConfigSet',
        X_SES_LIST_MANAGEMENT_OPTIONS='contactListName; topic=topic'
    )


@pytest.fixture
def sample_email(sample_message):
    return OutboundEmail(message=sample_message)


@pytest.fixture
def plain_email():
    """Message without any control headers."""
    return OutboundEmail(message=make_message(
        From='sender@example.com',
        To='recipient@example.com',
        Subject='Test'
    ))


@pytest.fixture
def sesv2_client():
    return boto3.client('sesv2', region_name='us-west-2')


@pytest.fixture
def stubber(sesv2_client):
    with Stubber(sesv2_client) as stub:
        yield stub
        stub.assert_no_pending_responses()
