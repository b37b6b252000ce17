"""
Tests for sender and destination resolution.
"""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from ses_mailer.domain.models import OutboundEmail
from ses_mailer.services import addresses


class TestResolveSender:
    """Test FromEmailAddress resolution."""

    def test_no_envelope_from(self, sample_email):
        """Test sender is omitted so SES uses the From header."""
        assert addresses.resolve_sender(sample_email) is None

    def test_envelope_from_used_verbatim(self, sample_email):
        """Test envelope-from override is returned as-is."""
        sample_email.envelope_from = 'Bounces <envelope-sender@example.com>'

        assert addresses.resolve_sender(sample_email) == 'Bounces <envelope-sender@example.com>'


class TestResolveDestination:
    """Test Destination resolution."""

    def test_defaults_to_headers(self, sample_email):
        """Test To/Cc/Bcc come from headers without overrides."""
        destination = addresses.resolve_destination(sample_email)

        assert destination.to_addresses == ['recipient@example.com']
        assert destination.cc_addresses == ['recipient_cc@example.com']
        assert destination.bcc_addresses == ['recipient_bcc@example.com']

    def test_envelope_to_replaces_to_only(self, sample_email):
        """Test envelope-to replaces To but leaves Cc/Bcc alone."""
        sample_email.envelope_to = 'envelope-recipient@example.com'

        destination = addresses.resolve_destination(sample_email)

        assert destination.to_addresses == ['envelope-recipient@example.com']
        assert destination.cc_addresses == ['recipient_cc@example.com']
        assert destination.bcc_addresses == ['recipient_bcc@example.com']

    def test_envelope_to_without_to_header(self):
        """Test envelope-to yields To recipients even when the header is missing."""
        email = OutboundEmail.from_bytes(
            b"From: sender@example.com\r\n\r\nBody\r\n",
            envelope_to='e@t.com'
        )

        destination = addresses.resolve_destination(email)

        assert destination.to_params() == {'ToAddresses': ['e@t.com']}

    def test_envelope_to_list(self, sample_email):
        sample_email.envelope_to = ['a@t.com', 'b@t.com']

        assert addresses.resolve_destination(sample_email).to_addresses == ['a@t.com', 'b@t.com']

    def test_absent_headers_are_none(self, plain_email):
        """Test missing Cc/Bcc headers are None, not empty lists."""
        destination = addresses.resolve_destination(plain_email)

        assert destination.to_addresses == ['recipient@example.com']
        assert destination.cc_addresses is None
        assert destination.bcc_addresses is None

    def test_empty_header_is_none(self):
        """Test a header without addresses is treated as absent."""
        email = OutboundEmail.from_bytes(
            b"To: recipient@example.com\r\n"
            b"Cc: \r\n"
            b"\r\n"
            b"Body\r\n"
        )

        assert addresses.resolve_destination(email).cc_addresses is None

    def test_no_recipients(self):
        """Test a message without any recipients gives an empty destination."""
        email = OutboundEmail.from_bytes(b"From: sender@example.com\r\n\r\nBody\r\n")

        destination = addresses.resolve_destination(email)

        assert destination.is_empty is True
        assert destination.to_params() == {}


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
