"""
Message-to-request functions for SES delivery.

This package contains pure functions for reading SES control headers,
resolving envelope addresses and assembling SendEmail requests.
"""

__all__ = ['headers', 'addresses', 'request_builder']
