"""
Domain layer for SES delivery.

This layer contains:
- Data models (settings, outbound message, request, result)
- Error types (explicit failure kinds)
- The Mailer (delivery pipeline)
"""
