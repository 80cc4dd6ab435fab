"""Internal modules for quest.

WARNING: This package contains implementation details of RequestBuilder.
These are not intended for direct use in application code.

Modules:
    body - Request body encoding
    http - Shared HTTP client configuration
    redaction - Header redaction for debug output
"""
