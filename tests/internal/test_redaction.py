"""Tests for header redaction."""

import httpx

from quest._internal.redaction import REDACTED_VALUE, redact_headers


class TestRedactHeaders:
    """Tests for redact_headers()."""

    def test_redacts_authorization(self):
        """Should redact the Authorization header."""
        result = redact_headers([("Authorization", "Bearer secret")])
        assert result == {"Authorization": REDACTED_VALUE}

    def test_case_insensitive(self):
        """Should match header names regardless of case."""
        result = redact_headers([("X-API-KEY", "abc"), ("cookie", "session=1")])
        assert result == {"X-API-KEY": REDACTED_VALUE, "cookie": REDACTED_VALUE}

    def test_keeps_other_headers(self):
        """Should leave non-sensitive headers untouched."""
        result = redact_headers([("Accept", "application/json")])
        assert result == {"Accept": "application/json"}

    def test_joins_multi_values(self):
        """Should join repeated headers."""
        result = redact_headers([("Accept", "text/html"), ("Accept", "text/plain")])
        assert result == {"Accept": "text/html, text/plain"}

    def test_does_not_mutate_input(self):
        """Should never mutate the original headers."""
        headers = httpx.Headers({"Authorization": "Bearer secret"})
        redact_headers(headers.multi_items())
        assert headers["authorization"] == "Bearer secret"
