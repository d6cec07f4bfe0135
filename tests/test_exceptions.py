"""Tests for the unified exception hierarchy."""

from proposal_digest.exceptions import (
    ConfigurationError,
    DigestError,
    InvalidRequestError,
    ParseError,
    TransportError,
    UpstreamError,
)


class TestDigestError:
    """Tests for the base error."""

    def test_all_errors_share_base(self):
        """Every error kind can be caught as DigestError."""
        for cls in (
            InvalidRequestError,
            UpstreamError,
            TransportError,
            ParseError,
            ConfigurationError,
        ):
            assert issubclass(cls, DigestError)

    def test_str_includes_service(self):
        """Test service prefix in string form."""
        error = UpstreamError("Snapshot upstream 502", service="snapshot")
        assert str(error) == "[snapshot] Snapshot upstream 502"
        assert error.message == "Snapshot upstream 502"

    def test_diagnostic_truncated(self):
        """Test diagnostics are capped at 300 characters."""
        error = TransportError("failed", diagnostic="x" * 5000)
        assert len(error.diagnostic) == 300

    def test_empty_diagnostic_is_none(self):
        """Test a missing diagnostic stays None."""
        assert UpstreamError("failed").diagnostic is None
        assert UpstreamError("failed", diagnostic="").diagnostic is None


class TestStatusCodes:
    """Tests for HTTP status mapping."""

    def test_invalid_request_is_400(self):
        """Test InvalidRequestError maps to 400."""
        error = InvalidRequestError("Missing text", field="text")
        assert error.status_code == 400
        assert error.field == "text"

    def test_upstream_is_500(self):
        """Test UpstreamError maps to 500 and keeps the upstream status."""
        error = UpstreamError("Discourse upstream 404", upstream_status=404)
        assert error.status_code == 500
        assert error.upstream_status == 404

    def test_transport_is_500(self):
        """Test TransportError maps to 500."""
        assert TransportError("fetch failed").status_code == 500
