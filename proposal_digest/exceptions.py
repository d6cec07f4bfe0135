"""
Unified Exception Hierarchy for proposal-digest.

Every failure raised by the source adapters and the analysis orchestrator
derives from DigestError, so callers (the HTTP API, the CLI) can map any of
them to a response with a single except clause.

Usage:
    from proposal_digest.exceptions import (
        DigestError,
        InvalidRequestError,
        UpstreamError,
        TransportError,
    )

    try:
        extract = await client.fetch_topic(base_url, topic_id)
    except InvalidRequestError:
        # Caller supplied insufficient input - nothing was sent upstream
        ...
    except (UpstreamError, TransportError) as e:
        logger.error(f"Import failed: {e} ({e.diagnostic})")

Note:
    Diagnostics are truncated to DIAGNOSTIC_LIMIT characters on construction,
    so an oversized upstream error body never leaks into a response.
"""

from typing import Any

from proposal_digest.text import truncate_diagnostic


class DigestError(Exception):
    """Base exception for all proposal-digest errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional error context.
        status_code: HTTP status code this error maps to at the API boundary.
        service: Name of the service that raised the error.
        diagnostic: Truncated diagnostic payload (never the full upstream body).
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        service: str | None = None,
        diagnostic: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        self.service = service
        self.diagnostic = truncate_diagnostic(diagnostic) if diagnostic else None

    def __str__(self) -> str:
        parts = [self.message]
        if self.service:
            parts.insert(0, f"[{self.service}]")
        return " ".join(parts)


class InvalidRequestError(DigestError):
    """Caller supplied insufficient or unparseable input.

    Raised when:
    - The document body to analyse is empty or whitespace-only
    - A forum base URL or topic id is missing
    - Neither (or both) of a Snapshot URL and space name is given
    - A Snapshot URL carries no parseable proposal id

    Always raised before any outbound call is made.

    Attributes:
        field: Name of the offending input, if known.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        *,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field


class UpstreamError(DigestError):
    """Remote service responded with a failure status or missed its deadline.

    Attributes:
        upstream_status: HTTP status returned by the remote service
            (None when the request timed out).
    """

    def __init__(
        self,
        message: str = "Upstream request failed",
        *,
        upstream_status: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.upstream_status = upstream_status


class TransportError(DigestError):
    """Network or transport-level exception while talking to a remote service."""

    pass


class ParseError(DigestError):
    """A response body could not be interpreted.

    The analysis orchestrator recovers from this locally through field-level
    repair; the source adapters surface it as an upstream failure.
    """

    pass


class ConfigurationError(DigestError):
    """Configuration is invalid or missing.

    Raised when:
    - The generative backend credential is not set
    - A configured endpoint URL is malformed
    """

    pass


__all__ = [
    "DigestError",
    "InvalidRequestError",
    "UpstreamError",
    "TransportError",
    "ParseError",
    "ConfigurationError",
]
