"""Text sanitation helpers shared by the source adapters and the orchestrator.

Covers the three bounded transforms the core relies on:
- HTML-to-plain-text normalisation of forum posts
- Truncation of document bodies before they are sent to the model
- Truncation of diagnostic payloads before they reach a response
"""

import re

MAX_BODY_CHARS = 12_000
DIAGNOSTIC_LIMIT = 300

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"</p>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def strip_html(html: str) -> str:
    """Render a cooked forum post as plain text.

    The steps are order-sensitive: newlines are collapsed only after every
    tag is gone, otherwise whitespace inside tags breaks the collapse.

    Args:
        html: Post markup (may be empty)

    Returns:
        Plain text with at most two consecutive newlines, trimmed

    Example:
        >>> strip_html("<p>A</p><br>B")
        'A\\n\\nB'
    """
    if not html:
        return ""
    text = _BR_RE.sub("\n", html)
    text = _P_CLOSE_RE.sub("\n\n", text)
    text = _TAG_RE.sub("", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def truncate_body(body: str, limit: int = MAX_BODY_CHARS) -> str:
    """Cut a document body to its first `limit` characters."""
    return body[:limit]


def truncate_diagnostic(value: object, limit: int = DIAGNOSTIC_LIMIT) -> str:
    """Bound a diagnostic payload (upstream error body, exception message)."""
    return str(value)[:limit]


def is_blank(value: str | None) -> bool:
    """True when the value is None, empty or whitespace-only."""
    return not value or not value.strip()
