"""
Tests for text sanitation helpers.

Tests text.py module functionality.
"""

import pytest

from proposal_digest.text import (
    DIAGNOSTIC_LIMIT,
    MAX_BODY_CHARS,
    is_blank,
    strip_html,
    truncate_body,
    truncate_diagnostic,
)


class TestStripHtml:
    """Test HTML-to-text normalisation of forum posts."""

    def test_paragraph_then_line_break(self):
        """Test the canonical example: closing paragraph then <br>."""
        assert strip_html("<p>A</p><br>B") == "A\n\nB"

    def test_line_break_variants(self):
        """Test <br>, <br/>, <br /> and upper-case tags become newlines."""
        assert strip_html("a<br>b<br/>c<br />d<BR>e") == "a\nb\nc\nd\ne"

    def test_paragraph_close_is_case_insensitive(self):
        """Test </P> is treated like </p>."""
        assert strip_html("<P>one</P><P>two</P>") == "one\n\ntwo"

    def test_strips_remaining_tags(self):
        """Test links, emphasis and attributes are removed."""
        html = '<p>Vote <a href="https://x.test">here</a> <strong>now</strong></p>'
        assert strip_html(html) == "Vote here now"

    def test_collapses_three_or_more_newlines(self):
        """Test any run of 3+ newlines collapses to exactly 2."""
        assert strip_html("a\n\n\n\n\nb") == "a\n\nb"
        assert strip_html("<p>a</p><br><br><p>b</p>") == "a\n\nb"

    def test_collapse_runs_after_tag_stripping(self):
        """Test newlines separated only by tags still collapse."""
        html = "<p>a</p><div></div><p></p><br><span></span><br>b"
        assert "\n\n\n" not in strip_html(html)

    def test_trims_surrounding_whitespace(self):
        """Test leading and trailing whitespace is removed."""
        assert strip_html("  <p> text </p>\n\n") == "text"

    def test_empty_input(self):
        """Test empty markup yields empty text."""
        assert strip_html("") == ""

    @pytest.mark.parametrize(
        "html",
        [
            "<p>First</p><p>Second<br>line</p>",
            "<h1>Heading</h1><ul><li>one</li><li>two</li></ul>",
            "plain text\n\n\n\nwith gaps",
        ],
    )
    def test_idempotent(self, html):
        """Test normalising already-normalised text changes nothing."""
        once = strip_html(html)
        assert strip_html(once) == once


class TestTruncation:
    """Test body and diagnostic truncation."""

    def test_long_body_keeps_first_12000_chars(self):
        """Test a body over the limit is cut to exactly its prefix."""
        body = "x" * MAX_BODY_CHARS + "TAIL"
        result = truncate_body(body)
        assert len(result) == 12_000
        assert result == body[:12_000]

    def test_short_body_unchanged(self):
        """Test a body under the limit is forwarded unchanged."""
        body = "Short proposal"
        assert truncate_body(body) == body

    def test_diagnostic_bounded(self):
        """Test diagnostics are capped at 300 characters."""
        assert DIAGNOSTIC_LIMIT == 300
        assert len(truncate_diagnostic("e" * 1000)) == 300

    def test_diagnostic_stringifies(self):
        """Test non-string diagnostics (exceptions) are stringified."""
        assert truncate_diagnostic(ValueError("boom")) == "boom"


class TestIsBlank:
    """Test blank detection."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t "])
    def test_blank_values(self, value):
        """Test empty and whitespace-only values are blank."""
        assert is_blank(value)

    def test_non_blank(self):
        """Test content is not blank."""
        assert not is_blank("  a  ")
