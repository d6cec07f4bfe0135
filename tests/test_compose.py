"""Tests for composing imported sources into analysable documents."""

from proposal_digest.compose import (
    compose_from_proposal,
    compose_from_topic,
    to_analysis_request,
)
from proposal_digest.models import DocumentExtract, GovernanceProposal


class TestComposeFromTopic:
    """Tests for Discourse topic composition."""

    def test_topic_document(self):
        """Test title, context and source line."""
        extract = DocumentExtract(title="Fund the docs team", body="We propose funding.")

        document = compose_from_topic("https://forum.test/", "42", extract)

        assert document.title == "Fund the docs team"
        assert document.context == "Forum: https://forum.test • Topic: 42"
        assert "Source: https://forum.test/t/42" in document.text
        assert document.text.endswith("Body\nWe propose funding.")


class TestComposeFromProposal:
    """Tests for Snapshot proposal composition."""

    def test_proposal_document(self):
        """Test source block and context line."""
        proposal = GovernanceProposal.model_validate(
            {
                "id": "0x1",
                "title": "Raise the quorum",
                "body": "Quorum should be 5%.",
                "author": "0xauthor",
                "state": "active",
                "start": 100,
                "end": 200,
                "link": "https://snapshot.org/#/ens.eth/proposal/0x1",
                "space": {"id": "ens.eth", "name": "ENS"},
            }
        )

        document = compose_from_proposal(proposal)

        assert document.title == "Raise the quorum"
        assert document.context == (
            "DAO: ens.eth • State: active • Link: https://snapshot.org/#/ens.eth/proposal/0x1"
        )
        assert "- Space: ens.eth" in document.text
        assert "- Start (unix): 100" in document.text
        assert document.text.endswith("Body\nQuorum should be 5%.")

    def test_sparse_proposal(self):
        """Test a proposal with only an id still composes."""
        document = compose_from_proposal(GovernanceProposal(id="0x2"))

        assert document.title == ""
        assert document.context.startswith("DAO: Snapshot")
        assert document.text.endswith("Body")

    def test_to_analysis_request(self):
        """Test the composed triple maps onto an AnalysisRequest."""
        proposal = GovernanceProposal(id="0x3", title="T", body="B")

        request = to_analysis_request(compose_from_proposal(proposal))

        assert request.title == "T"
        assert request.body.endswith("Body\nB")
        assert request.context.startswith("DAO:")
