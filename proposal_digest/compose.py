"""Compose imported topics and proposals into analysable documents.

Each composer returns the title/context/text triple a caller feeds into
the analysis orchestrator, with the source details written into the text
so the model sees where the document came from.
"""

from proposal_digest.models import (
    AnalysisRequest,
    ComposedDocument,
    DocumentExtract,
    GovernanceProposal,
)


def compose_from_topic(
    base_url: str, topic_id: str | int, extract: DocumentExtract
) -> ComposedDocument:
    """Compose a Discourse topic import."""
    base = base_url.rstrip("/")
    return ComposedDocument(
        title=extract.title,
        context=f"Forum: {base} • Topic: {topic_id}",
        text=(
            f"Title: {extract.title}\n\n"
            f"Source: {base}/t/{topic_id}\n\n"
            f"Body\n{extract.body}"
        ),
    )


def compose_from_proposal(proposal: GovernanceProposal) -> ComposedDocument:
    """Compose a Snapshot proposal import."""
    space_id = proposal.space.id if proposal.space else None
    lines = [
        f"Title: {proposal.title}",
        "",
        "Source",
        f"- Space: {space_id}",
        f"- Link: {proposal.link}",
        f"- Author: {proposal.author}",
        f"- State: {proposal.state}",
        f"- Start (unix): {proposal.start}",
        f"- End (unix): {proposal.end}",
        "",
        "Body",
        proposal.body or "",
    ]
    return ComposedDocument(
        title=proposal.title or "",
        context=(
            f"DAO: {space_id or 'Snapshot'} • State: {proposal.state} "
            f"• Link: {proposal.link}"
        ),
        text="\n".join(lines).strip(),
    )


def to_analysis_request(document: ComposedDocument) -> AnalysisRequest:
    """Turn a composed document into an orchestrator request."""
    return AnalysisRequest(
        body=document.text, title=document.title, context=document.context
    )
