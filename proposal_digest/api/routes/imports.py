"""Document import endpoints.

Endpoints:
- GET /api/discourse?base=&topic= - First post of a Discourse topic as plain text
- GET /api/snapshot?url= | ?space=&limit=&state= - Snapshot proposals

Failures are rendered by the DigestError handler: 400 `{error}` for
missing or unparseable input, 500 `{error, debug}` for upstream and
transport failures.
"""

from fastapi import APIRouter, Depends, Query

from proposal_digest.api.dependencies import get_discourse_client, get_snapshot_client
from proposal_digest.models import ProposalsResponse, TopicResponse
from proposal_digest.sources import DiscourseClient, SnapshotClient
from proposal_digest.sources.snapshot_client import DEFAULT_LIMIT, DEFAULT_STATE

router = APIRouter(prefix="/api", tags=["Imports"])


@router.get("/discourse", response_model=TopicResponse)
async def import_discourse(
    base: str | None = Query(default=None, description="Forum root URL"),
    topic: str | None = Query(default=None, description="Topic identifier"),
    client: DiscourseClient = Depends(get_discourse_client),
) -> TopicResponse:
    """Import the first post of a Discourse topic."""
    extract = await client.fetch_topic(base, topic)
    return TopicResponse(title=extract.title, text=extract.body)


@router.get("/snapshot", response_model=ProposalsResponse)
async def import_snapshot(
    url: str | None = Query(default=None, description="Shareable proposal URL"),
    space: str | None = Query(default=None, description="Space name, e.g. ens.eth"),
    limit: str | None = Query(default=None, description=f"Max proposals (default {DEFAULT_LIMIT})"),
    state: str | None = Query(default=None, description=f"Lifecycle filter (default {DEFAULT_STATE})"),
    client: SnapshotClient = Depends(get_snapshot_client),
) -> ProposalsResponse:
    """Import one proposal by URL, or the latest proposals of a space."""
    proposals = await client.resolve(
        url=url,
        space=space,
        limit=limit or DEFAULT_LIMIT,
        state=state or DEFAULT_STATE,
    )
    return ProposalsResponse(proposals=[p.to_wire() for p in proposals])
