"""Snapshot hub GraphQL client for importing governance proposals.

Resolves either a single proposal (by the id embedded in a shareable
snapshot.org URL) or the most recent proposals of a space.

Example:
    >>> from proposal_digest.sources.snapshot_client import SnapshotClient
    >>>
    >>> client = SnapshotClient()
    >>>
    >>> # Single proposal from a shareable URL
    >>> proposals = await client.resolve(
    ...     url="https://snapshot.org/#/ens.eth/proposal/0xABC123"
    ... )
    >>>
    >>> # Five most recent proposals of a space
    >>> proposals = await client.resolve(space="uniswap", limit=5)
"""

import logging
import re
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from proposal_digest.config import DEFAULT_SNAPSHOT_GRAPHQL_URL
from proposal_digest.exceptions import InvalidRequestError, TransportError, UpstreamError
from proposal_digest.models import GovernanceProposal

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_LIMIT = 5
DEFAULT_STATE = "all"

PROPOSAL_FIELDS = """
      id title body author start end state link
      space { id name }
      choices created scores_state
"""

QUERY_LIST = f"""
  query Proposals($space: [String!], $limit: Int, $state: String) {{
    proposals(
      first: $limit,
      where: {{ space_in: $space, state: $state }}
      orderBy: "created",
      orderDirection: desc
    ) {{{PROPOSAL_FIELDS}    }}
  }}
"""

QUERY_ONE = f"""
  query Proposal($id: String!) {{
    proposal(id: $id) {{{PROPOSAL_FIELDS}    }}
  }}
"""

# snapshot.org URLs keep the route in the fragment: #/<space>/proposal/<id>
_PROPOSAL_ID_RE = re.compile(r"/proposal/([0-9a-zA-Zx]+)", re.IGNORECASE)


def extract_proposal_id(url: str | None) -> str | None:
    """Parse a proposal id out of a shareable Snapshot URL.

    Args:
        url: e.g. "https://snapshot.org/#/ens.eth/proposal/0xABC123"

    Returns:
        The id ("0xABC123"), or None when the URL has none

    Example:
        >>> extract_proposal_id("https://snapshot.org/#/ens.eth/proposal/0xABC123")
        '0xABC123'
    """
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if not (parsed.scheme and parsed.netloc):
        return None
    match = _PROPOSAL_ID_RE.search(parsed.fragment)
    return match.group(1) if match else None


def looks_like_url(value: str | None) -> bool:
    """True when a free-form input should be resolved as a proposal URL."""
    if not value:
        return False
    return bool(re.match(r"^https?://", value.strip(), re.IGNORECASE))


class SnapshotClient:
    """Async client for the Snapshot hub GraphQL API.

    The client is stateless and makes exactly one request per operation;
    there is no retry.

    Attributes:
        base_url: GraphQL endpoint
        timeout: Deadline for the outbound request, in seconds
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    service = "snapshot"

    def __init__(
        self,
        base_url: str = DEFAULT_SNAPSHOT_GRAPHQL_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    async def _execute_graphql(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query document
            variables: Query variables

        Returns:
            The `data` object of the response ({} when absent)

        Raises:
            UpstreamError: On non-success status, timeout, non-JSON body, or
                GraphQL errors without data
            TransportError: On network failure
        """
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            try:
                response = await client.post(
                    self.base_url,
                    json={"query": query, "variables": variables or {}},
                    headers={"Content-Type": "application/json"},
                )

            except httpx.TimeoutException as e:
                logger.error(f"Snapshot request timed out: {e}")
                raise UpstreamError(
                    f"Snapshot request timed out after {self.timeout}s",
                    service=self.service,
                    diagnostic=str(e) or type(e).__name__,
                ) from e

            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.error(f"Snapshot transport error: {e}")
                raise TransportError(
                    "Snapshot fetch failed",
                    service=self.service,
                    diagnostic=str(e) or type(e).__name__,
                ) from e

        if not response.is_success:
            logger.error(
                f"Snapshot upstream {response.status_code}",
                extra={"source": self.service, "upstream_status": response.status_code},
            )
            raise UpstreamError(
                f"Snapshot upstream {response.status_code}",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                "Snapshot returned a non-JSON body",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic=response.text,
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamError(
                "Snapshot returned an unexpected payload",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic=response.text,
            )

        data = payload.get("data")
        if payload.get("errors") and not data:
            messages = [
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in payload["errors"]
            ]
            logger.error(f"GraphQL errors: {messages}")
            raise UpstreamError(
                "Snapshot GraphQL errors",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic="; ".join(messages),
            )

        return data if isinstance(data, dict) else {}

    def _to_proposals(self, raw: list[Any]) -> list[GovernanceProposal]:
        """Validate raw proposal objects, surfacing schema drift as upstream failure."""
        try:
            return [GovernanceProposal.model_validate(p) for p in raw if p is not None]
        except ValidationError as e:
            raise UpstreamError(
                "Snapshot returned a malformed proposal",
                service=self.service,
                diagnostic=str(e),
            ) from e

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_proposal(self, proposal_id: str) -> list[GovernanceProposal]:
        """Fetch one proposal by id.

        Returns:
            A one-element list, or [] when the hub has no such proposal
        """
        data = await self._execute_graphql(QUERY_ONE, {"id": proposal_id})
        proposal = data.get("proposal")
        if not proposal:
            logger.info(f"Snapshot proposal not found: {proposal_id}")
            return []
        return self._to_proposals([proposal])

    async def list_proposals(
        self,
        space: str,
        limit: int | str = DEFAULT_LIMIT,
        state: str = DEFAULT_STATE,
    ) -> list[GovernanceProposal]:
        """Fetch the most recent proposals of a space, newest first.

        Args:
            space: Space name (e.g., "ens.eth")
            limit: Maximum number of proposals
            state: Lifecycle filter ("all", "active", "closed", "pending")

        Raises:
            InvalidRequestError: If limit is not an integer
        """
        try:
            limit = int(limit)
        except (TypeError, ValueError) as e:
            raise InvalidRequestError(
                "limit must be an integer", field="limit", service=self.service
            ) from e

        variables = {"space": [space], "limit": limit, "state": str(state)}
        data = await self._execute_graphql(QUERY_LIST, variables)
        raw = data.get("proposals") or []
        proposals = self._to_proposals(raw if isinstance(raw, list) else [])

        logger.info(
            f"Snapshot space {space}: {len(proposals)} proposals",
            extra={"source": self.service},
        )
        return proposals

    async def resolve(
        self,
        url: str | None = None,
        space: str | None = None,
        limit: int | str = DEFAULT_LIMIT,
        state: str | None = DEFAULT_STATE,
    ) -> list[GovernanceProposal]:
        """Resolve a proposal URL or a space name into proposals.

        Exactly one of `url` and `space` must be given. With `url`,
        `limit` and `state` are ignored.

        Raises:
            InvalidRequestError: If both or neither of url/space are given,
                or the URL carries no proposal id
            UpstreamError: On upstream failure
            TransportError: On network failure
        """
        url = url.strip() if url else None
        space = space.strip() if space else None

        if url and space:
            raise InvalidRequestError(
                "Provide either ?url= or ?space=, not both", service=self.service
            )
        if not url and not space:
            raise InvalidRequestError(
                "Provide either ?url= or ?space=", service=self.service
            )

        if url:
            proposal_id = extract_proposal_id(url)
            if not proposal_id:
                raise InvalidRequestError(
                    "Could not parse proposal id from url",
                    field="url",
                    service=self.service,
                )
            return await self.get_proposal(proposal_id)

        return await self.list_proposals(space, limit=limit, state=state or DEFAULT_STATE)

    async def resolve_input(
        self,
        value: str,
        limit: int | str = DEFAULT_LIMIT,
        state: str = DEFAULT_STATE,
    ) -> list[GovernanceProposal]:
        """Resolve a single free-form input: a proposal URL or a space name."""
        if looks_like_url(value):
            return await self.resolve(url=value)
        return await self.resolve(space=value, limit=limit, state=state)
