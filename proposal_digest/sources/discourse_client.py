"""Discourse forum client for importing a topic as a plain-text document.

Fetches a topic's JSON representation and renders its first post as plain
text. The client is stateless: each call opens its own connection and
caching is disabled, since a topic may be edited between imports.

Example:
    >>> from proposal_digest.sources.discourse_client import DiscourseClient
    >>>
    >>> client = DiscourseClient()
    >>> extract = await client.fetch_topic("https://meta.discourse.org", "12345")
    >>> print(extract.title)
"""

import logging
from typing import Any

import httpx

from proposal_digest.exceptions import InvalidRequestError, TransportError, UpstreamError
from proposal_digest.models import DocumentExtract
from proposal_digest.text import strip_html

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# Disable every cache between us and the forum
NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class DiscourseClient:
    """Async client for the Discourse topic JSON endpoint.

    Attributes:
        timeout: Deadline for the outbound request, in seconds
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    service = "discourse"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self.transport = transport

    @staticmethod
    def build_topic_url(base_url: str | None, topic_id: str | int | None) -> str:
        """Validate the inputs and build `{base}/t/{topic}.json`.

        Args:
            base_url: Forum root URL (trailing slashes are stripped)
            topic_id: Topic identifier

        Returns:
            Topic JSON URL

        Raises:
            InvalidRequestError: If either input is empty
        """
        base = (base_url or "").strip().rstrip("/")
        topic = str(topic_id).strip() if topic_id is not None else ""

        if not base or not topic:
            raise InvalidRequestError(
                "Missing base or topic id",
                field="base" if not base else "topic",
                service=DiscourseClient.service,
            )
        return f"{base}/t/{topic}.json"

    @staticmethod
    def extract_document(payload: Any) -> DocumentExtract:
        """Map a topic payload to a DocumentExtract.

        A topic with no posts yields an empty body; a missing title
        yields an empty title.
        """
        if not isinstance(payload, dict):
            return DocumentExtract(title="", body="")

        title = payload.get("title")
        title = title if isinstance(title, str) else ""

        cooked = ""
        post_stream = payload.get("post_stream")
        if isinstance(post_stream, dict):
            posts = post_stream.get("posts")
            if isinstance(posts, list) and posts and isinstance(posts[0], dict):
                first = posts[0].get("cooked")
                cooked = first if isinstance(first, str) else ""

        return DocumentExtract(title=title, body=strip_html(cooked))

    async def fetch_topic(
        self, base_url: str | None, topic_id: str | int | None
    ) -> DocumentExtract:
        """Fetch a topic and return its title and first post as plain text.

        Args:
            base_url: Forum root URL (e.g., "https://meta.discourse.org")
            topic_id: Topic identifier

        Returns:
            DocumentExtract with the topic title and plain-text first post

        Raises:
            InvalidRequestError: If base URL or topic id is missing
            UpstreamError: On non-success status, timeout or non-JSON body
            TransportError: On network failure
        """
        url = self.build_topic_url(base_url, topic_id)
        payload = await self._get_json(url)
        extract = self.extract_document(payload)

        logger.info(
            f"Imported Discourse topic {topic_id}: {len(extract.body)} chars",
            extra={"source": self.service},
        )
        return extract

    async def _get_json(self, url: str) -> Any:
        """GET a JSON document with caching disabled; redirects are followed."""
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport, follow_redirects=True
        ) as client:
            try:
                response = await client.get(url, headers=NO_CACHE_HEADERS)

            except httpx.TimeoutException as e:
                logger.error(f"Discourse request timed out: {e}")
                raise UpstreamError(
                    f"Discourse request timed out after {self.timeout}s",
                    service=self.service,
                    diagnostic=str(e) or type(e).__name__,
                ) from e

            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.error(f"Discourse transport error: {e}")
                raise TransportError(
                    "Discourse fetch failed",
                    service=self.service,
                    diagnostic=str(e) or type(e).__name__,
                ) from e

        if not response.is_success:
            logger.error(
                f"Discourse upstream {response.status_code}",
                extra={"source": self.service, "upstream_status": response.status_code},
            )
            raise UpstreamError(
                f"Discourse upstream {response.status_code}",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                "Discourse returned a non-JSON body",
                upstream_status=response.status_code,
                service=self.service,
                diagnostic=response.text,
            ) from e
