"""
Source adapters: fetch a document from one external service and map it to
the canonical shapes in `proposal_digest.models`.

Usage:
    from proposal_digest.sources import DiscourseClient, SnapshotClient
"""

from proposal_digest.sources.discourse_client import DiscourseClient
from proposal_digest.sources.snapshot_client import (
    SnapshotClient,
    extract_proposal_id,
    looks_like_url,
)

__all__ = [
    "DiscourseClient",
    "SnapshotClient",
    "extract_proposal_id",
    "looks_like_url",
]
