"""FastAPI dependency providers.

Routes receive their clients through these functions so tests can replace
them with `app.dependency_overrides`.
"""

import logging

from fastapi import Depends

from proposal_digest.analysis import AnalysisOrchestrator
from proposal_digest.config import Settings, get_settings
from proposal_digest.sources import DiscourseClient, SnapshotClient

logger = logging.getLogger(__name__)


def get_discourse_client(settings: Settings = Depends(get_settings)) -> DiscourseClient:
    """Discourse client bounded by the configured request timeout."""
    return DiscourseClient(timeout=settings.request_timeout_seconds)


def get_snapshot_client(settings: Settings = Depends(get_settings)) -> SnapshotClient:
    """Snapshot client for the configured hub endpoint."""
    return SnapshotClient(
        base_url=settings.snapshot_graphql_url,
        timeout=settings.request_timeout_seconds,
    )


def get_orchestrator(
    settings: Settings = Depends(get_settings),
) -> AnalysisOrchestrator | None:
    """Analysis orchestrator, or None when no backend credential is set.

    The analyse route turns None into a placeholder response rather than
    an error, keeping its always-displayable contract.
    """
    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY is not set; analysis will degrade")
        return None
    return AnalysisOrchestrator(settings.llm_config())
