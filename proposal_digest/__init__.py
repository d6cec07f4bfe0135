"""Proposal Digest - proposal import and decision-summary analysis.

Imports a proposal from a Discourse forum or the Snapshot hub, or takes
pasted text, and asks a generative backend for a structured summary
(TL;DR, pros, cons, risks, recommendation) with a guaranteed shape.

Note: Imports are lazy so that importing a submodule does not pull in the
OpenAI SDK. Use explicit imports:
`from proposal_digest.analysis import AnalysisOrchestrator`
"""

__all__ = ["AnalysisOrchestrator", "DiscourseClient", "SnapshotClient"]

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy import of the public entry points."""
    if name == "AnalysisOrchestrator":
        from .analysis import AnalysisOrchestrator

        return AnalysisOrchestrator
    if name in ("DiscourseClient", "SnapshotClient"):
        from . import sources

        return getattr(sources, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
