"""Canonical data shapes shared by the adapters, the orchestrator and the API.

Internal, request-scoped values are dataclasses; values that cross the HTTP
boundary are Pydantic models.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# DOCUMENTS
# =============================================================================


@dataclass
class DocumentExtract:
    """A document fetched by a source adapter.

    Attributes:
        title: Upstream title ("" when the upstream has none)
        body: Plain text, never markup
    """

    title: str
    body: str


@dataclass
class AnalysisRequest:
    """Input to the analysis orchestrator.

    The body is truncated to MAX_BODY_CHARS when the prompt is built,
    not here, so callers can still inspect what they submitted.
    """

    body: str
    title: str = ""
    context: str = ""


@dataclass
class ComposedDocument:
    """The title/context/text triple assembled from an imported source."""

    title: str
    context: str
    text: str


# =============================================================================
# ANALYSIS RESULTS
# =============================================================================


class AnalysisResult(BaseModel):
    """Structured decision summary.

    Every field is always present with its declared type; the orchestrator
    fills in defaults for anything the model omitted or mistyped.
    """

    tldr: str = Field(description="3-5 line summary")
    pros: list[str] = Field(default_factory=list, description="Pro bullets")
    cons: list[str] = Field(default_factory=list, description="Con bullets")
    risks: list[str] = Field(default_factory=list, description="Risk bullets")
    recommendation: str = Field(description="1-2 line recommendation")


class AnalysisResponse(AnalysisResult):
    """Wire shape of the analysis operation.

    `debug` is only set on degraded paths.
    """

    debug: str | None = Field(default=None, description="Diagnostic on degraded paths")


# =============================================================================
# GOVERNANCE PROPOSALS
# =============================================================================


class SpaceRef(BaseModel):
    """Snapshot space a proposal belongs to."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None


class GovernanceProposal(BaseModel):
    """A Snapshot proposal, passed through as the hub returned it.

    Only the fields the hub actually sent are serialised back out
    (see `to_wire`), so nothing is invented for absent upstream fields.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str | None = None
    body: str | None = None
    author: str | None = None
    start: int | None = None
    end: int | None = None
    state: str | None = None
    link: str | None = None
    space: SpaceRef | None = None
    choices: list[str] | None = None
    created: int | None = None
    scores_state: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """Serialise exactly the upstream fields."""
        return self.model_dump(exclude_unset=True)


class ProposalsResponse(BaseModel):
    """Response of the governance import operation."""

    proposals: list[dict[str, Any]] = Field(default_factory=list)


class TopicResponse(BaseModel):
    """Response of the forum import operation."""

    title: str
    text: str


class ErrorResponse(BaseModel):
    """Error body returned by the import operations."""

    error: str
    debug: str | None = None
