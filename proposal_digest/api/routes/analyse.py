"""Proposal analysis endpoint.

Endpoints:
- POST /api/analyse - Summarise a document into tldr/pros/cons/risks/recommendation

Only a blank `text` is rejected (400). Every other failure, including a
body that is not valid JSON, returns 200 with a placeholder result and a
`debug` diagnostic.
"""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, ValidationError

from proposal_digest.analysis import AnalysisOrchestrator, unexpected_failure
from proposal_digest.api.dependencies import get_orchestrator
from proposal_digest.models import AnalysisRequest, AnalysisResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


class AnalyseBody(BaseModel):
    """Analysis request body."""

    title: str | None = Field(default="", description="Document title")
    text: str | None = Field(default="", description="Document text to analyse")
    context: str | None = Field(default="", description="Free-form context (DAO, treasury, vote window)")

    def to_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            body=self.text or "",
            title=self.title or "",
            context=self.context or "",
        )


@router.post(
    "/analyse",
    response_model=AnalysisResponse,
    response_model_exclude_none=True,
)
async def analyse(
    request: Request,
    orchestrator: AnalysisOrchestrator | None = Depends(get_orchestrator),
) -> AnalysisResponse:
    """Analyse a proposal document.

    Returns:
        AnalysisResponse: Always fully populated

    Raises:
        InvalidRequestError: If `text` is blank (rendered as 400)
    """
    try:
        body = AnalyseBody.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.warning(f"Malformed analysis request: {e}")
        return unexpected_failure(e)

    analysis_request = body.to_request()
    AnalysisOrchestrator.validate(analysis_request)

    if orchestrator is None:
        return unexpected_failure("OPENAI_API_KEY is not set")

    return await orchestrator.analyse(analysis_request)
