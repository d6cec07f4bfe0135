"""
Analysis orchestrator: turns a proposal document into a decision summary.

The orchestrator is fail-soft. Apart from an empty document, which raises
InvalidRequestError before anything is sent, every failure becomes a
schema-complete placeholder result:

    run(request)      -> AnalysisOutcome   (repaired result, or a failure)
    settle(outcome)   -> AnalysisResponse  (placeholder for failures)
    analyse(request)  =  settle(await run(request))

`repair` is the field-level coercion step. It is a pure function so the
guaranteed output shape can be tested without any network call.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import openai

from proposal_digest.config import LLMConfig
from proposal_digest.exceptions import InvalidRequestError, ParseError
from proposal_digest.llm_client import LLMClient
from proposal_digest.models import AnalysisRequest, AnalysisResponse, AnalysisResult
from proposal_digest.text import is_blank, truncate_body, truncate_diagnostic

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
TLDR_FALLBACK = "Summary unavailable."
RECOMMENDATION_FALLBACK = "Not specified."

SYSTEM_PROMPT = """Respond with ONLY valid JSON.
Keys: {"tldr": string, "pros": string[], "cons": string[], "risks": string[], "recommendation": string }.
British English. Be concise and specific. Use "Not specified" if unknown."""

USER_PROMPT_TEMPLATE = """Context: {context}
Title: {title}
DOCUMENT:
{body}

TASK:
1) TL;DR (3–5 lines)
2) Pros: 3 bullets
3) Cons: 3 bullets
4) Risks: 2 bullets
5) Recommendation: 1–2 lines
Return JSON only."""


# =============================================================================
# OUTCOMES
# =============================================================================


class FailureKind(str, Enum):
    """Why an analysis degraded to a placeholder."""

    UPSTREAM = "upstream"  # backend answered with a failure status or timed out
    UNEXPECTED = "unexpected"  # anything else


@dataclass
class AnalysisFailure:
    """Non-fatal failure of the backend exchange."""

    kind: FailureKind
    diagnostic: str


@dataclass
class AnalysisOutcome:
    """Internal result of one analysis run.

    Exactly one of `result` and `failure` is set. `debug` may accompany a
    result that had to be repaired from unparseable model output.
    """

    result: AnalysisResult | None = None
    failure: AnalysisFailure | None = None
    debug: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


PLACEHOLDERS: dict[FailureKind, AnalysisResult] = {
    FailureKind.UPSTREAM: AnalysisResult(
        tldr="Service temporarily unavailable.",
        pros=[],
        cons=[],
        risks=[NOT_SPECIFIED],
        recommendation="Retry shortly.",
    ),
    FailureKind.UNEXPECTED: AnalysisResult(
        tldr="Service unavailable. Try again later.",
        pros=[],
        cons=[],
        risks=[NOT_SPECIFIED],
        recommendation="Pause and request clarification.",
    ),
}


def settle(outcome: AnalysisOutcome) -> AnalysisResponse:
    """Map an outcome to the always-displayable response.

    Failures become the placeholder for their kind, annotated with the
    failure diagnostic.
    """
    if outcome.failure is None:
        result = outcome.result or repair({})
        return AnalysisResponse(**result.model_dump(), debug=outcome.debug)

    placeholder = PLACEHOLDERS[outcome.failure.kind]
    return AnalysisResponse(
        **placeholder.model_dump(),
        debug=outcome.failure.diagnostic,
    )


def unexpected_failure(error: BaseException | str) -> AnalysisResponse:
    """Placeholder response for a failure outside the backend exchange."""
    diagnostic = truncate_diagnostic(error) or type(error).__name__
    return settle(
        AnalysisOutcome(failure=AnalysisFailure(FailureKind.UNEXPECTED, diagnostic))
    )


# =============================================================================
# PROMPT & REPAIR
# =============================================================================


def build_messages(request: AnalysisRequest) -> list[dict[str, str]]:
    """Build the system and user messages for a request.

    The body is cut to its first MAX_BODY_CHARS characters; empty title and
    context are sent as "Not specified".
    """
    user = USER_PROMPT_TEMPLATE.format(
        context=request.context or NOT_SPECIFIED,
        title=request.title or NOT_SPECIFIED,
        body=truncate_body(request.body),
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


def parse_model_content(content: str) -> Any:
    """Decode the model's raw text as JSON.

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        return json.loads(content)
    except (TypeError, ValueError) as e:
        raise ParseError(
            "Model output is not valid JSON",
            service="analysis",
            diagnostic=f"Unparseable model output: {content}",
        ) from e


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def repair(raw: Any) -> AnalysisResult:
    """Coerce a loosely-typed model output into an AnalysisResult.

    Each field is checked on its own, so the valid parts of a partially
    malformed response survive:

    - tldr: kept if a string, else "Summary unavailable."
    - pros / cons / risks: kept if a list (non-string items dropped), else []
    - recommendation: kept if a string, else "Not specified."

    Unknown keys are ignored and list lengths are not clamped.

    Example:
        >>> repair({"tldr": "Short.", "pros": "not a list"}).pros
        []
    """
    data = raw if isinstance(raw, dict) else {}

    tldr = data.get("tldr")
    recommendation = data.get("recommendation")

    return AnalysisResult(
        tldr=tldr if isinstance(tldr, str) else TLDR_FALLBACK,
        pros=_string_list(data.get("pros")),
        cons=_string_list(data.get("cons")),
        risks=_string_list(data.get("risks")),
        recommendation=(
            recommendation if isinstance(recommendation, str) else RECOMMENDATION_FALLBACK
        ),
    )


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class AnalysisOrchestrator:
    """Runs one analysis against the generative backend.

    Args:
        config: Backend configuration (credential, endpoint, model)
        llm_client: Optional client override (tests pass a fake)

    Example:
        orchestrator = AnalysisOrchestrator(get_settings().llm_config())
        response = await orchestrator.analyse(
            AnalysisRequest(title="Treasury diversification", body=text)
        )
        print(response.tldr)
    """

    def __init__(self, config: LLMConfig, llm_client: LLMClient | None = None):
        self.config = config
        self.llm = llm_client or LLMClient(config)

    @staticmethod
    def validate(request: AnalysisRequest) -> None:
        """Reject a request with nothing to analyse.

        Raises:
            InvalidRequestError: If the body is empty or whitespace-only
        """
        if not isinstance(request.body, str) or is_blank(request.body):
            raise InvalidRequestError("Missing text", field="text", service="analysis")

    async def run(self, request: AnalysisRequest) -> AnalysisOutcome:
        """Validate, call the backend once and repair its output.

        Raises:
            InvalidRequestError: If the body is blank (no call is made)
        """
        self.validate(request)
        messages = build_messages(request)

        try:
            response = await self.llm.complete_json(messages)

        except openai.APITimeoutError:
            diagnostic = f"Upstream timeout after {self.config.timeout}s"
            logger.warning(diagnostic, extra={"source": "analysis"})
            return AnalysisOutcome(
                failure=AnalysisFailure(FailureKind.UPSTREAM, diagnostic)
            )

        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else e.message
            diagnostic = f"Upstream {e.status_code}: {truncate_diagnostic(body)}"
            logger.warning(
                f"Analysis backend failed with HTTP {e.status_code}",
                extra={"source": "analysis", "upstream_status": e.status_code},
            )
            return AnalysisOutcome(
                failure=AnalysisFailure(FailureKind.UPSTREAM, diagnostic)
            )

        except Exception as e:  # noqa: BLE001 - every failure degrades to a placeholder
            logger.warning(
                f"Analysis failed unexpectedly: {type(e).__name__}: {e}",
                extra={"source": "analysis"},
            )
            diagnostic = truncate_diagnostic(e) or type(e).__name__
            return AnalysisOutcome(
                failure=AnalysisFailure(FailureKind.UNEXPECTED, diagnostic)
            )

        content = response.content or "{}"
        try:
            raw = parse_model_content(content)
            debug = None
        except ParseError as e:
            logger.warning("Model output was not JSON; repairing", extra={"source": "analysis"})
            raw = {}
            debug = e.diagnostic

        return AnalysisOutcome(result=repair(raw), debug=debug)

    async def analyse(self, request: AnalysisRequest) -> AnalysisResponse:
        """Analyse a document; only a blank body raises.

        Returns:
            AnalysisResponse with all five fields populated

        Raises:
            InvalidRequestError: If the body is blank
        """
        return settle(await self.run(request))
