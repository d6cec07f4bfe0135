"""
Proposal Digest CLI - import and analyse proposals from the terminal.

Usage:
    # Analyse a pasted document
    python -m proposal_digest analyse --file proposal.txt --title "Grant renewal"

    # Import the first post of a Discourse topic
    python -m proposal_digest discourse --base https://meta.discourse.org --topic 12345

    # Import a Snapshot proposal by URL, or the latest proposals of a space
    python -m proposal_digest snapshot https://snapshot.org/#/ens.eth/proposal/0xABC123
    python -m proposal_digest snapshot ens.eth --limit 3

    # Import and analyse in one go
    python -m proposal_digest discourse --base https://meta.discourse.org --topic 12345 --analyse

Output is JSON on stdout. Exit status is 0 on success, 2 for invalid input
and 1 for upstream or transport failures.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any

from proposal_digest.analysis import AnalysisOrchestrator, unexpected_failure
from proposal_digest.compose import (
    compose_from_proposal,
    compose_from_topic,
    to_analysis_request,
)
from proposal_digest.config import Settings, get_settings
from proposal_digest.exceptions import DigestError, InvalidRequestError
from proposal_digest.logging_config import setup_logging
from proposal_digest.models import AnalysisRequest, AnalysisResponse
from proposal_digest.sources import DiscourseClient, SnapshotClient
from proposal_digest.sources.snapshot_client import DEFAULT_LIMIT, DEFAULT_STATE


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="proposal-digest",
        description="Import governance proposals and summarise them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (defaults to LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyse = sub.add_parser("analyse", help="Analyse a document")
    analyse.add_argument(
        "--file", "-f", default="-", help="Document file ('-' reads stdin)"
    )
    analyse.add_argument("--title", "-t", default="", help="Document title")
    analyse.add_argument("--context", "-c", default="", help="Free-form context")

    discourse = sub.add_parser("discourse", help="Import a Discourse topic")
    discourse.add_argument("--base", "-b", required=True, help="Forum root URL")
    discourse.add_argument("--topic", "-t", required=True, help="Topic identifier")
    discourse.add_argument(
        "--analyse", "-a", action="store_true", help="Analyse the imported topic"
    )

    snapshot = sub.add_parser("snapshot", help="Import Snapshot proposals")
    snapshot.add_argument("target", help="Proposal URL or space name")
    snapshot.add_argument("--limit", "-l", type=int, default=DEFAULT_LIMIT)
    snapshot.add_argument("--state", "-s", default=DEFAULT_STATE)
    snapshot.add_argument(
        "--analyse",
        "-a",
        action="store_true",
        help="Analyse one of the imported proposals",
    )
    snapshot.add_argument(
        "--index",
        "-i",
        type=int,
        default=1,
        help="Which proposal to analyse (1-based, clamped to the list)",
    )

    return parser


async def run_analysis(settings: Settings, request: AnalysisRequest) -> AnalysisResponse:
    """Analyse a request, degrading to a placeholder without a credential."""
    AnalysisOrchestrator.validate(request)
    if not settings.llm_configured:
        return unexpected_failure("OPENAI_API_KEY is not set")
    return await AnalysisOrchestrator(settings.llm_config()).analyse(request)


def _read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


async def dispatch(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """Run one sub-command and return its JSON-serialisable result."""
    timeout = settings.request_timeout_seconds

    if args.command == "analyse":
        request = AnalysisRequest(
            body=_read_document(args.file), title=args.title, context=args.context
        )
        response = await run_analysis(settings, request)
        return response.model_dump(exclude_none=True)

    if args.command == "discourse":
        extract = await DiscourseClient(timeout=timeout).fetch_topic(args.base, args.topic)
        if not args.analyse:
            return {"title": extract.title, "text": extract.body}
        document = compose_from_topic(args.base, args.topic, extract)
        response = await run_analysis(settings, to_analysis_request(document))
        return {"document": asdict(document), "analysis": response.model_dump(exclude_none=True)}

    client = SnapshotClient(base_url=settings.snapshot_graphql_url, timeout=timeout)
    proposals = await client.resolve_input(args.target, limit=args.limit, state=args.state)
    if not args.analyse:
        return {"proposals": [p.to_wire() for p in proposals]}
    if not proposals:
        raise InvalidRequestError("No proposals found", service="snapshot")

    index = max(1, min(len(proposals), args.index)) - 1
    document = compose_from_proposal(proposals[index])
    response = await run_analysis(settings, to_analysis_request(document))
    return {"document": asdict(document), "analysis": response.model_dump(exclude_none=True)}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(level=args.log_level or settings.log_level, stream=sys.stderr)

    try:
        result = asyncio.run(dispatch(args, settings))
    except InvalidRequestError as e:
        print(json.dumps({"error": e.message}), file=sys.stderr)
        return 2
    except DigestError as e:
        payload = {"error": e.message}
        if e.diagnostic:
            payload["debug"] = e.diagnostic
        print(json.dumps(payload), file=sys.stderr)
        return 1
    except OSError as e:
        print(json.dumps({"error": f"Could not read document: {e}"}), file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
