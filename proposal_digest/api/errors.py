"""Exception handlers mapping DigestError to JSON error bodies.

InvalidRequestError becomes 400 `{"error"}`; every other DigestError
becomes 500 `{"error", "debug"}` with the truncated diagnostic.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from proposal_digest.exceptions import DigestError, InvalidRequestError

logger = logging.getLogger(__name__)


async def digest_error_handler(request: Request, exc: DigestError) -> JSONResponse:
    """Render a DigestError raised by a route."""
    if isinstance(exc, InvalidRequestError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    logger.error(
        f"{request.url.path} failed: {exc}",
        extra={"source": exc.service, "upstream_status": getattr(exc, "upstream_status", None)},
    )
    content = {"error": exc.message}
    if exc.diagnostic:
        content["debug"] = exc.diagnostic
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the DigestError handler to an application."""
    app.add_exception_handler(DigestError, digest_error_handler)
