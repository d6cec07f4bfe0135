"""FastAPI application entry point for Proposal Digest.

This module initializes the FastAPI application and registers all route handlers.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proposal_digest import __version__
from proposal_digest.api.errors import register_exception_handlers
from proposal_digest.api.routes import analyse, health, imports
from proposal_digest.config import get_settings
from proposal_digest.logging_config import setup_logging

settings = get_settings()

# Initialize structured logging on module import
setup_logging(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Proposal Digest API",
    description="Import governance proposals and summarise them into decision briefs",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

ALLOWED_ORIGINS = settings.cors_origins()
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)

register_exception_handlers(app)

# Register route handlers
app.include_router(health.router)
app.include_router(analyse.router)
app.include_router(imports.router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting FastAPI application", extra={"port": 8000})

    uvicorn.run(
        "proposal_digest.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
