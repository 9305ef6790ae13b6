"""FastAPI application reporting the most recent borg archives."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from borgrecent import __version__
from borgrecent.core.errors import PipelineError
from borgrecent.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = getattr(app.state, "settings", None)
    setup_logging(settings.log_level if settings else None)
    logger = logging.getLogger(__name__)
    if settings is not None:
        logger.info(
            "service_started | root=%s borg=%s artifact_lookup=%s concurrency=%s",
            settings.root,
            settings.borg_binary,
            settings.artifact_lookup,
            settings.concurrency,
        )

    yield

    logger.info("service_stopped")


app = FastAPI(
    title="Borg Recent API",
    description="Most recent borg archive per repository",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> PlainTextResponse:
    logging.getLogger(__name__).error(
        "recent_request_failed | path=%s error_type=%s error=%s",
        request.url.path,
        type(exc).__name__,
        exc,
    )
    return PlainTextResponse(str(exc), status_code=500)


# Include routers
from borgrecent.api import health, recent  # noqa: E402

# Mount health endpoints for infra probes (/health, /ready)
app.include_router(health.router)
app.include_router(recent.router)
