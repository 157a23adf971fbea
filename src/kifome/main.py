"""Kifome HTTP service: app construction, middleware and top-level routes."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from kifome import __version__
from kifome.config import settings
from kifome.logging_config import LoggingContext, configure_logging, get_logger
from kifome.routers import shopping_lists_router

# Logging must be set up before the first request is handled
configure_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log service start and stop."""
    logger.info(f"Starting Kifome API ({settings.environment})")
    yield
    logger.info("Shutting down Kifome API")


app = FastAPI(
    title="Kifome API",
    description="Ingredient consolidation for generated recipes and weekly shopping lists",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Tag log records of a request with its id."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(shopping_lists_router)


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe."""
    return {"status": "ok", "service": "kifome-api"}


@app.get("/")
async def root() -> dict:
    """Service name, version and useful links."""
    return {
        "name": "Kifome API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
