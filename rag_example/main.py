"""Main FastAPI application module for the RAG example.

This module initializes the FastAPI application and sets up the routes
and error handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from rag_example.api.routers import chat as chat_router
from rag_example.api.routers import query as query_router
from rag_example.core import dependencies as core_deps
from rag_example.core.config import Settings, get_settings
from rag_example.core.errors import GenerationUnavailable, RetrievalUnavailable
from rag_example.core.logging_config import build_logging_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting RAG example API...")
    core_deps.reset_singletons()
    settings = get_settings()
    # A missing prompt template is fatal: PromptTemplateMissing aborts startup.
    core_deps.get_prompt_template(settings)
    logger.info("Settings and prompt template loaded.")

    yield

    # Shutdown
    logger.info("Shutting down RAG example API...")
    core_deps.reset_singletons()
    logger.info("Shutdown complete.")


app = FastAPI(
    title="RAG Example API",
    description="Streams chat completions from Ollama and answers questions using retrieved documents.",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(RetrievalUnavailable)
@app.exception_handler(GenerationUnavailable)
async def adapter_unavailable_handler(request: Request, exc: RetrievalUnavailable | GenerationUnavailable) -> JSONResponse:
    """Surfaces adapter failures as 503 with the error kind label."""
    logger.error(f"{exc.label} while handling {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc), "error": exc.label})


app.include_router(chat_router.router)
app.include_router(query_router.router, prefix="/api/v1")


@app.get("/health", response_model=Dict[str, Any])
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Health check endpoint to verify the API is running.

    Returns:
        Dict[str, Any]: Health status information
    """
    return {
        "status": "healthy",
        "version": app.version,
        "environment": settings.environment,
    }


@app.get("/")
async def root() -> Dict[str, str]:
    """Root endpoint that returns basic API information."""
    return {
        "message": "Welcome to the RAG example API",
        "version": app.version,
    }


def run(settings: Settings | None = None) -> None:
    """Runs the app under uvicorn with the package logging configuration."""
    settings = settings or get_settings()
    logger.info(f"Starting Uvicorn server on {settings.api_host}:{settings.api_port} with reload={settings.api_reload}")
    uvicorn.run(
        "rag_example.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_config=build_logging_config(settings.log_level),
        log_level=settings.api_log_level.lower(),
    )


if __name__ == "__main__":
    run()
