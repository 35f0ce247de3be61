"""Main entry point for the File Tree FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API over a single shared in-memory file tree.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import get_settings, initialize_file_tree, shutdown_file_tree
from api.exceptions import (
    FileTreeOperationError,
    file_tree_operation_handler,
    generic_exception_handler,
    runtime_error_handler,
    validation_exception_handler,
)
from api.routes import tree as tree_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Creates the shared file tree at startup and frees it at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting file tree API")
    initialize_file_tree(settings)

    yield

    logger.info("Shutting down file tree API")
    shutdown_file_tree()


app = FastAPI(
    title="File Tree",
    description="API for an in-memory hierarchical file tree",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(FileTreeOperationError, file_tree_operation_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(tree_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the File Tree API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
