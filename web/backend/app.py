#!/usr/bin/env python3
"""
Buddy Finder API - FastAPI Application

Matches users into learning buddies by rubric-score compatibility and
manages the request -> connection lifecycle.

Usage:
    uvicorn web.backend.app:app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.exceptions import ServiceException
from .config import get_config
from .exceptions import (
    service_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    general_exception_handler
)
from .routers import (
    matches_router,
    match_requests_router,
    connections_router,
    notifications_router,
    profile_router
)
from .routers.matches import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()


def create_app() -> FastAPI:
    """Build the FastAPI app with handlers and routers registered."""
    app = FastAPI(
        title="Buddy Finder API",
        description="API for finding learning buddies and managing connections",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure rate limiting
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(matches_router)
    app.include_router(match_requests_router)
    app.include_router(connections_router)
    app.include_router(notifications_router)
    app.include_router(profile_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "buddy-finder-api"}

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting Buddy Finder API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
