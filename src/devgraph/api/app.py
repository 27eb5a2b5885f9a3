"""
Main FastAPI application for the devgraph backend
"""

from contextlib import asynccontextmanager

import strawberry
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..database.connection import (
    dispose_database,
    get_database_url,
    init_database,
    test_database_connection,
)
from ..developers.repository import DeveloperRepository
from ..errors import ConfigurationError
from ..graphql.schema import create_schema, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(
    debug=settings.debug,
    log_level=settings.log_level,
    console=settings.console_logs,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    The service refuses to start without a reachable database.
    """
    logger.info("Starting devgraph API...")
    init_database(get_database_url())

    ok, error = await test_database_connection()
    if not ok:
        logger.error("Database is unreachable", error=error)
        await dispose_database()
        raise ConfigurationError(error or "database is unreachable")

    logger.info(
        "server running",
        url=f"http://{settings.api_host}:{settings.api_port}/graphql",
    )

    yield

    logger.info("Shutting down devgraph API...")
    await dispose_database()


def create_app(
    repository: DeveloperRepository | None = None,
    schema: strawberry.Schema | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        repository: storage gateway handed to resolvers (defaults to the pooled one)
        schema: GraphQL schema to serve (defaults to ``create_schema()``)
    """
    app = FastAPI(
        title="devgraph API",
        description="GraphQL API for managing developer profiles",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # The schema is built and validated once, then only read
    if schema is None:
        schema = create_schema()
    logger.info("Validating GraphQL schema...")
    validate_schema(schema)

    app.state.schema = schema
    app.state.repository = repository or DeveloperRepository()

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from .endpoints import graphql

    app.include_router(graphql.router, tags=["GraphQL"])
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "devgraph.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
