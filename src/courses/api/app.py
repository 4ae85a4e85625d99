"""
Main FastAPI application for the Courses API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, settings
from ..database.connection import close_connection, get_connection, get_connection_state
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "Starting Courses API...",
            environment=app_settings.environment,
            graphql_path=app_settings.graphql_path,
        )

        if app_settings.db_connect_on_startup:
            # Fails startup on DatabaseConnectionError
            await get_connection()

        yield

        logger.info("Shutting down Courses API...")
        await close_connection()

    app = FastAPI(
        title="Courses API",
        description="GraphQL API over a course catalog stored in MongoDB",
        version=__version__,
        lifespan=lifespan,
        debug=app_settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware, graphql_path=app_settings.graphql_path)

    if app_settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials="*" not in app_settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "database": get_connection_state().value,
        }

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        validate_schema()
        app.include_router(create_graphql_router(app_settings), prefix="")
        logger.info(
            "GraphQL endpoint initialized successfully",
            endpoint=app_settings.graphql_path,
            graphiql=not app_settings.is_production,
        )
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    from ..cli import cli

    cli(["serve"])
