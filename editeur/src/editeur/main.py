"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from editeur import __version__
from editeur.config.settings import Settings, get_settings
from editeur.di.container import DIContainer
from editeur.domain.exceptions import EditeurException
from editeur.infrastructure.monitoring import get_logger, setup_logging
from editeur.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    editeur_exception_handler,
)
from editeur.presentation.api.routes import health, payers, publish


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[DIContainer] = None,
) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)
        container: Optional pre-built DI container (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = container.settings if container else get_settings()

    json_logs = settings.JSON_LOGS or settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Editeur application (ENV={settings.ENV})")

    if container is None:
        container = DIContainer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            f"Editeur started: publisher={container.publisher_address} "
            f"fee={settings.STORE_FEE_WEI} sui_network={settings.SUI_NETWORK}"
        )

        yield

        logger.info("Shutting down Editeur application...")
        await container.shutdown()
        logger.info("Editeur application shutdown complete")

    app = FastAPI(
        title="Editeur API",
        description="Prepaid cross-chain credits for content publishing",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    # Middleware chain (last added runs first)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Exception handlers
    app.add_exception_handler(EditeurException, editeur_exception_handler)

    # Register routes
    app.include_router(health.router)
    app.include_router(payers.router)
    app.include_router(publish.router)

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Editeur application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn editeur.main:get_app --factory
    """
    return create_app()


# For uvicorn editeur.main:app; created on first access
_app: Optional[FastAPI] = None


def __getattr__(name: str):
    """Module-level __getattr__ for lazy app initialization."""
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def main():
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "editeur.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.PORT,
    )


if __name__ == "__main__":
    main()
