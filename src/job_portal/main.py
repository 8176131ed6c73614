"""Job portal entry point."""

import uvicorn

from .config import LoggingConfig, get_settings

# Configure logging based on environment
LoggingConfig.configure()

from .app import create_app  # noqa: E402

logger = LoggingConfig.get_logger(__name__)

# Create the FastAPI application
app = create_app()


def main() -> None:
    """Run the application."""
    settings = get_settings()

    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")

    uvicorn.run(
        "job_portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level="debug" if settings.debug else "info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
