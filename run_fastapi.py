"""
Pipeline Compiler Startup Script

Starts the FastAPI application with uvicorn using the configured settings.
"""

import logging

import uvicorn

from backend.config import get_settings


def main():
    """Main entry point for the FastAPI application."""
    settings = get_settings()
    logger = logging.getLogger(__name__)

    logger.info("[START] Starting %s", settings.APP_NAME)
    logger.info("[ENV] Environment: %s", "Development" if settings.DEBUG else "Production")
    logger.info("[HOST] Host: %s:%s", settings.HOST, settings.PORT)
    logger.info("[STORE] Projects: %s", settings.PROJECT_STORAGE_TYPE)

    if settings.DEBUG:
        logger.info("[DEV] Running in development mode with auto-reload")
        uvicorn.run(
            "backend.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=True,
            reload_dirs=["backend", "pipeline_compiler"],
            log_level="info",
            access_log=True,
            use_colors=True,
        )
    else:
        logger.info("[PROD] Running in production mode")
        uvicorn.run(
            "backend.main:app",
            host=settings.HOST,
            port=settings.PORT,
            workers=settings.WORKERS,
            log_level="warning",
            access_log=False,
            server_header=False,
            date_header=False,
        )


if __name__ == "__main__":
    main()
