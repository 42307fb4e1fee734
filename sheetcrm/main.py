"""Main entry point: serve the HTTP API with uvicorn."""

import logging

import uvicorn

from sheetcrm.api import create_app
from sheetcrm.config import get_settings
from sheetcrm.monitoring import setup_logging, setup_sentry


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    setup_sentry(settings)
    logger = logging.getLogger(__name__)

    if not settings.is_configured:
        logger.warning("GOOGLE_SHEET_ID or credentials not configured; API calls will fail")

    app = create_app(settings)

    logger.info("Starting API on %s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
