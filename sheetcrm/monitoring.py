"""Monitoring utilities: logging setup and error tracking."""

import logging
import sys

import sentry_sdk

from sheetcrm.config import Settings

logger = logging.getLogger(__name__)

_sentry_enabled = False


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )

    # Reduce noise from libraries
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    global _sentry_enabled
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
            send_default_pii=False,
        )
        _sentry_enabled = True
        logger.info("Sentry initialized for environment: %s", settings.environment)


def capture_exception(error: Exception, context: dict | None = None) -> None:
    """Capture exception to Sentry if configured."""
    if _sentry_enabled:
        with sentry_sdk.new_scope() as scope:
            if context:
                for key, value in context.items():
                    scope.set_extra(key, value)
            sentry_sdk.capture_exception(error)
    logger.error(
        "error_captured",
        extra={"error_type": type(error).__name__, "error": str(error), "context": context},
        exc_info=error,
    )
