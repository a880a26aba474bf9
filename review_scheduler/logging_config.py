import logging
import structlog

from review_scheduler.config import settings


def configure_logging(level: str = None, json: bool = None) -> None:
    """Configure stdlib logging and structlog for the scheduler.

    Events are emitted as key/value pairs with an ISO timestamp. JSON output is
    the default so logs can be shipped to an aggregator; set ``REVIEW_LOG_JSON``
    to false for readable console lines during local use.
    """
    level = (level or settings.log_level).upper()
    json = settings.log_json if json is None else json

    logging.basicConfig(level=getattr(logging, level, logging.INFO))
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


logger = structlog.get_logger()
