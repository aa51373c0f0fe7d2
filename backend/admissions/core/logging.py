"""Logging setup driven by the LOG_LEVEL setting."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging for the API process.

    Args:
        level: Logging level name (e.g., "DEBUG", "INFO")
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL echo is controlled by the engine, keep its logger quieter by default
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
