"""
Logging infrastructure.

One place that decides the log format for the whole service.
"""
import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the process.

    Args:
        level: Level name such as "INFO" or "DEBUG"
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
