import logging
import sys
from typing import Optional

LOGGER_NAME = "mixradio"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _make_handler(handler: logging.Handler, level: int, format_string: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``mixradio`` logger.

    Request URIs and response statuses are logged at DEBUG; failed calls
    at WARNING, with ``uri``, ``status_code`` and ``error_response_body``
    attached to the record for handlers that want them.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file to log to in addition to stdout
        format_string: Optional custom format string
        force: Replace handlers even if the logger is already configured

    Returns:
        The configured logger
    """
    format_string = format_string or DEFAULT_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), numeric_level, format_string))
        if log_file:
            logger.addHandler(_make_handler(logging.FileHandler(log_file), numeric_level, format_string))

    # Keep library output out of the root logger
    logger.propagate = False

    return logger
