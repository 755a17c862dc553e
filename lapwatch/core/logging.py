"""
Logging configuration with request_id support.
"""
import logging
import sys
from typing import Optional

# Sampling ticks log from the scheduler thread, so records name their thread
DEFAULT_FORMAT = "%(asctime)s - %(name)s [%(threadName)s] - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class RequestIDFormatter(logging.Formatter):
    """Formatter that inserts the request_id of HTTP-driven records."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        request_id = getattr(record, "request_id", None)
        if not request_id:
            return formatted

        # timestamp - name [thread] - level - [request_id] - message
        parts = formatted.split(" - ", 3)
        if len(parts) == 4:
            return f"{parts[0]} - {parts[1]} - {parts[2]} - [{request_id}] - {parts[3]}"
        return f"[{request_id}] {formatted}"


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Setup application logging configuration.

    Args:
        log_level: Logging level name (defaults to INFO)
        log_format: Log format string; when omitted the request_id aware
            formatter is used
    """
    level = log_level or "INFO"
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if log_format:
        formatter = logging.Formatter(log_format)
    else:
        formatter = RequestIDFormatter(fmt=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
