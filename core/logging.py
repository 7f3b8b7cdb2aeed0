"""
Library Logging

Every module logs under the "intrinio" logger namespace. Importing the
library only attaches a NullHandler to that logger; it never touches the
root logger or any handler the host application has installed.

Usage:
    from core.logging import get_logger
    logger = get_logger(__name__)

    logger.debug("Detailed debugging information")
    logger.info("General informational messages")

Scripts that own their process opt in to console output:
    from core.logging import setup_logging
    setup_logging()                      # level from settings (DEBUG when settings.debug)
    setup_logging(log_level="WARNING")

Log Levels (from most to least verbose):
    DEBUG    - Request/response traces (e.g., "API Request: GET /prices | Params: ...")
    INFO     - General informational messages (e.g., "Calling prices")
    WARNING  - Non-2xx responses, malformed bodies, cancellations
    ERROR    - Transport failures

Credentials and Authorization headers are never passed to these helpers.
"""

import logging
import sys
from typing import Optional, Sequence, Tuple


LOGGER_NAME = "intrinio"

logger = logging.getLogger(LOGGER_NAME)
if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
    logger.addHandler(logging.NullHandler())

# Installed by setup_logging, replaced on repeated calls
_console_handler: Optional[logging.Handler] = None


def resolve_log_level(config=None) -> str:
    """
    Level name taken from settings: DEBUG when `debug` is on, else `log_level`.

    Example:
        >>> resolve_log_level(Settings(debug=True, log_level="WARNING"))
        'DEBUG'
    """
    if config is None:
        from core.config import settings as config

    if config.debug:
        return "DEBUG"
    return config.log_level.upper()


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    include_timestamp: bool = True,
    include_module: bool = True
) -> logging.Logger:
    """
    Send library log records to stdout.

    Meant for scripts and applications that own the process; the library
    itself never calls it. Only the "intrinio" logger is configured, so the
    root logger's handlers are left as they are.

    Args:
        log_level: Logging level name (defaults to resolve_log_level())
        log_format: Custom log format string (uses default if None)
        include_timestamp: Include timestamp in log messages
        include_module: Include module name in log messages

    Returns:
        logging.Logger: The configured "intrinio" logger

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Client started")
        2024-01-01 12:00:00 [INFO] intrinio: Client started
    """
    if log_level is None:
        log_level = resolve_log_level()

    if log_format is None:
        format_parts = []

        if include_timestamp:
            format_parts.append("%(asctime)s")

        format_parts.append("[%(levelname)s]")

        if include_module:
            format_parts.append("%(name)s")

        format_parts.append("%(message)s")

        log_format = " ".join(format_parts)

    global _console_handler
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stdout)
    _console_handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(_console_handler)
    logger.propagate = False

    set_log_level(log_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module or component.

    Example:
        # In intrinio/api_client.py:
        logger = get_logger(__name__)  # Creates "intrinio.intrinio.api_client"
    """
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """
    Change the library log level at runtime.

    Unknown level names fall back to INFO.
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(method: str, path: str, params: Optional[Sequence[Tuple[str, str]]] = None) -> None:
    """
    Log an API request with consistent formatting.

    Args:
        method: HTTP method ("GET" or "POST")
        path: API endpoint path
        params: Encoded request parameters (optional)

    Example:
        >>> log_api_request("GET", "/prices", [("identifier", "AAPL")])
        [DEBUG] API Request: GET /prices | Params: [('identifier', 'AAPL')]
    """
    if params:
        logger.debug(f"API Request: {method} {path} | Params: {list(params)}")
    else:
        logger.debug(f"API Request: {method} {path}")


def log_api_response(method: str, path: str, status: int, response_time: Optional[float] = None) -> None:
    """
    Log an API response with status and timing information.

    Example:
        >>> log_api_response("GET", "/prices", 200, 0.342)
        [DEBUG] API Response: GET /prices | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {method} {path} | Status: {status}{time_str}")
