import logging
from typing import Optional

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_configured = False


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Configure the ``nodues`` logger hierarchy with a single console handler.

    Calling it more than once is a no-op so the app factory and scripts can
    both call it.
    """
    global _configured
    if _configured:
        return

    level = _LEVELS.get(log_level.upper(), logging.INFO)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format or _LOG_FORMAT))

    root = logging.getLogger("nodues")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    _configured = True
    root.debug("Logging configured at %s", logging.getLevelName(level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
