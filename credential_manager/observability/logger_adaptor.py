"""Loguru-backed logger shared by the credential manager and its sources."""

import sys
import threading
from typing import Any, Dict, Optional

from loguru import logger as _loguru_logger

from credential_manager.constants import LOG_LEVEL

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <blue>[{level}]</blue> "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)

_loggers: Dict[str, "CredentialLoggerAdapter"] = {}
_configure_lock = threading.Lock()
_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default sink with the credential-manager stderr sink.

    Safe to call more than once; only the first call has an effect.
    """
    global _configured

    with _configure_lock:
        if _configured:
            return
        _loguru_logger.remove()
        _loguru_logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)
        _configured = True


class CredentialLoggerAdapter:
    """Minimal logger that forwards to loguru with the logger name bound."""

    def __init__(self, name: str) -> None:
        self.logger_name = name
        self._log = _loguru_logger.bind(logger_name=name)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.info(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.warning(msg, *args, **kwargs)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.debug(msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.exception(msg, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> CredentialLoggerAdapter:
    """Get or create a logger adapter.

    Args:
        name (str, optional): Logger name. Defaults to this module's name.

    Returns:
        CredentialLoggerAdapter: Logger instance for the specified name
    """
    configure_logging()
    if name is None:
        name = __name__
    if name not in _loggers:
        _loggers[name] = CredentialLoggerAdapter(name)
    return _loggers[name]
