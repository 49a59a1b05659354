"""
Structured Logging for NESTCONF

Provides JSON and human-readable formatters for the standard library logging
system, a context filter that tags records with the namespace and setting
under construction, and a helper configuring the ``nestconf`` logger.
"""

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ...framework.configuration.models import LoggingConfiguration

# Context variables for construction tracking
namespace_var: ContextVar[Optional[str]] = ContextVar('namespace', default=None)
setting_var: ContextVar[Optional[str]] = ContextVar('setting', default=None)

ROOT_LOGGER_NAME = "nestconf"

_RESERVED_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRIBUTES and key not in ("namespace", "setting")
    }


class JSONLogFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string"""
        payload = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'namespace': getattr(record, 'namespace', None),
            'setting': getattr(record, 'setting', None),
        }

        extra = _extra_fields(record)
        if extra:
            payload['extra'] = extra

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload['exception'] = {
                'type': type(exc).__name__,
                'message': str(exc),
                'module': type(exc).__module__
            }

        # Remove None values to keep logs clean
        payload = {k: v for k, v in payload.items() if v is not None}
        return json.dumps(payload, default=str, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter for development/debugging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as human-readable string"""
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        base_msg = f"[{timestamp}] {record.levelname}: {record.getMessage()}"

        namespace = getattr(record, 'namespace', None)
        setting = getattr(record, 'setting', None)
        if namespace:
            base_msg += f" [namespace={namespace}]"
        if setting:
            base_msg += f" [setting={setting}]"

        extra = _extra_fields(record)
        if extra:
            extra_str = ', '.join(f"{k}={v}" for k, v in extra.items())
            base_msg += f" [{extra_str}]"

        return base_msg


class SettingContextFilter(logging.Filter):
    """Adds the namespace and setting under construction to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'namespace'):
            record.namespace = namespace_var.get()
        if not hasattr(record, 'setting'):
            record.setting = setting_var.get()
        return True


@contextmanager
def setting_context(namespace: Optional[str] = None, setting: Optional[str] = None):
    """Context manager tracking the namespace/setting being built."""
    namespace_token = namespace_var.set(namespace) if namespace is not None else None
    setting_token = setting_var.set(setting) if setting is not None else None
    try:
        yield
    finally:
        if setting_token is not None:
            setting_var.reset(setting_token)
        if namespace_token is not None:
            namespace_var.reset(namespace_token)


def configure_logging(config: Optional["LoggingConfiguration"] = None) -> logging.Logger:
    """Configure the ``nestconf`` logger from a logging configuration."""
    if config is None:
        from ...framework.configuration.models import LoggingConfiguration
        config = LoggingConfiguration()

    formatter = JSONLogFormatter() if config.format == "json" else HumanReadableFormatter()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, '_nestconf_handler', False):
            logger.removeHandler(handler)
            handler.close()

    handlers = []
    if config.output in ("console", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))
    if config.output in ("file", "both"):
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding='utf-8'))

    for handler in handlers:
        handler._nestconf_handler = True
        handler.setFormatter(formatter)
        handler.addFilter(SettingContextFilter())
        logger.addHandler(handler)

    return logger


def get_current_namespace() -> Optional[str]:
    """Get the namespace currently under construction"""
    return namespace_var.get()


def get_current_setting() -> Optional[str]:
    """Get the setting currently under construction"""
    return setting_var.get()
