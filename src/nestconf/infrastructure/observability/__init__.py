"""
Observability - structured logging with construction context.
"""

from .logging import (
    JSONLogFormatter,
    HumanReadableFormatter,
    SettingContextFilter,
    setting_context,
    configure_logging,
    get_current_namespace,
    get_current_setting,
)

__all__ = [
    "JSONLogFormatter",
    "HumanReadableFormatter",
    "SettingContextFilter",
    "setting_context",
    "configure_logging",
    "get_current_namespace",
    "get_current_setting",
]
