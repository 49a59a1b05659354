"""
Infrastructure layer: exceptions and observability.
"""

from .exceptions import (
    NestConfException,
    ConfigurationError,
    RequiredValueNotConfigured,
    RequiredDescriptionNotConfigured,
    SettingAlreadyDefined,
    SettingCheckFailed,
    SettingArgumentError,
)

__all__ = [
    "NestConfException",
    "ConfigurationError",
    "RequiredValueNotConfigured",
    "RequiredDescriptionNotConfigured",
    "SettingAlreadyDefined",
    "SettingCheckFailed",
    "SettingArgumentError",
]
