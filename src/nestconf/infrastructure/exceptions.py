"""
Structured Exception Hierarchy

Provides the configuration error family raised while settings are declared,
confirmed and resolved, with contextual information for diagnostics.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class NestConfException(Exception):
    """
    Base exception class for all NESTCONF-specific exceptions.

    Provides structured error information including error codes
    and context data.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(NestConfException):
    """Raised when configuration-related errors occur."""

    error_code = "CONFIG_ERROR"

    def __init__(
        self,
        message: str,
        env_var_name: Optional[str] = None,
        setting_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        if env_var_name:
            context['env_var_name'] = env_var_name
        if setting_name:
            context['setting_name'] = setting_name

        super().__init__(
            message=message,
            error_code=kwargs.pop('error_code', type(self).error_code),
            context=context,
            **kwargs
        )


class RequiredValueNotConfigured(ConfigurationError):
    """Raised when a required setting or a required external source has no value."""

    error_code = "REQUIRED_VALUE_NOT_CONFIGURED"


class RequiredDescriptionNotConfigured(ConfigurationError):
    """Raised when a setting or its namespace lacks a description at confirmation."""

    error_code = "REQUIRED_DESCRIPTION_NOT_CONFIGURED"


class SettingAlreadyDefined(ConfigurationError):
    """Raised when a setting collides on its env var name with an admitted one."""

    error_code = "SETTING_ALREADY_DEFINED"

    def __init__(self, message: str, previous_setting: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', {})
        if previous_setting:
            context['previous_setting'] = previous_setting
        super().__init__(message, context=context, **kwargs)
        self.previous_setting = previous_setting


class SettingCheckFailed(ConfigurationError):
    """Raised when a setting's check evaluates to a strict failure."""

    error_code = "SETTING_CHECK_FAILED"


class SettingArgumentError(ConfigurationError, ValueError):
    """Raised on malformed builder usage."""

    error_code = "SETTING_ARGUMENT_ERROR"
