"""
NESTCONF - hierarchical, environment-backed settings

Declare namespaces of typed, validated settings resolved from environment
variables, with defaults from files, directories, JSON or YAML.
"""

__version__ = "1.0.0"
__author__ = "NESTCONF Development Team"

from .framework.configuration import (
    Namespace,
    Setting,
    ContextPredicate,
    ValuePredicate,
    MethodName,
    Constant,
    registry,
    register,
    destroy_all,
    reload_all,
    view,
)
from .infrastructure.exceptions import (
    ConfigurationError,
    RequiredValueNotConfigured,
    RequiredDescriptionNotConfigured,
    SettingAlreadyDefined,
    SettingCheckFailed,
    SettingArgumentError,
)

__all__ = [
    "Namespace",
    "Setting",
    "ContextPredicate",
    "ValuePredicate",
    "MethodName",
    "Constant",
    "registry",
    "register",
    "destroy_all",
    "reload_all",
    "view",
    "ConfigurationError",
    "RequiredValueNotConfigured",
    "RequiredDescriptionNotConfigured",
    "SettingAlreadyDefined",
    "SettingCheckFailed",
    "SettingArgumentError",
]
