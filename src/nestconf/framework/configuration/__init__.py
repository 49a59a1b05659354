"""
Settings Resolution Engine

Hierarchical namespaces of environment-backed settings with prefix
inheritance, lazy defaults, validation on declaration, reloadable sources and
tree introspection.
"""

from .lazy_field import LazyField, setter_mode, UNSET

from .predicates import (
    Constant,
    ValuePredicate,
    ContextPredicate,
    MethodName
)

from .setting import Setting, UNCHECKED

from .namespace import Namespace, SettingEntry

from .registry import (
    NamespaceRegistry,
    registry,
    register,
    destroy_all,
    reload_all
)

from .models import LoggingConfiguration, ViewConfiguration

from .tree import Tree

from .view import view

from .sources import (
    SettingSource,
    FileSource,
    JSONSource,
    YAMLSource,
    ConfigDir,
    file,
    json_file,
    yaml_file,
    dir_file
)

from .env_dir import load_dotenv_dir

from .reload import reload_hook, SourceWatcher

__all__ = [
    # Fields
    'LazyField',
    'setter_mode',
    'UNSET',

    # Predicates
    'Constant',
    'ValuePredicate',
    'ContextPredicate',
    'MethodName',

    # Model
    'Setting',
    'UNCHECKED',
    'Namespace',
    'SettingEntry',

    # Registry
    'NamespaceRegistry',
    'registry',
    'register',
    'destroy_all',
    'reload_all',

    # Models
    'LoggingConfiguration',
    'ViewConfiguration',

    # Introspection
    'Tree',
    'view',

    # Sources
    'SettingSource',
    'FileSource',
    'JSONSource',
    'YAMLSource',
    'ConfigDir',
    'file',
    'json_file',
    'yaml_file',
    'dir_file',
    'load_dotenv_dir',

    # Reload
    'reload_hook',
    'SourceWatcher'
]
