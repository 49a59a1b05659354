"""
Hierarchical containers of settings with prefix inheritance.
"""

import inspect
import logging
import re
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, TextIO

from ...infrastructure.exceptions import SettingAlreadyDefined, SettingArgumentError
from .lazy_field import LazyField, upcase
from .registry import NamespaceRegistry, registry as default_registry
from .setting import Setting

logger = logging.getLogger(__name__)


def underscore(name: str) -> str:
    """Convert ``AppConfig``/``app-config``/``app.config`` to ``app_config``."""
    name = re.sub(r'::|[.\-\s]+', '_', name)
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
    return name.lower()


@dataclass(frozen=True)
class SettingEntry:
    """Snapshot of a setting taken when it was declared."""
    value: Any
    active_value: Any
    setting: Setting


class Namespace:
    """
    Namespace of settings and nested namespaces.

    A root namespace's prefix defaults to its upper-cased, underscored name.
    Nested namespaces inherit the nearest ancestor prefix joined with their
    own name segment unless given an explicit prefix. Settings inherit the
    effective prefix of the namespace they are declared in.

    Example:
        app = Namespace("app_config", description="Application settings")

        @app.define("URL")
        def url(s):
            s.description = "Service URL"
            s.required = True
    """

    description = LazyField()
    prefix = LazyField(
        transform=upcase,
        default_factory=lambda ns: underscore(ns.name).upper() if ns.parent is None else None
    )

    def __init__(
        self,
        name: str,
        *,
        description: Optional[str] = None,
        prefix: Optional[str] = None,
        parent: Optional["Namespace"] = None,
        source: Optional[str] = None,
        registry: Optional[NamespaceRegistry] = None
    ):
        self.name = name
        self.parent = parent
        if registry is None:
            registry = parent._registry if parent is not None else default_registry
        self._registry = registry
        self._children: Dict[str, "Namespace"] = {}
        self._settings: Dict[str, Setting] = {}
        self._entries: Dict[str, SettingEntry] = {}

        if description is not None:
            self.description = description
        if prefix is not None:
            self.prefix = prefix

        if parent is None:
            source = source or _caller_source(inspect.currentframe())
            if source:
                self._registry.register(self, source)

    @property
    def qualified_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.qualified_name}.{self.name}"

    @property
    def settings(self) -> Dict[str, Setting]:
        """Settings declared directly in this namespace, keyed by env var name."""
        return dict(self._settings)

    @property
    def entries(self) -> Dict[str, SettingEntry]:
        """Setting snapshots declared directly in this namespace, keyed by setting key."""
        return dict(self._entries)

    @property
    def children(self) -> List["Namespace"]:
        """Child namespaces in declaration order."""
        return list(self._children.values())

    def declare_child(
        self,
        name: str,
        definition: Optional[Callable[["Namespace"], Any]] = None,
        *,
        description: Optional[str] = None,
        prefix: Optional[str] = None
    ) -> "Namespace":
        """
        Declare a nested namespace, or reopen the existing child of that name.

        Args:
            name: Name segment of the child
            definition: Optional callable populating the child
            description: Child description
            prefix: Explicit prefix, otherwise inherited

        Returns:
            The new or reopened child namespace

        Raises:
            SettingArgumentError: Reopening a child with a different prefix
        """
        with self._registry.lock:
            child = self._children.get(name)
            if child is not None:
                if prefix is not None and upcase(prefix) != child.prefix:
                    raise SettingArgumentError(
                        f"namespace {child.qualified_name} already declared with prefix {child.prefix!r}"
                    )
                if description is not None:
                    child.description = description
            else:
                child = Namespace(name, description=description, parent=self)
                if prefix is None:
                    prefix = '_'.join(
                        part for part in (self.effective_prefix(), underscore(name).upper()) if part
                    )
                child.prefix = prefix
                self._children[name] = child

        if definition is not None:
            definition(child)
        return child

    def effective_prefix(self) -> Optional[str]:
        """Nearest non-None prefix of this namespace or its ancestors."""
        namespace = self
        while namespace is not None:
            prefix = namespace.prefix
            if prefix is not None:
                return prefix
            namespace = namespace.parent
        return None

    def declare_setting(
        self,
        name: str,
        definition: Optional[Callable[[Setting], Any]] = None
    ) -> Setting:
        """
        Declare, admit and confirm a setting.

        Raises:
            SettingAlreadyDefined: The env var name is taken in this tree
            RequiredDescriptionNotConfigured: Missing namespace/setting description
            RequiredValueNotConfigured: Required setting without a value
            SettingCheckFailed: The setting's check failed
        """
        with self._registry.lock:
            setting = Setting(
                name,
                parent_namespace=self,
                prefix=self.effective_prefix(),
                definition=definition
            )
            env_var_name = setting.env_var_name()

            previous_setting = self.outer_configuration().setting_for(env_var_name)
            if previous_setting is not None:
                raise SettingAlreadyDefined(
                    f"setting for env var {env_var_name} already defined in {previous_setting.name}",
                    previous_setting=previous_setting.name,
                    env_var_name=env_var_name,
                    setting_name=setting.name
                )

            self._settings[env_var_name] = setting
            try:
                setting.confirm()
                value = setting.value()
                active_value = value if setting.is_active() else None
            except Exception:
                del self._settings[env_var_name]
                logger.debug(
                    "Setting rejected",
                    extra={"env_var_name": env_var_name},
                    exc_info=True
                )
                raise
            self._entries[name] = SettingEntry(value, active_value, setting)

        logger.debug("Setting admitted", extra={"env_var_name": env_var_name})
        return setting

    def define(self, name: str) -> Callable[[Callable[[Setting], Any]], Setting]:
        """Decorator form of ``declare_setting``."""
        def decorator(definition: Callable[[Setting], Any]) -> Setting:
            return self.declare_setting(name, definition)
        return decorator

    def setting(self, key: str) -> Setting:
        """The raw setting declared under ``key``."""
        return self._entry(key).setting

    def get(self, key: str) -> Any:
        """The value of ``key`` as resolved at declaration."""
        return self._entry(key).value

    def get_if_active(self, key: str) -> Any:
        """The value of ``key`` if the setting was active at declaration, else None."""
        return self._entry(key).active_value

    def outer_configuration(self) -> "Namespace":
        """The top-level namespace of this tree."""
        namespace = self
        while namespace.parent is not None:
            namespace = namespace.parent
        return namespace

    def nested_configurations(self) -> List["Namespace"]:
        return self.children

    def each_nested_configuration(self) -> Iterator["Namespace"]:
        """Depth-first traversal starting with this namespace, in declaration order."""
        pending = [self]
        visited = set()
        while pending:
            namespace = pending.pop()
            if id(namespace) in visited:
                continue
            visited.add(id(namespace))
            for child in reversed(namespace.nested_configurations()):
                if id(child) not in visited:
                    pending.append(child)
            yield namespace

    def all_configurations(self) -> List["Namespace"]:
        return list(self.each_nested_configuration())

    def setting_for(self, env_var_name: str) -> Optional[Setting]:
        """Find the setting for ``env_var_name`` in this subtree."""
        env_var_name = str(env_var_name)
        for namespace in self.each_nested_configuration():
            setting = namespace._settings.get(env_var_name)
            if setting is not None:
                return setting
        return None

    def env_var_names(self) -> Set[str]:
        names: Set[str] = set()
        for namespace in self.each_nested_configuration():
            names.update(namespace._settings)
        return names

    def env_vars(self) -> Dict[str, Any]:
        """Resolved values of every setting in this subtree, by env var name."""
        result = {}
        for namespace in self.each_nested_configuration():
            for env_var_name, setting in namespace._settings.items():
                result[env_var_name] = setting.value()
        return result

    def setting_value_for(self, env_var_name: str) -> Any:
        setting = self.setting_for(env_var_name)
        return setting.value() if setting is not None else None

    __getitem__ = setting_value_for

    def detach(self) -> None:
        """Remove this namespace from its parent's scope."""
        parent = self.parent
        if parent is not None and parent._children.get(self.name) is self:
            del parent._children[self.name]

    def destroy(self) -> None:
        """Detach this namespace and drop its registry entry."""
        with self._registry.lock:
            self.detach()
            self._registry.remove(self)

    def view(self, obj: Any = None, writer: Optional[TextIO] = None) -> None:
        """Render this namespace (or ``obj``) to ``writer`` or the terminal."""
        from .view import view
        view(self if obj is None else obj, writer=writer)

    def __str__(self) -> str:
        from .tree import Tree
        return str(Tree.from_object(self))

    def __repr__(self) -> str:
        return f"<Namespace {self.qualified_name} prefix={self.prefix!r}>"

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        children = self.__dict__.get('_children', {})
        if name in children:
            return children[name]
        entries = self.__dict__.get('_entries', {})
        if name in entries:
            return entries[name].value
        raise AttributeError(f"{type(self).__name__} {self.__dict__.get('name')!r} has no child or setting {name!r}")

    def _entry(self, key: str) -> SettingEntry:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"no setting {key!r} in namespace {self.qualified_name}") from None


def _caller_source(frame) -> Optional[str]:
    """Module name, or file path, of the code declaring a root namespace."""
    caller = frame.f_back if frame is not None else None
    if caller is None:
        return None
    module_name = caller.f_globals.get('__name__')
    file_path = caller.f_globals.get('__file__')
    if module_name and module_name != '__main__':
        module = sys.modules.get(module_name)
        if module is not None and getattr(module, "__spec__", None) is not None:
            return module_name
    return file_path
