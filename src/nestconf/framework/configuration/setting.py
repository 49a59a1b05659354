"""
A single configuration entry resolved from the environment or a default.
"""

import logging
import os
import re
from typing import Any, Callable, Optional, TextIO, TYPE_CHECKING

from ...infrastructure.exceptions import (
    RequiredDescriptionNotConfigured,
    RequiredValueNotConfigured,
    SettingCheckFailed,
)
from ...infrastructure.observability.logging import setting_context
from .lazy_field import LazyField, UNSET, setter_mode, upcase
from .predicates import (
    Constant,
    ContextPredicate,
    MethodName,
    ValuePredicate,
    as_predicate,
    is_present,
)

if TYPE_CHECKING:
    from .namespace import Namespace

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r'::|\.')


class _Unchecked:
    """Result of ``checked()`` for settings without a check: passes, but is not ``True``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return 'UNCHECKED'


UNCHECKED = _Unchecked()


class Setting:
    """
    Configuration setting backed by an environment variable.

    A setting is created once by its namespace, which evaluates the
    definition callable in setter mode, derives the environment variable name
    from the prefix chain and confirms the setting right after admission.

    Properties (all ``LazyField`` descriptors):
        prefix: Prepended to the key to form the env var name ("" opts out)
        description: Human readable description, required at confirmation
        default: Value, or zero-argument callable, used when the env var is unset
        decode: Callable converting the raw value, or None
        check: Callable taking the setting, False/None fails confirmation
        required: Bool, value predicate or ``ContextPredicate``
        activated: Bool, method name or predicate deciding ``is_active()``
        sensitive: Mask values in introspection output
        ignored: Skip the environment lookup entirely
    """

    prefix = LazyField(transform=upcase)
    description = LazyField()
    default = LazyField()
    decode = LazyField()
    check = LazyField()
    required = LazyField(False)
    activated = LazyField(True)
    sensitive = LazyField(False)
    ignored = LazyField(False)

    def __init__(
        self,
        key: str,
        parent_namespace: Optional["Namespace"] = None,
        prefix: Optional[str] = None,
        definition: Optional[Callable[["Setting"], Any]] = None
    ):
        self.key = key
        self._parent_namespace = parent_namespace
        self.prefix = prefix

        if definition is not None:
            with setting_context(
                namespace=parent_namespace.qualified_name if parent_namespace else None,
                setting=key
            ):
                with setter_mode(self):
                    definition(self)

    @property
    def parent_namespace(self) -> Optional["Namespace"]:
        """The namespace owning this setting."""
        return self._parent_namespace

    @property
    def name(self) -> str:
        """Qualified name, e.g. ``app_config.database.URL``."""
        if self._parent_namespace is None:
            return self.key
        return f"{self._parent_namespace.qualified_name}.{self.key}"

    def env_var_name(self) -> str:
        """Environment variable name derived from prefix and key."""
        prefix = self.prefix
        parts = [prefix.rstrip('_') if prefix else '', self.key]
        return _SEPARATORS.sub('_', '_'.join(part for part in parts if part))

    def env_var(self) -> Optional[str]:
        """Current raw value of the environment variable."""
        return os.environ.get(self.env_var_name())

    def configured_value(self) -> Optional[str]:
        """The environment value unless the setting is ignored."""
        if self.ignored:
            return None
        return self.env_var()

    def is_configured(self) -> bool:
        return self.configured_value() is not None

    def default_value(self) -> Any:
        """The default, calling it (once) when it is a callable."""
        default = self.default
        if not callable(default):
            return default
        thunk, result = self.__dict__.get('_default_result', (None, UNSET))
        if thunk is not default or result is UNSET:
            result = default()
            self._default_result = (default, result)
        return result

    def configured_value_or_default_value(self) -> Any:
        value = self.configured_value()
        if value is None:
            value = self.default_value()
        return value

    def value(self) -> Any:
        """The resolved value, decoded if a decoder is configured."""
        return self._decoded_value(self.configured_value_or_default_value())

    def value_provided(self) -> bool:
        return self.configured_value_or_default_value() is not None

    def is_required(self) -> bool:
        required = as_predicate(self.required)
        if isinstance(required, (Constant, ContextPredicate)):
            return required.evaluate(None)
        if isinstance(required, ValuePredicate):
            return required.evaluate(self.value())
        return bool(required)

    def is_active(self) -> bool:
        activated = as_predicate(self.activated, allow_method_names=True)
        if isinstance(activated, Constant):
            return activated.flag is True and is_present(self.value())
        if isinstance(activated, (MethodName, ValuePredicate)):
            return activated.evaluate(self.value())
        if isinstance(activated, ContextPredicate):
            return activated.evaluate(None)
        return False

    def checked(self) -> Any:
        """Result of the check, or ``UNCHECKED`` if there is none."""
        check = self.check
        if check is None:
            return UNCHECKED
        return check(self)

    def is_sensitive(self) -> bool:
        return bool(self.sensitive)

    def is_ignored(self) -> bool:
        return bool(self.ignored)

    def is_decoding(self) -> bool:
        return callable(self.decode)

    def confirm(self) -> "Setting":
        """
        Validate the setting once after construction.

        Raises:
            RequiredDescriptionNotConfigured: Namespace or setting lacks a description
            RequiredValueNotConfigured: Required but neither configured nor defaulted
            SettingCheckFailed: The check returned False or None
        """
        namespace = self._parent_namespace
        if namespace is not None and not is_present(namespace.description):
            raise RequiredDescriptionNotConfigured(
                f"required description for namespace {namespace.qualified_name} not configured",
                setting_name=self.name
            )
        if not is_present(self.description):
            raise RequiredDescriptionNotConfigured(
                f"required description for setting {self.env_var_name()} not configured",
                env_var_name=self.env_var_name(),
                setting_name=self.name
            )
        if self.is_required() and not self.value_provided():
            raise RequiredValueNotConfigured(
                f"required value for {self.env_var_name()} not configured",
                env_var_name=self.env_var_name(),
                setting_name=self.name
            )
        result = self.checked()
        if result is False or result is None:
            raise SettingCheckFailed(
                f"check failed for {self.name} setting",
                env_var_name=self.env_var_name(),
                setting_name=self.name
            )

        logger.debug("Setting confirmed", extra={"env_var_name": self.env_var_name()})
        return self

    def view(self, writer: Optional[TextIO] = None) -> None:
        """Render this setting's tree to ``writer`` or the terminal."""
        from .view import view
        view(self, writer=writer)

    def __str__(self) -> str:
        from .tree import Tree
        return str(Tree.from_object(self))

    def __repr__(self) -> str:
        return f"<Setting {self.name} env_var_name={self.env_var_name()!r}>"

    def _decoded_value(self, value: Any) -> Any:
        decode = self.decode
        if callable(decode):
            return decode(value)
        return value
