"""
Lazily-initialized, cached and settable attributes.

Every configurable property of settings and namespaces is a ``LazyField``
descriptor. Values are cached per owner instance; defaults are computed on
first read and then kept until the field is explicitly reassigned.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Generic, Optional, TypeVar

from ...infrastructure.exceptions import SettingArgumentError

T = TypeVar('T')


class _Unset:
    """Marker for arguments that were not supplied."""

    def __repr__(self) -> str:
        return 'UNSET'


UNSET: Any = _Unset()

# The object whose definition block is currently being evaluated
_build_target: ContextVar[Optional[object]] = ContextVar('build_target', default=None)


@contextmanager
def setter_mode(target: object):
    """
    Evaluate a definition block for ``target`` in setter mode.

    While active, reading a field of ``target`` that was never assigned raises
    ``SettingArgumentError``. The previous state is restored on exit.
    """
    token = _build_target.set(target)
    try:
        yield target
    finally:
        _build_target.reset(token)


def in_setter_mode(target: object) -> bool:
    """Check whether ``target`` is currently being defined."""
    return _build_target.get() is target


class LazyField(Generic[T]):
    """
    Descriptor for a lazily computed, cached, settable attribute.

    Args:
        default: Static default returned when nothing was assigned
        default_factory: Called with the owner on first read, result cached
        transform: Applied to explicitly assigned values only
    """

    def __init__(
        self,
        default: Optional[T] = None,
        *,
        default_factory: Optional[Callable[[Any], Optional[T]]] = None,
        transform: Optional[Callable[[T], T]] = None
    ):
        if default is not None and default_factory is not None:
            raise SettingArgumentError("only either default or default_factory allowed")
        self.default = default
        self.default_factory = default_factory
        self.transform = transform
        self.name: Optional[str] = None
        self._slot: Optional[str] = None

    def __set_name__(self, owner, name: str) -> None:
        self.name = name
        self._slot = f"_lazy_{name}"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self.get(instance)

    def __set__(self, instance, value) -> None:
        self.set(instance, value)

    def is_set(self, instance) -> bool:
        """Check whether a value (assigned or computed) is cached."""
        return instance.__dict__.get(self._slot) is not None

    def get(self, instance) -> Optional[T]:
        """Return the cached value, computing the default if necessary."""
        result = instance.__dict__.get(self._slot)
        if result is not None:
            return result

        if in_setter_mode(instance):
            raise SettingArgumentError(
                f"need an argument for the setting {self.name!r} of {type(instance).__name__}, was None"
            )

        if self.default is not None:
            result = self.default
        elif self.default_factory is not None:
            result = self.default_factory(instance)

        instance.__dict__[self._slot] = result
        return result

    def set(self, instance, value: Any = UNSET, *, factory: Any = UNSET) -> Optional[T]:
        """
        Assign a value, or a callable via ``factory`` (the block form).

        Raises:
            SettingArgumentError: If both or neither of value and factory are given
        """
        if value is not UNSET and factory is not UNSET:
            raise SettingArgumentError("only either block or positional argument allowed")
        if factory is not UNSET:
            if not callable(factory):
                raise SettingArgumentError(f"factory for {self.name!r} must be callable")
            value = factory
        if value is UNSET:
            raise SettingArgumentError(f"need an argument for the setting {self.name!r}")

        if value is not None and self.transform is not None:
            value = self.transform(value)
        instance.__dict__[self._slot] = value
        return value

    def reset(self, instance) -> None:
        """Drop the cached value so the default is computed again."""
        instance.__dict__.pop(self._slot, None)

    def __repr__(self) -> str:
        return f"LazyField({self.name!r})"


def upcase(value: Any) -> Any:
    """Upper-case strings, leave anything else untouched."""
    return value.upper() if isinstance(value, str) else value
