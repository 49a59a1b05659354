"""
Predicate variants for the ``required`` and ``activated`` properties.

A property is either a constant, a predicate over the resolved value, a
predicate taking no arguments, or (for ``activated``) the name of a method
invoked on the value.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Constant:
    """A fixed boolean."""
    flag: bool

    def evaluate(self, value: Any) -> bool:
        return bool(self.flag)


@dataclass(frozen=True)
class ValuePredicate:
    """A predicate receiving the resolved setting value."""
    function: Callable[[Any], Any]

    def evaluate(self, value: Any) -> bool:
        return bool(self.function(value))


@dataclass(frozen=True)
class ContextPredicate:
    """A predicate taking no arguments, e.g. consulting other settings."""
    function: Callable[[], Any]

    def evaluate(self, value: Any) -> bool:
        return bool(self.function())


@dataclass(frozen=True)
class MethodName:
    """The name of a method invoked on the value, e.g. ``"isdigit"``."""
    name: str

    def evaluate(self, value: Any) -> bool:
        if value is None:
            return False
        return bool(getattr(value, self.name)())


Predicate = Union[Constant, ValuePredicate, ContextPredicate, MethodName]


def as_predicate(obj: Any, allow_method_names: bool = False) -> Any:
    """
    Convert a user-supplied property into a predicate variant.

    Booleans become ``Constant``, plain callables ``ValuePredicate`` and, when
    allowed, strings ``MethodName``. Variants pass through unchanged and
    anything else is returned as-is.
    """
    if isinstance(obj, (Constant, ValuePredicate, ContextPredicate, MethodName)):
        return obj
    if isinstance(obj, bool):
        return Constant(obj)
    if allow_method_names and isinstance(obj, str):
        return MethodName(obj)
    if callable(obj):
        return ValuePredicate(obj)
    return obj


def is_present(value: Any) -> bool:
    """True for values that are neither None, False nor blank/empty."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    try:
        return len(value) > 0
    except TypeError:
        return True
