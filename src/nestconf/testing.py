"""
Test helpers for code reading setting values.
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Tuple

from .framework.configuration.namespace import Namespace, SettingEntry


def _resolve(namespace: Namespace, dotted_key: str) -> Tuple[Namespace, str]:
    *path, key = dotted_key.split('.')
    target = namespace
    for segment in path:
        children = {child.name: child for child in target.children}
        if segment not in children:
            raise KeyError(f"namespace {target.qualified_name} has no child {segment!r}")
        target = children[segment]
    if key not in target.entries:
        raise KeyError(f"namespace {target.qualified_name} has no setting {key!r}")
    return target, key


@contextmanager
def override_settings(namespace: Namespace, values: Dict[str, Any]):
    """
    Temporarily replace setting values read through ``get``/``get_if_active``.

    Keys are setting keys relative to ``namespace``, dotted for nested
    namespaces (``"database.URL"``).

    Raises:
        KeyError: If a key does not name a declared setting
    """
    originals: List[Tuple[Namespace, str, SettingEntry]] = []
    resolved = [(_resolve(namespace, dotted_key), value) for dotted_key, value in values.items()]
    try:
        for (target, key), value in resolved:
            entry = target._entries[key]
            originals.append((target, key, entry))
            target._entries[key] = SettingEntry(value, value, entry.setting)
        yield namespace
    finally:
        for target, key, entry in reversed(originals):
            target._entries[key] = entry
