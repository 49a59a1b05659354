"""
Process-wide registry of top-level namespaces and the sources defining them.
"""

import importlib
import logging
import runpy
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class NamespaceRegistry:
    """
    Registry mapping namespaces to their originating source descriptors.

    A source descriptor is either an importable module name, reloaded in place
    with ``importlib.reload``, or a path to a Python file, re-executed with
    ``runpy.run_path``. All mutations, including setting admission in
    namespaces, share one re-entrant lock.
    """

    def __init__(self):
        self._sources: Dict[Any, str] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """The lock shared by registry mutations and setting admission."""
        return self._lock

    def register(self, namespace, source: str) -> None:
        """Record ``namespace -> source`` once."""
        with self._lock:
            if namespace not in self._sources:
                self._sources[namespace] = source
                logger.debug(
                    "Namespace registered",
                    extra={"namespace_name": namespace.qualified_name, "source": source}
                )

    def source_for(self, namespace) -> Optional[str]:
        with self._lock:
            return self._sources.get(namespace)

    def namespaces(self) -> List[Any]:
        """Registered namespaces in registration order."""
        with self._lock:
            return list(self._sources)

    def find(self, name: str):
        """Latest registered namespace with the given qualified name."""
        with self._lock:
            for namespace in reversed(list(self._sources)):
                if namespace.qualified_name == name:
                    return namespace
        return None

    def destroy_all(self) -> List[str]:
        """
        Drain the registry, detaching every namespace from its scope.

        Returns:
            The originating sources in removal order
        """
        with self._lock:
            sources = []
            while self._sources:
                namespace = next(iter(self._sources))
                source = self._sources.pop(namespace)
                namespace.detach()
                self._unbind(namespace, source)
                sources.append(source)
            logger.debug("Namespaces destroyed", extra={"sources": sources})
            return sources

    def reload_all(self) -> List[str]:
        """
        Destroy all namespaces, then re-execute their sources in order.

        A source declaring several namespaces is executed once.

        Returns:
            The distinct sources in first-seen order
        """
        with self._lock:
            sources = list(dict.fromkeys(self.destroy_all()))
            for source in sources:
                try:
                    self._execute(source)
                except Exception as e:
                    logger.error(f"Failed to reload settings source {source}: {e}")
                    raise
            logger.info("Settings reloaded", extra={"sources": sources})
            return sources

    def remove(self, namespace) -> None:
        with self._lock:
            self._sources.pop(namespace, None)

    def clear(self) -> None:
        """Forget every registration without touching the namespaces."""
        with self._lock:
            self._sources.clear()

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, namespace) -> bool:
        return namespace in self._sources

    @staticmethod
    def _unbind(namespace, source: str) -> None:
        module = sys.modules.get(source)
        if module is None:
            return
        for attribute, value in list(vars(module).items()):
            if value is namespace:
                delattr(module, attribute)

    @staticmethod
    def _execute(source: str) -> None:
        if source in sys.modules:
            importlib.reload(sys.modules[source])
        elif Path(source).is_file():
            runpy.run_path(source)
        else:
            importlib.import_module(source)


registry = NamespaceRegistry()


def register(namespace, source: str) -> None:
    registry.register(namespace, source)


def destroy_all() -> List[str]:
    return registry.destroy_all()


def reload_all() -> List[str]:
    return registry.reload_all()
