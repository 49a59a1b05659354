"""
Reload entry points for host applications.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional

from .registry import NamespaceRegistry, registry as default_registry

logger = logging.getLogger(__name__)


def reload_hook(registry: Optional[NamespaceRegistry] = None) -> List[str]:
    """Callback for host lifecycle events: reload every registered namespace."""
    if registry is None:
        registry = default_registry
    return registry.reload_all()


class SourceWatcher:
    """
    Polls the files behind registered sources and reloads on change.

    Only started explicitly by the host application.
    """

    def __init__(self, interval: float = 1.0, registry: Optional[NamespaceRegistry] = None):
        self.interval = interval
        self._registry = registry if registry is not None else default_registry
        self._modified: Dict[Path, float] = {}
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def source_paths(self) -> List[Path]:
        """Files behind the currently registered sources."""
        paths = []
        for namespace in self._registry.namespaces():
            source = self._registry.source_for(namespace)
            if source is None:
                continue
            module = sys.modules.get(source)
            path = getattr(module, '__file__', None) if module is not None else source
            if path and Path(path).is_file() and Path(path) not in paths:
                paths.append(Path(path))
        return paths

    def has_changed(self) -> bool:
        """Check if any source file was modified since the last call."""
        changed = False
        for path in self.source_paths():
            current_modified = path.stat().st_mtime
            previous = self._modified.get(path)
            self._modified[path] = current_modified
            if previous is not None and previous != current_modified:
                changed = True
        return changed

    def check(self) -> bool:
        """Reload if a source changed; returns whether a reload happened."""
        if self.has_changed():
            logger.info("Settings source changed, reloading...")
            reload_hook(self._registry)
            return True
        return False

    def start(self) -> None:
        if self._thread is not None:
            return
        self.has_changed()
        self._stop.clear()
        self._thread = threading.Thread(target=self._worker, name="SettingsSourceWatcher", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is not None:
            self._stop.set()
            self._thread.join(timeout=5.0)
            self._thread = None
            logger.info("Settings source watcher stopped")

    def is_running(self) -> bool:
        return self._thread is not None

    def _worker(self) -> None:
        while not self._stop.is_set():
            try:
                self.check()
                self._stop.wait(self.interval)
            except Exception as e:
                logger.error(f"Error while watching settings sources: {e}")
                self._stop.wait(self.interval * 5)
