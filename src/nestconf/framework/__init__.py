"""
Framework layer: the settings resolution engine.
"""

from .configuration import Namespace, Setting, registry, reload_all, destroy_all, view

__all__ = [
    "Namespace",
    "Setting",
    "registry",
    "reload_all",
    "destroy_all",
    "view",
]
