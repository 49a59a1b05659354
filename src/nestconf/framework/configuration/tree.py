"""
Tree projection of namespaces and settings for introspection.
"""

import os
from typing import Any, Iterator, List, Optional

from .models import ViewConfiguration
from .namespace import Namespace
from .setting import Setting, UNCHECKED

UTF8_GLYPHS = {'inner': ("├─ ", "│  "), 'last': ("└─ ", "   ")}
ASCII_GLYPHS = {'inner': ("+- ", "|  "), 'last': ("`- ", "   ")}

UTF8_INDICATORS = {
    'sensitive': '🔒', 'required': '🔴', 'configured': '🔧', 'ignored': '🙈',
    'active': '🟢', 'decoding': '⚙️', 'off': '⚪',
    'check_failed': '❌', 'unchecked': '☑️', 'checked': '✅', 'masked': '🤫',
}
ASCII_INDICATORS = {
    'sensitive': 'yes', 'required': 'yes', 'configured': 'yes', 'ignored': 'yes',
    'active': 'yes', 'decoding': 'yes', 'off': 'no',
    'check_failed': 'failed', 'unchecked': 'unchecked', 'checked': 'passed', 'masked': '<masked>',
}


def default_utf8() -> bool:
    return os.environ.get('LANG', '').lower().endswith('utf-8')


class Tree:
    """
    A node of a line-oriented tree rendering.

    Each node has a label and ordered children; ``lines()`` lazily yields the
    label followed by every child's lines indented with branch glyphs.
    """

    def __init__(self, name: str, utf8: Optional[bool] = None):
        self.name = name
        self.utf8 = default_utf8() if utf8 is None else utf8
        self.children: List["Tree"] = []

    def add(self, child: "Tree") -> "Tree":
        self.children.append(child)
        return self

    def lines(self) -> Iterator[str]:
        yield self.name
        glyphs = UTF8_GLYPHS if self.utf8 else ASCII_GLYPHS
        for index, child in enumerate(self.children):
            first, rest = glyphs['inner'] if index < len(self.children) - 1 else glyphs['last']
            for line_number, line in enumerate(child.lines()):
                yield f"{first if line_number == 0 else rest}{line}"

    def to_list(self) -> List[str]:
        return list(self.lines())

    def __iter__(self) -> Iterator[str]:
        return self.lines()

    def __str__(self) -> str:
        return '\n'.join(self.lines())

    @classmethod
    def from_object(cls, obj: Any, config: Optional[ViewConfiguration] = None) -> "Tree":
        """
        Build the tree of a namespace or setting.

        Raises:
            TypeError: If ``obj`` is neither a Namespace nor a Setting
        """
        if config is None:
            config = ViewConfiguration.from_environment()
        if isinstance(obj, Namespace):
            return cls._convert_namespace(obj, config)
        if isinstance(obj, Setting):
            return cls._convert_setting(obj, config)
        raise TypeError("argument needs to be a Namespace or a Setting")

    @classmethod
    def _convert_namespace(cls, namespace: Namespace, config: ViewConfiguration) -> "Tree":
        node = cls(f"{namespace.qualified_name}{_describe(namespace.description)}", utf8=config.utf8)
        node.add(cls(f"prefix {namespace.prefix!r}", utf8=config.utf8))
        settings = namespace.settings
        node.add(cls(f"{len(settings)} settings", utf8=config.utf8))
        for setting in settings.values():
            node.add(cls._convert_setting(setting, config))
        for child in namespace.children:
            node.add(cls._convert_namespace(child, config))
        return node

    @classmethod
    def _convert_setting(cls, setting: Setting, config: ViewConfiguration) -> "Tree":
        indicators = UTF8_INDICATORS if config.utf8 else ASCII_INDICATORS
        node = cls(f"{setting.name}{_describe(setting.description)}", utf8=config.utf8)

        def shown(getter):
            if setting.is_sensitive():
                return indicators['masked']
            return _truncate(repr(getter()), config.truncate_width, '…' if config.utf8 else '...')

        def flag(name, state):
            return indicators[name] if state else indicators['off']

        checked = setting.checked()
        if checked is False or checked is None:
            check_state = indicators['check_failed']
        elif checked is UNCHECKED:
            check_state = indicators['unchecked']
        else:
            check_state = indicators['checked']

        info = [
            ("prefix", repr(setting.prefix)),
            ("env var name", setting.env_var_name()),
            ("env var (orig.)", shown(setting.env_var)),
            ("default", shown(setting.default_value)),
            ("value", shown(setting.value)),
            ("sensitive", flag('sensitive', setting.is_sensitive())),
            ("required", flag('required', setting.is_required())),
            ("configured", flag('configured', setting.is_configured())),
            ("ignored", flag('ignored', setting.is_ignored())),
            ("active", flag('active', setting.is_active())),
            ("decoding", flag('decoding', setting.is_decoding())),
            ("checked", check_state),
        ]
        for label, text in info:
            node.add(cls(f"{label:<16}{text}", utf8=config.utf8))
        return node


def _describe(description: Optional[str]) -> str:
    return f" # {description}" if description else ""


def _truncate(text: str, width: int, ellipsis: str) -> str:
    if len(text) <= width:
        return text
    return text[:width - len(ellipsis)] + ellipsis
