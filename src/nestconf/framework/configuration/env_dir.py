"""
Settings loaded from a directory of one-value-per-file entries (envdir style).
"""

import glob
import logging
from pathlib import Path

from ...infrastructure.exceptions import SettingAlreadyDefined
from .namespace import Namespace
from .sources import file

logger = logging.getLogger(__name__)


def chomp(value):
    """Remove one trailing line ending (``\\r\\n``, ``\\n`` or ``\\r``)."""
    if not isinstance(value, str):
        return value
    for ending in ('\r\n', '\n', '\r'):
        if value.endswith(ending):
            return value[:-len(ending)]
    return value


def load_dotenv_dir(namespace: Namespace, *globs: str) -> Namespace:
    """
    Declare a setting for every file matching ``globs``.

    Each setting is named after the upper-cased file name, is not prefixed,
    defaults to the file contents without the trailing newline, and is
    required and sensitive. Names already defined in the tree are skipped.
    """
    for pattern in globs:
        for path in sorted(glob.glob(pattern)):
            contents = file(path, required=True)
            name = Path(path).name.upper()
            directory = str(Path(path).parent)

            def define(s, contents=contents, name=name, directory=directory):
                s.prefix = ''
                s.description = f"Value of {name!r} from {directory!r}"
                s.default = contents
                s.decode = chomp
                s.required = True
                s.sensitive = True

            try:
                namespace.declare_setting(name, define)
            except SettingAlreadyDefined as e:
                logger.debug(f"Skipping {path}: {e.message}")
    return namespace
