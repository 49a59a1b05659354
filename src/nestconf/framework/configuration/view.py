"""
Introspection surface writing rendered trees to a writer, stdout or a pager.
"""

import logging
import shlex
import subprocess
import sys
from typing import Any, Optional, TextIO

from .models import ViewConfiguration
from .tree import Tree

logger = logging.getLogger(__name__)


def view(obj: Any, writer: Optional[TextIO] = None, config: Optional[ViewConfiguration] = None) -> None:
    """
    Render ``obj`` (a Namespace or Setting).

    Output goes to ``writer`` if given. Otherwise it is written to stdout when
    it fits the terminal height and piped through the pager command otherwise.
    """
    if config is None:
        config = ViewConfiguration.from_environment()
    output = Tree.from_object(obj, config).to_list()
    text = '\n'.join(output) + '\n'

    if writer is not None:
        writer.write(text)
    elif len(output) < config.terminal_lines:
        sys.stdout.write(text)
    else:
        _page(text, config.pager)


def _page(text: str, pager: str) -> None:
    logger.debug(f"Paging output through {pager}")
    process = subprocess.Popen(shlex.split(pager), stdin=subprocess.PIPE, text=True)
    process.communicate(text)
