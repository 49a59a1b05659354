"""
Source backends supplying setting defaults from files, directories, JSON and YAML.
"""

import io
import json
import os
import yaml
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ...infrastructure.exceptions import RequiredValueNotConfigured, SettingArgumentError

PathLike = Union[str, Path]

ENVIRONMENT_VARIABLE = "NESTCONF_ENV"


class SettingSource(ABC):
    """Abstract base class for setting sources."""

    @abstractmethod
    def read(self, locator: PathLike, required: bool = False) -> Any:
        """
        Read the raw value at ``locator``.

        Returns None when the locator does not resolve.

        Raises:
            RequiredValueNotConfigured: If ``required`` and the locator does not resolve
        """
        pass


class FileSource(SettingSource):
    """Plain text file source."""

    def __init__(self, strip: bool = False):
        self.strip = strip

    def read(self, locator: PathLike, required: bool = False) -> Optional[str]:
        path = Path(locator)
        if path.exists():
            value = path.read_text(encoding='utf-8')
            return value.strip() if self.strip else value
        if required:
            raise RequiredValueNotConfigured(f"file required at path {str(locator)!r}")
        return None


class JSONSource(SettingSource):
    """JSON file source."""

    def __init__(self, object_hook: Optional[Callable[[dict], Any]] = None):
        self.object_hook = object_hook

    def read(self, locator: PathLike, required: bool = False) -> Any:
        path = Path(locator)
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f, object_hook=self.object_hook)
        if required:
            raise RequiredValueNotConfigured(f"JSON file required at path {str(locator)!r}")
        return None


class YAMLSource(SettingSource):
    """
    YAML file source.

    Args:
        env: None for the whole document, a string for that top-level
            section, or True for the section named by ``NESTCONF_ENV``
    """

    def __init__(self, env: Union[None, bool, str] = None):
        self.env = env

    def read(self, locator: PathLike, required: bool = False) -> Any:
        path = Path(locator)
        if not path.exists():
            if required:
                raise RequiredValueNotConfigured(f"YAML file required at path {str(locator)!r}")
            return None

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        env = self.env
        if not env:
            return data
        if env is True:
            env = os.environ.get(ENVIRONMENT_VARIABLE)
            if not env:
                raise RequiredValueNotConfigured(
                    f"need an environment string specified, via env var {ENVIRONMENT_VARIABLE} or manually",
                    env_var_name=ENVIRONMENT_VARIABLE
                )
        return (data or {}).get(env)


class ConfigDir(SettingSource):
    """
    Configuration directory ``<root>/<name>``.

    The root is ``root_path``, else the value of an environment variable
    (``env_var`` given directly or looked up by ``env_var_name``), else
    ``~/.config``.
    """

    def __init__(
        self,
        name: str,
        root_path: Optional[PathLike] = None,
        env_var: Optional[str] = None,
        env_var_name: Optional[str] = None
    ):
        if env_var is not None and env_var_name is not None:
            raise SettingArgumentError(
                "need either the value of an env_var or the name env_var_name of an env_var"
            )
        if env_var is None and env_var_name is not None:
            env_var = os.environ.get(env_var_name)
        root = root_path or env_var or (Path(os.environ['HOME']) / '.config')
        self.directory_path = Path(root) / name

    def join(self, path: PathLike) -> Path:
        return self.directory_path / path

    __truediv__ = join

    def read(
        self,
        locator: PathLike,
        required: bool = False,
        default: Optional[str] = None,
        reader: Optional[Callable[[io.TextIOBase], Any]] = None
    ) -> Any:
        """
        Read a file in the directory, optionally through ``reader``.

        A missing file yields ``default`` (passed through ``reader`` as a
        stream when both are given).
        """
        full_path = self.join(locator)
        if full_path.exists():
            with open(full_path, 'r', encoding='utf-8') as f:
                return reader(f) if reader else f.read()
        if required:
            raise RequiredValueNotConfigured(f"require file at {str(full_path)!r}")
        if default is not None and reader is not None:
            return reader(io.StringIO(default))
        return default

    def __str__(self) -> str:
        return str(self.directory_path)


def file(path: PathLike, required: bool = False, strip: bool = False) -> Optional[str]:
    """Contents of the file at ``path``."""
    return FileSource(strip=strip).read(path, required=required)


def json_file(
    path: PathLike,
    required: bool = False,
    object_hook: Optional[Callable[[dict], Any]] = None
) -> Any:
    """Parsed JSON document at ``path``."""
    return JSONSource(object_hook=object_hook).read(path, required=required)


def yaml_file(path: PathLike, required: bool = False, env: Union[None, bool, str] = None) -> Any:
    """Parsed YAML document (or environment section) at ``path``."""
    return YAMLSource(env=env).read(path, required=required)


def dir_file(
    name: str,
    path: PathLike,
    env_var: Optional[str] = None,
    env_var_name: Optional[str] = None,
    default: Optional[str] = None,
    required: bool = False
) -> Any:
    """Contents of ``path`` inside the configuration directory ``name``."""
    config_dir = ConfigDir(name, env_var=env_var, env_var_name=env_var_name)
    return config_dir.read(path, required=required, default=default)
