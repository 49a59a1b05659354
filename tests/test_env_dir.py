"""
Tests for declaring settings from a directory of value files.
"""

import os
from unittest.mock import patch

import pytest

from nestconf.framework.configuration import Namespace, load_dotenv_dir


@pytest.fixture
def env_dir(tmp_path):
    directory = tmp_path / "env"
    directory.mkdir()
    (directory / "database_url").write_text("postgres://localhost\n")
    (directory / "api_key").write_text("s3cr3t\r\n")
    return directory


@pytest.fixture
def app():
    return Namespace("app_config", description="Application settings")


class TestLoadDotenvDir:
    """Test envdir style loading."""

    def test_settings_declared_per_file(self, app, env_dir):
        with patch.dict(os.environ, {}, clear=True):
            load_dotenv_dir(app, str(env_dir / "*"))

            assert app.env_var_names() == {"DATABASE_URL", "API_KEY"}
            assert app.get("DATABASE_URL") == "postgres://localhost"
            assert app["API_KEY"] == "s3cr3t"

    def test_settings_are_sensitive_and_required(self, app, env_dir):
        load_dotenv_dir(app, str(env_dir / "*"))
        setting = app.setting("API_KEY")
        assert setting.is_sensitive() is True
        assert setting.is_required() is True
        assert setting.prefix == ""
        assert "env" in setting.description

    def test_environment_overrides_file(self, app, env_dir):
        with patch.dict(os.environ, {"API_KEY": "from-env"}):
            load_dotenv_dir(app, str(env_dir / "api_*"))
            assert app.get("API_KEY") == "from-env"

    def test_existing_names_skipped(self, app, env_dir):
        """Test files colliding with declared settings are ignored."""
        @app.define("API_KEY")
        def api_key(s):
            s.prefix = ""
            s.description = "API key"
            s.default = "declared"

        with patch.dict(os.environ, {}, clear=True):
            load_dotenv_dir(app, str(env_dir / "*"))
            assert app.setting("API_KEY") is api_key
            assert app.get("API_KEY") == "declared"
            assert app.get("DATABASE_URL") == "postgres://localhost"

    def test_multiple_globs(self, app, tmp_path, env_dir):
        other = tmp_path / "other"
        other.mkdir()
        (other / "port").write_text("8080")

        load_dotenv_dir(app, str(env_dir / "database_*"), str(other / "*"))

        assert app.env_var_names() == {"DATABASE_URL", "PORT"}

    def test_only_one_line_ending_removed(self, app, tmp_path):
        """Test values keep intentional trailing blank lines."""
        directory = tmp_path / "blank"
        directory.mkdir()
        (directory / "banner").write_text("hello\n\n")

        load_dotenv_dir(app, str(directory / "*"))

        assert app.get("BANNER") == "hello\n"

    def test_no_matches(self, app, tmp_path):
        assert load_dotenv_dir(app, str(tmp_path / "nothing" / "*")) is app
        assert app.settings == {}
