"""
Tests for the setting override helper.
"""

import pytest

from nestconf.framework.configuration import Namespace
from nestconf.testing import override_settings


def described(default):
    def definition(s):
        s.description = "A setting"
        s.default = default
    return definition


@pytest.fixture
def app():
    namespace = Namespace("app_config", description="Application settings")
    namespace.declare_setting("URL", described("http://localhost"))
    database = namespace.declare_child("database", description="Database")
    database.declare_setting("POOL", described("5"))
    return namespace


class TestOverrideSettings:
    """Test temporary overrides of declared values."""

    def test_override_and_restore(self, app):
        with override_settings(app, {"URL": "http://test", "database.POOL": "1"}) as namespace:
            assert namespace is app
            assert app.get("URL") == "http://test"
            assert app.get_if_active("URL") == "http://test"
            assert app.database.POOL == "1"

        assert app.get("URL") == "http://localhost"
        assert app.database.get("POOL") == "5"

    def test_setting_object_unchanged(self, app):
        setting = app.setting("URL")
        with override_settings(app, {"URL": "http://test"}):
            assert app.setting("URL") is setting
            assert setting.value() == "http://localhost"

    def test_restored_after_error(self, app):
        with pytest.raises(RuntimeError):
            with override_settings(app, {"URL": "http://test"}):
                raise RuntimeError("boom")
        assert app.get("URL") == "http://localhost"

    def test_unknown_setting(self, app):
        with pytest.raises(KeyError, match="no setting 'MISSING'"):
            with override_settings(app, {"MISSING": "x"}):
                pass

    def test_unknown_child(self, app):
        with pytest.raises(KeyError, match="no child 'cache'"):
            with override_settings(app, {"cache.URL": "x"}):
                pass
        assert app.get("URL") == "http://localhost"
