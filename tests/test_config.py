"""Tests for DDLConfig."""

import pytest

from dbml_ddl.config import DDLConfig, get_config, set_config


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)


class TestDDLConfig:

    def test_defaults(self):
        config = DDLConfig()
        assert config.strict is False
        assert config.log_level == "WARNING"
        assert config.encoding == "utf-8"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DBML_DDL_STRICT", "yes")
        monkeypatch.setenv("DBML_DDL_LOG_LEVEL", "debug")
        monkeypatch.setenv("DBML_DDL_ENCODING", "latin-1")
        config = DDLConfig.from_env()
        assert config.strict is True
        assert config.log_level == "DEBUG"
        assert config.encoding == "latin-1"

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
    def test_strict_falsy_values(self, monkeypatch, value):
        monkeypatch.setenv("DBML_DDL_STRICT", value)
        assert DDLConfig.from_env().strict is False

    def test_get_config_is_singleton(self, monkeypatch):
        monkeypatch.delenv("DBML_DDL_STRICT", raising=False)
        assert get_config() is get_config()

    def test_set_config(self):
        custom = DDLConfig(strict=True)
        set_config(custom)
        assert get_config() is custom
