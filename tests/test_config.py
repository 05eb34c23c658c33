"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from validata.config import DEFAULT_MAX_VALUE_LENGTH, ValidataConfig, get_config, set_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("VALIDATA_MAX_VALUE_LENGTH", raising=False)
    monkeypatch.delenv("VALIDATA_RULES_PATH", raising=False)
    set_config(None)
    yield
    set_config(None)


class TestFromEnv:
    def test_defaults(self):
        config = ValidataConfig.from_env()
        assert config.max_value_length == DEFAULT_MAX_VALUE_LENGTH
        assert config.rules_path is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("VALIDATA_MAX_VALUE_LENGTH", "12")
        monkeypatch.setenv("VALIDATA_RULES_PATH", "rules/user.yaml")
        config = ValidataConfig.from_env()
        assert config.max_value_length == 12
        assert config.rules_path == Path("rules/user.yaml")

    def test_non_integer_length(self, monkeypatch):
        monkeypatch.setenv("VALIDATA_MAX_VALUE_LENGTH", "long")
        with pytest.raises(ValueError, match="must be an integer"):
            ValidataConfig.from_env()

    def test_length_too_small(self, monkeypatch):
        monkeypatch.setenv("VALIDATA_MAX_VALUE_LENGTH", "3")
        with pytest.raises(ValueError, match="at least 4"):
            ValidataConfig.from_env()


class TestShorten:
    def test_short_value_unchanged(self):
        assert ValidataConfig(max_value_length=10).shorten("short") == "short"

    def test_long_value_truncated(self):
        assert ValidataConfig(max_value_length=10).shorten("abcdefghijklmnop") == "abcdefg..."

    def test_non_string(self):
        assert ValidataConfig().shorten(42) == "42"


class TestGlobalConfig:
    def test_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = ValidataConfig(max_value_length=8)
        set_config(config)
        assert get_config() is config

    def test_reset_rereads_environment(self, monkeypatch):
        get_config()
        monkeypatch.setenv("VALIDATA_MAX_VALUE_LENGTH", "20")
        set_config(None)
        assert get_config().max_value_length == 20
