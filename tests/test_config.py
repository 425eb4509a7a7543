"""Unit tests for configuration loading.

WHY: Defaults come from the environment, and a typo in TEXTFLOW_WIDTH
must produce a clear error rather than a confusing layout.
"""

import pytest

from textflow import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TEXTFLOW_WIDTH", "TEXTFLOW_POLICY", "TEXTFLOW_TAB_SIZE", "TEXTFLOW_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestWidth:

    def test_default(self):
        assert config.load_width() == 80

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TEXTFLOW_WIDTH", " 72 ")
        assert config.load_width() == 72

    def test_blank_uses_default(self, monkeypatch):
        monkeypatch.setenv("TEXTFLOW_WIDTH", "")
        assert config.load_width() == 80

    def test_not_an_integer(self, monkeypatch):
        monkeypatch.setenv("TEXTFLOW_WIDTH", "wide")
        with pytest.raises(ValueError, match="TEXTFLOW_WIDTH must be an integer"):
            config.load_width()

    def test_too_small(self, monkeypatch):
        monkeypatch.setenv("TEXTFLOW_WIDTH", "0")
        with pytest.raises(ValueError, match="at least 1"):
            config.load_width()


class TestOtherSettings:

    def test_tab_size(self, monkeypatch):
        assert config.load_tab_size() == 4
        monkeypatch.setenv("TEXTFLOW_TAB_SIZE", "8")
        assert config.load_tab_size() == 8

    def test_bad_tab_size(self, monkeypatch):
        monkeypatch.setenv("TEXTFLOW_TAB_SIZE", "-2")
        with pytest.raises(ValueError, match="TEXTFLOW_TAB_SIZE"):
            config.load_tab_size()

    def test_policy(self, monkeypatch):
        assert config.load_policy() == "default"
        monkeypatch.setenv("TEXTFLOW_POLICY", "terminal")
        assert config.load_policy() == "terminal"

    def test_log_level_is_upper_cased(self, monkeypatch):
        assert config.load_log_level() == "WARNING"
        monkeypatch.setenv("TEXTFLOW_LOG_LEVEL", "debug")
        assert config.load_log_level() == "DEBUG"
