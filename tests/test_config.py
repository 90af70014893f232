"""Tests for jsonsmith.config: models and YAML loader."""

import os
from pathlib import Path
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from jsonsmith.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_TEMPLATE,
    config_search_path,
    expand_env,
    load_config,
)
from jsonsmith.config.models import (
    HistoryConfig,
    JsonsmithConfig,
    LLMSettings,
    ServerConfig,
    YamlSettings,
)


# ── Defaults ────────────────────────────────────────────────────────


class TestJsonsmithConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_llm(self, sample_config):
        assert sample_config.llm.provider == "anthropic"
        assert sample_config.llm.model == "claude-haiku-4-5-20251001"
        assert sample_config.llm.max_tokens == 4096

    def test_default_yaml(self, sample_config):
        assert sample_config.yaml.indent == 2
        assert sample_config.yaml.line_width == 120

    def test_default_limits(self, sample_config):
        assert sample_config.limits.max_input_chars == 1_000_000

    def test_default_history(self, sample_config):
        assert sample_config.history.enabled is True
        assert sample_config.history.list_limit == 50

    def test_auth_disabled_by_default(self, sample_config):
        assert sample_config.server.auth_enabled is False


# ── Validation ──────────────────────────────────────────────────────


class TestModelValidation:
    def test_invalid_provider_rejected(self):
        with pytest.raises(ValidationError):
            LLMSettings(provider="badprovider")

    def test_yaml_indent_bounds(self):
        with pytest.raises(ValidationError):
            YamlSettings(indent=0)

    def test_history_limit_positive(self):
        with pytest.raises(ValidationError):
            HistoryConfig(list_limit=0)

    def test_auth_needs_both_credentials(self):
        assert ServerConfig(auth_user="u").auth_enabled is False
        assert ServerConfig(auth_user="u", auth_pass="").auth_enabled is False
        assert ServerConfig(auth_user="u", auth_pass="p").auth_enabled is True


# ── Loader ──────────────────────────────────────────────────────────


class TestExpandEnv:
    @patch.dict(os.environ, {"AUTH_USER": "admin"})
    def test_expands_nested(self):
        raw = {"server": {"auth_user": "${AUTH_USER}"}, "list": ["${AUTH_USER}", 3]}
        assert expand_env(raw) == {
            "server": {"auth_user": "admin"},
            "list": ["admin", 3],
        }

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_var_becomes_empty(self):
        assert expand_env("${NOPE}") == ""

    @patch.dict(os.environ, {}, clear=True)
    def test_fallback_when_unset(self):
        assert expand_env("${PORT:-3000}") == "3000"

    @patch.dict(os.environ, {"PORT": "8080"})
    def test_set_var_beats_fallback(self):
        assert expand_env("http://host:${PORT:-3000}/") == "http://host:8080/"


class TestConfigSearchPath:
    def test_order(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.yaml"))
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_search_path("cli.yaml") == [
            Path("cli.yaml"),
            tmp_path / "env.yaml",
            Path("jsonsmith.yaml"),
            tmp_path / ".jsonsmith" / "config.yaml",
        ]

    def test_without_cli_or_env(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_search_path()[0] == Path("jsonsmith.yaml")


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def _isolated(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    def test_cli_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("log_level: debug\nyaml:\n  indent: 4\n")
        cfg = load_config(str(path))
        assert cfg.log_level == "debug"
        assert cfg.yaml.indent == 4

    def test_defaults_when_nothing_found(self):
        assert load_config() == JsonsmithConfig()

    def test_empty_file_skipped(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")
        (tmp_path / "jsonsmith.yaml").write_text("log_level: error\n")
        assert load_config(str(tmp_path / "empty.yaml")).log_level == "error"

    def test_project_local_file(self, tmp_path):
        (tmp_path / "jsonsmith.yaml").write_text("log_format: json\n")
        assert load_config().log_format == "json"

    def test_user_file(self, tmp_path):
        user = tmp_path / ".jsonsmith" / "config.yaml"
        user.parent.mkdir()
        user.write_text("log_level: warn\n")
        assert load_config().log_level == "warn"

    def test_env_var_beats_project_file(self, tmp_path, monkeypatch):
        (tmp_path / "jsonsmith.yaml").write_text("log_level: error\n")
        env_file = tmp_path / "env.yaml"
        env_file.write_text("log_level: debug\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
        assert load_config().log_level == "debug"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("llm: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(path))

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("log_level: loud\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="top level must be a mapping"):
            load_config(str(path))

    def test_default_template_loads(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AUTH_USER", "admin")
        monkeypatch.setenv("AUTH_PASS", "s3cret")
        monkeypatch.delenv("PORT", raising=False)
        path = tmp_path / "jsonsmith.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        cfg = load_config(str(path))
        assert cfg.server.auth_user == "admin"
        assert cfg.server.auth_enabled is True
        assert cfg.server.port == 3000
        assert cfg.history.db_path == ".jsonsmith/history.db"

    def test_template_reads_port_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        path = tmp_path / "jsonsmith.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        assert load_config(str(path)).server.port == 8080
