"""Locate, read and validate ``jsonsmith.yaml``.

Search order: the ``--config`` path, ``$JSONSMITH_CONFIG``,
``./jsonsmith.yaml``, ``~/.jsonsmith/config.yaml``. The first file that
exists and is not empty wins; with none, every setting takes its default.

String values may reference the environment as ``${VAR}`` (empty when
unset) or ``${VAR:-fallback}``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import JsonsmithConfig

CONFIG_ENV_VAR = "JSONSMITH_CONFIG"
PROJECT_CONFIG = Path("jsonsmith.yaml")
USER_CONFIG = Path(".jsonsmith") / "config.yaml"

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_path(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest precedence first."""
    candidates = [cli_path, os.environ.get(CONFIG_ENV_VAR)]
    paths = [Path(p).expanduser() for p in candidates if p]
    paths.append(PROJECT_CONFIG)
    paths.append(Path.home() / USER_CONFIG)
    return paths


def expand_env(value: Any) -> Any:
    """Substitute ``${VAR}`` / ``${VAR:-fallback}`` in every string of a YAML tree."""
    if isinstance(value, str):
        return _ENV_REF.sub(_env_lookup, value)
    if isinstance(value, dict):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    return value


def _env_lookup(match: re.Match[str]) -> str:
    name, fallback = match.group(1), match.group(2)
    found = os.environ.get(name)
    if found:
        return found
    return fallback or ""


def _read_mapping(path: Path) -> dict[str, Any] | None:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")
    return raw


def load_config(cli_path: str | None = None) -> JsonsmithConfig:
    """Load the first non-empty config file on the search path."""
    for path in config_search_path(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        try:
            return JsonsmithConfig.model_validate(expand_env(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
    return JsonsmithConfig()

# Default YAML template for `jsonsmith config init`
DEFAULT_CONFIG_TEMPLATE = """\
# jsonsmith.yaml

# LLM Provider (used by `fix`)
llm:
  provider: "anthropic"        # anthropic | openai
  model: "claude-haiku-4-5-20251001"
  api_key_env: "ANTHROPIC_API_KEY"
  max_tokens: 4096
  timeout: 60

# YAML output
yaml:
  indent: 2
  line_width: 120

# Input limits
limits:
  max_input_chars: 1000000

# History store
history:
  enabled: true
  db_path: ".jsonsmith/history.db"
  list_limit: 50
  label_length: 50

# HTTP server
server:
  host: "0.0.0.0"
  port: "${PORT:-3000}"
  # basic auth is enabled only when both are non-empty
  auth_user: "${AUTH_USER}"
  auth_pass: "${AUTH_PASS}"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
