"""YAML config loading with env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import CompassConfig

logger = logging.getLogger(__name__)

# Overrides the model when the google provider is selected.
MODEL_OVERRIDE_ENV = "GEMINI_MODEL"


def load_config(cli_path: str | None = None) -> CompassConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./compass.yaml"),
        Path.home() / ".compass" / "config.yaml",
    ]

    config = CompassConfig()
    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                config = CompassConfig(**raw)
                logger.debug("Loaded config from %s", path)
                break
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return _apply_model_override(config)


def _apply_model_override(config: CompassConfig) -> CompassConfig:
    override = os.environ.get(MODEL_OVERRIDE_ENV)
    if not override or config.llm.provider != "google":
        return config
    llm = config.llm.model_copy(update={"model": override})
    return config.model_copy(update={"llm": llm})


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `compass config init`
DEFAULT_CONFIG_TEMPLATE = """\
# compass.yaml

# LLM Provider
llm:
  provider: "google"           # google | anthropic | openai
  model: "gemini-2.5-flash"    # GEMINI_MODEL env var overrides this for google
  api_key_env: "GEMINI_API_KEY"
  max_tokens: 4096

# Repository context
vcs:
  provider: "github"
  token_env: "GITHUB_TOKEN"    # optional; anonymous access when unset
  primary_branch: "main"
  fallback_branch: "master"
  issue_limit: 100

# Pull request descriptions
pr:
  # requirements: "Follow standard professional open-source PR practices."
  # requirements_file: "pr_config.json"
  sections:
    summary: true
    checklist: true
    breaking_changes: true
    screenshots: true
    linked_issues: true

# Logging
log_level: "info"              # debug | info | warn | error
"""
