"""Configuration loading and validation for PR Reviewer."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pr_reviewer.errors import ConfigurationError

DEFAULT_MODEL_NAME = "openai/gpt-4o"
DEFAULT_MODEL_ENDPOINT = "https://models.github.ai/inference"
DEFAULT_PROMPT_PATH = "review-prompt.md"


@dataclass
class GitHubConfig:
    """GitHub integration configuration."""

    token: str
    repository: str = ""
    event_path: str = ""
    base_url: str | None = None  # For GitHub Enterprise

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo_name(self) -> str:
        return self.repository.split("/", 1)[1]


@dataclass
class ModelConfig:
    """Chat-completion endpoint configuration."""

    token: str
    name: str = DEFAULT_MODEL_NAME
    endpoint: str = DEFAULT_MODEL_ENDPOINT
    timeout_seconds: float = 120.0
    structured_output: bool = False


@dataclass
class ReviewSettings:
    """Review behaviour configuration."""

    prompt_path: str = DEFAULT_PROMPT_PATH
    max_patch_chars: int = 8000
    large_change_threshold: int = 400
    debug_print_call: str = "print("
    update_existing_comment: bool = True


@dataclass
class Config:
    """Complete application configuration."""

    github: GitHubConfig
    model: ModelConfig
    review: ReviewSettings = field(default_factory=ReviewSettings)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file and environment.

    Environment variables take precedence over values from the file.

    Args:
        config_path: Path to config file (default: .pr-reviewer.yaml if present)

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If the config file cannot be parsed
    """
    if config_path is None:
        config_path = Path(".pr-reviewer.yaml")

    raw_config: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    raw_config = _expand_env_vars(raw_config)

    return _parse_config(raw_config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in config."""
    if isinstance(obj, str):
        if obj.startswith("${") and obj.endswith("}"):
            env_var = obj[2:-1]
            return os.environ.get(env_var, "")
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _env(name: str) -> str | None:
    """Read an environment variable, treating blank values as unset."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _setting(section: dict[str, Any], name: str, key: str, kind: type, default: Any) -> Any:
    """Read one typed setting from a config section.

    Raises:
        ConfigurationError: If the value has the wrong type
    """
    value = section.get(key, default)
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name}.{key} must be true or false, got {value!r}")
        return value
    if kind in (int, float) and isinstance(value, bool):
        raise ConfigurationError(f"{name}.{key} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name}.{key} must be a {kind.__name__}, got {value!r}") from e


def _parse_config(raw: dict[str, Any]) -> Config:
    """Parse raw config dict into Config object."""
    github_raw = raw.get("github", {}) or {}
    github = GitHubConfig(
        token=_env("GITHUB_TOKEN") or github_raw.get("token") or "",
        repository=_env("GITHUB_REPOSITORY") or github_raw.get("repository") or "",
        event_path=_env("GITHUB_EVENT_PATH") or github_raw.get("event_path") or "",
        base_url=github_raw.get("base_url"),
    )

    model_raw = raw.get("model", {}) or {}
    model = ModelConfig(
        token=_env("AI_TOKEN") or model_raw.get("token") or github.token,
        name=_env("MODEL_NAME") or model_raw.get("name") or DEFAULT_MODEL_NAME,
        endpoint=_env("MODEL_ENDPOINT") or model_raw.get("endpoint") or DEFAULT_MODEL_ENDPOINT,
        timeout_seconds=_setting(model_raw, "model", "timeout_seconds", float, 120.0),
        structured_output=_setting(model_raw, "model", "structured_output", bool, False),
    )

    review_raw = raw.get("review", {}) or {}
    review = ReviewSettings(
        prompt_path=_setting(review_raw, "review", "prompt_path", str, DEFAULT_PROMPT_PATH),
        max_patch_chars=_setting(review_raw, "review", "max_patch_chars", int, 8000),
        large_change_threshold=_setting(review_raw, "review", "large_change_threshold", int, 400),
        debug_print_call=_setting(review_raw, "review", "debug_print_call", str, "print("),
        update_existing_comment=_setting(
            review_raw, "review", "update_existing_comment", bool, True
        ),
    )

    return Config(github=github, model=model, review=review)


def validate_config(config: Config, require_event: bool = True) -> list[str]:
    """Validate configuration and return list of errors.

    Args:
        config: Configuration to validate
        require_event: Whether an event descriptor path is required

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not config.github.token:
        errors.append("GITHUB_TOKEN not available (set GITHUB_TOKEN or github.token)")

    repository = config.github.repository
    parts = repository.split("/")
    if not repository or len(parts) != 2 or not all(parts):
        errors.append(f"GITHUB_REPOSITORY invalid: {repository!r} (expected 'owner/repo')")

    if require_event:
        if not config.github.event_path:
            errors.append("GITHUB_EVENT_PATH missing")
        elif not Path(config.github.event_path).is_file():
            errors.append(f"GITHUB_EVENT_PATH does not exist: {config.github.event_path}")

    if config.review.max_patch_chars < 1:
        errors.append("review.max_patch_chars must be positive")

    if not config.review.debug_print_call:
        errors.append("review.debug_print_call must not be empty")

    return errors


def require_valid(config: Config, require_event: bool = True) -> Config:
    """Return ``config`` unchanged, or raise if it is invalid.

    Raises:
        ConfigurationError: With all validation errors joined
    """
    errors = validate_config(config, require_event=require_event)
    if errors:
        raise ConfigurationError("; ".join(errors))
    return config
