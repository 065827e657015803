"""Loading of config.yaml with `${...}` environment placeholders."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.user_admin.runtime.config.config_data import ConfigData
from src.user_admin.runtime.settings import EnvironmentVariables

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve_placeholder(match: re.Match) -> str:
    expression = match.group(1)

    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return os.getenv(name, default)

    name, _, message = expression.partition(":?")
    value = os.getenv(name)
    if value is None:
        if message:
            raise ValueError(f"Required environment variable {name}: {message}")
        raise ValueError(f"Required environment variable {name} not set")
    return value


def substitute_env_vars(text: str) -> str:
    """
    Replace environment placeholders in `text`.

    - ${NAME} must be set
    - ${NAME:-default} falls back to `default`
    - ${NAME:?message} must be set, failing with `message`
    """
    return _PLACEHOLDER.sub(_resolve_placeholder, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Copy `<ENV>_NAME` variables over `NAME` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix)
    }
    if overrides:
        logger.info("Applying {} overrides: {}", env_mode, sorted(overrides))
    os.environ.update(overrides)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Read `file_path`, substitute placeholders and validate the `config` section.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: On a missing required variable, unparsable YAML or
            values that fail validation
    """
    content = Path(file_path).read_text()

    env_mode = EnvironmentVariables().environment
    logger.info("Loading configuration for environment: {}", env_mode)
    apply_environment_overrides(env_mode)

    try:
        loaded = yaml.safe_load(substitute_env_vars(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData(**loaded.get("config", {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
