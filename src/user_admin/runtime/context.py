from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.user_admin.runtime.config.config_data import ConfigData
from src.user_admin.runtime.config.config_template import load_templated_yaml
from src.user_admin.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application-wide state shared through a context variable."""

    config: ConfigData


def _load_default_config() -> ConfigData:
    config_path = Path(EnvironmentVariables().config_file)
    if not config_path.exists():
        logger.warning("No configuration file at {}; using defaults", config_path)
        return ConfigData()
    return load_templated_yaml(config_path)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=_load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Install `context` as current and return the token that restores the previous one."""
    return _app_context.set(context)


def _explicit_fields(model: BaseModel) -> dict:
    """Dump the fields set on `model` by its caller, descending into sections.

    A nested section appears when any of its own fields were set, holding only
    those fields, so a partial override never clobbers its siblings.
    """
    explicit = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    merged = _deep_merge(base_config.model_dump(), _explicit_fields(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData):
    """Temporarily layer `config_override` over the current configuration.

    Only fields set explicitly on the override replace current values:

        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"
    """
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_config(), config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    return get_context().config
