"""Unit tests for the application context."""

import pytest

from src.user_admin.runtime.config.config_data import ConfigData, DatabaseConfig
from src.user_admin.runtime.context import (
    AppContext,
    get_config,
    get_context,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_level(self):
        """Should override config for the duration of the context manager."""
        original_config = get_config()
        original_host = original_config.app.host

        test_config = ConfigData()
        test_config.app.host = "custom_host"

        with with_context(test_config):
            override_config = get_config()
            assert override_config.app.host == "custom_host"
            assert override_config is not original_config

        after_config = get_config()
        assert after_config.app.host == original_host
        assert after_config is original_config

    def test_with_context_partial_override_inherits(self):
        """Fields not set on the override come from the current config."""
        original_config = get_config()

        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            config = get_config()
            assert config.database.url == "sqlite://"
            assert config.database.pool_size == original_config.database.pool_size
            assert config.app == original_config.app
            assert config.logging == original_config.logging

    def test_with_context_nested_overrides(self):
        level1 = ConfigData()
        level1.app.port = 8001

        level2 = ConfigData()
        level2.app.host = "level2_host"

        with with_context(level1):
            with with_context(level2):
                config = get_config()
                assert config.app.port == 8001
                assert config.app.host == "level2_host"
            assert get_config().app.port == 8001
            assert get_config().app.host != "level2_host"

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="config_override must be ConfigData"):
            with with_context({"app": {"port": 1}}):
                pass
