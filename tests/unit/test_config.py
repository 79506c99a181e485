"""Unit tests for settings and logging setup."""

import logging

import pytest

from actiongate.config import Settings
from actiongate.logging_config import AUDIT_LOGGER, configure_logging


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.allow_wildcard_permission is True
        assert settings.max_action_type_length == 100
        assert settings.action_packages == ["actiongate.application.use_cases"]
        assert settings.expose_error_details is False

    @pytest.mark.parametrize(
        ("debug", "environment", "expected"),
        [
            (True, "development", True),
            (True, "staging", True),
            (True, "production", False),
            (False, "development", False),
        ],
    )
    def test_expose_error_details(self, debug, environment, expected) -> None:
        settings = Settings(_env_file=None, debug=debug, environment=environment)
        assert settings.expose_error_details is expected

    def test_cors_origin_list(self) -> None:
        settings = Settings(_env_file=None, cors_origins=" https://a.example, ,https://b.example")
        assert settings.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_environment_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("ACTIONGATE_ALLOW_WILDCARD_PERMISSION", "false")
        monkeypatch.setenv("ACTIONGATE_DEFAULT_TOKEN_TTL_DAYS", "14")
        settings = Settings(_env_file=None)
        assert settings.allow_wildcard_permission is False
        assert settings.default_token_ttl_days == 14


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_levels(self) -> None:
        configure_logging(Settings(_env_file=None, log_level="warning"))

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger(AUDIT_LOGGER).level == logging.INFO

    def test_debug_overrides_level(self) -> None:
        configure_logging(Settings(_env_file=None, log_level="ERROR", debug=True))
        assert logging.getLogger().level == logging.DEBUG

    def test_extra_fields_are_rendered(self) -> None:
        configure_logging(Settings(_env_file=None))
        [handler] = logging.getLogger().handlers
        record = logging.makeLogRecord(
            {"msg": "Action registered", "levelname": "INFO", "action_type": "system.ping"}
        )
        assert "action_type='system.ping'" in handler.format(record)
