"""Exception hierarchy, settings and logging tests.

These tests verify:
- RescueError is the base exception class
- Configuration errors carry their kind
- Settings read GRAPHQL_RESCUE_* variables
- Invalid GRAPHQL_RESCUE_* values raise ConfigurationError
- Logging functions accept dict and LogContext fields
- Rescued failures are logged; unrescued failures are not
"""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from graphql_rescue import (
    ConfigurationError,
    DispatchWrapper,
    EmptyConfigurationError,
    EmptyRescueError,
    LogContext,
    NotRescuableError,
    RegistryFrozenError,
    RescueError,
    RescueRegistry,
    RescueSettings,
    configure_logging,
    is_debug_enabled,
    log_debug,
    log_info,
    log_warn,
)
from graphql_rescue.logging import LOGGER_NAME, _normalize_fields
from graphql_rescue.registry import dispatch_wrapper
from tests.handlers.failures import ParseFailure, TimeoutFailure, timeout_payload


class TestExceptionHierarchy:
    """Test exception class hierarchy."""

    def test_rescue_error_is_base(self):
        for exc_class in [
            ConfigurationError,
            EmptyConfigurationError,
            EmptyRescueError,
            RegistryFrozenError,
            NotRescuableError,
        ]:
            assert issubclass(exc_class, RescueError)

    def test_configuration_errors(self):
        for exc_class in [EmptyConfigurationError, EmptyRescueError, RegistryFrozenError]:
            assert issubclass(exc_class, ConfigurationError)

    def test_not_rescuable_is_not_configuration_error(self):
        assert not issubclass(NotRescuableError, ConfigurationError)

    @pytest.mark.parametrize(
        ("exc_class", "kind"),
        [
            (EmptyConfigurationError, "empty_configuration"),
            (EmptyRescueError, "empty_rescue"),
            (RegistryFrozenError, "frozen_registry"),
        ],
    )
    def test_kinds(self, exc_class, kind):
        assert exc_class().kind == kind

    def test_default_messages(self):
        assert "configuration block" in str(EmptyConfigurationError())
        assert "requires a handler" in str(EmptyRescueError())

    def test_not_rescuable_keeps_value(self):
        value = ["TimeoutFailure"]
        error = NotRescuableError(value)

        assert error.value is value
        assert str(error) == "['TimeoutFailure']"

    def test_can_catch_by_base_class(self):
        with pytest.raises(RescueError):
            raise EmptyRescueError()


class TestSettings:
    """Test RescueSettings."""

    def test_defaults(self, rescue_env):
        settings = RescueSettings.from_env()

        assert settings.config_path is None
        assert settings.log_level == "info"

    def test_reads_environment(self, rescue_env):
        rescue_env.setenv("GRAPHQL_RESCUE_CONFIG_PATH", "/etc/rescues.yaml")
        rescue_env.setenv("GRAPHQL_RESCUE_LOG_LEVEL", "DEBUG")

        settings = RescueSettings.from_env()

        assert settings.config_path == "/etc/rescues.yaml"
        assert settings.log_level == "debug"

    def test_invalid_environment_level_raises_configuration_error(self, rescue_env):
        rescue_env.setenv("GRAPHQL_RESCUE_LOG_LEVEL", "verbose")

        with pytest.raises(ConfigurationError, match="GRAPHQL_RESCUE_") as exc_info:
            RescueSettings.from_env()

        assert not isinstance(exc_info.value, ValidationError)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_rejects_unknown_level(self):
        with pytest.raises(ValidationError):
            RescueSettings(log_level="verbose")

    def test_rejects_extra_fields(self):
        with pytest.raises(ValidationError):
            RescueSettings(unknown="x")


class TestLogging:
    """Test structured logging functions."""

    def test_logging_functions_accept_fields(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        log_warn("warn message", {"error_type": "ParseFailure"})
        log_info("info message", {"categories": 2})
        log_debug("debug message", LogContext(field_name="viewer"))

        messages = [record.getMessage() for record in caplog.records]
        assert any("warn message" in m and "ParseFailure" in m for m in messages)
        assert any("info message" in m for m in messages)
        assert any("debug message" in m and "viewer" in m for m in messages)

    def test_normalize_fields(self):
        assert _normalize_fields(None) == {}
        assert _normalize_fields({"count": 3}) == {"count": "3"}
        assert _normalize_fields(LogContext(type_name="Query", category=None)) == {
            "type_name": "Query"
        }

    def test_configure_logging_sets_level(self):
        configure_logging("warn")
        try:
            assert logging.getLogger(LOGGER_NAME).level == logging.WARNING
        finally:
            configure_logging("info")

    def test_configure_logging_reads_environment_level(self, rescue_env):
        rescue_env.setenv("GRAPHQL_RESCUE_LOG_LEVEL", "error")
        configure_logging()
        try:
            assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
        finally:
            configure_logging("info")

    def test_configure_logging_rejects_invalid_environment_level(self, rescue_env):
        rescue_env.setenv("GRAPHQL_RESCUE_LOG_LEVEL", "verbose")

        with pytest.raises(ConfigurationError):
            configure_logging()

    def test_configure_logging_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="unknown log level"):
            configure_logging("verbose")

    def test_rescue_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        registry = RescueRegistry()
        registry.rescue_from(TimeoutFailure, handler=timeout_payload)

        def resolve(subject, arguments, context):
            raise TimeoutFailure("slow")

        DispatchWrapper(resolve, registry)(None, {}, {})

        assert any("Rescued resolver failure" in r.getMessage() for r in caplog.records)

    def test_unrescued_failure_is_not_logged(self, caplog):
        registry = RescueRegistry()
        registry.rescue_from(TimeoutFailure, handler=timeout_payload)

        def resolve(subject, arguments, context):
            raise ParseFailure("bad")

        caplog.clear()
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        with pytest.raises(ParseFailure):
            DispatchWrapper(resolve, registry)(None, {}, {})

        assert [r for r in caplog.records if r.name == LOGGER_NAME] == []

    def test_rescue_log_names_type_and_field(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        registry = RescueRegistry()
        registry.rescue_from(TimeoutFailure, handler=timeout_payload)

        def resolve(subject, arguments, context):
            raise TimeoutFailure("slow")

        wrapped = DispatchWrapper(resolve, registry, type_name="Query", field_name="viewer")
        wrapped(None, {}, {})

        message = next(
            r.getMessage() for r in caplog.records if "Rescued resolver failure" in r.getMessage()
        )
        assert "type_name='Query'" in message
        assert "field_name='viewer'" in message
        assert "error_type='TimeoutFailure'" in message

    def test_is_debug_enabled_follows_logger_level(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        assert is_debug_enabled() is True

        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        assert is_debug_enabled() is False

    def test_no_log_context_built_when_debug_disabled(self, caplog, monkeypatch):
        """Rescuing with DEBUG off never builds the log context model."""
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        def fail_on_build(**fields):
            raise AssertionError(f"LogContext built with {fields}")

        monkeypatch.setattr(dispatch_wrapper, "LogContext", fail_on_build)
        registry = RescueRegistry()
        registry.rescue_from(TimeoutFailure, handler=timeout_payload)

        def resolve(subject, arguments, context):
            raise TimeoutFailure("slow")

        assert DispatchWrapper(resolve, registry)(None, {}, {}) == {"error": "timeout"}
