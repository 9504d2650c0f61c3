"""Tests for constants, settings, runtime configuration and logging."""

import logging

import pytest

from neo_models.config import (
    CollectionKind,
    Configuration,
    DataPortalAction,
    DataPortalEvent,
    LoggingConfig,
    ModelKind,
    ModelSettings,
    NoAccessBehavior,
    RuleSeverity,
    configure,
    get_configuration,
    get_settings,
    parse_enum,
    reset_configuration,
)
from neo_models.config.logging_config import get_format_string, get_log_level_from_verbosity
from neo_models.core.exceptions import ConfigurationError, EnumerationError


class TestConstants:
    """Test enumerations and their helpers."""

    def test_parse_enum_by_member_value_and_name(self):
        assert parse_enum(ModelKind, ModelKind.COMMAND) is ModelKind.COMMAND
        assert parse_enum(ModelKind, "editable_root") is ModelKind.EDITABLE_ROOT
        assert parse_enum(ModelKind, "read_only_child") is ModelKind.READ_ONLY_CHILD
        assert parse_enum(NoAccessBehavior, "SHOW_WARNING") is NoAccessBehavior.SHOW_WARNING

    def test_parse_enum_rejects_unknown_value(self):
        with pytest.raises(EnumerationError) as exc_info:
            parse_enum(ModelKind, "editable")
        assert exc_info.value.details["enumeration"] == "ModelKind"

    def test_event_helpers(self):
        assert DataPortalEvent.pre(DataPortalAction.UPDATE) is DataPortalEvent.PRE_UPDATE
        assert DataPortalEvent.post(DataPortalAction.EXECUTE) is DataPortalEvent.POST_EXECUTE

    def test_no_access_behavior_severity(self):
        assert NoAccessBehavior.SHOW_ERROR.to_severity() is RuleSeverity.ERROR
        assert NoAccessBehavior.SHOW_WARNING.to_severity() is RuleSeverity.WARNING
        assert NoAccessBehavior.SHOW_INFORMATION.to_severity() is RuleSeverity.INFORMATION

    def test_kind_properties(self):
        assert ModelKind.COMMAND.is_root
        assert not ModelKind.COMMAND.is_editable
        assert ModelKind.EDITABLE_CHILD.is_editable
        assert CollectionKind.READ_ONLY_ROOT_COLLECTION.is_root
        assert CollectionKind.EDITABLE_CHILD_COLLECTION.item_kind is ModelKind.EDITABLE_CHILD
        assert CollectionKind.READ_ONLY_ROOT_COLLECTION.item_kind is ModelKind.READ_ONLY_CHILD


class TestModelSettings:
    """Test environment driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NEO_MODELS_NO_ACCESS_BEHAVIOR", raising=False)
        monkeypatch.delenv("NEO_MODELS_DEFAULT_DATA_SOURCE", raising=False)
        monkeypatch.delenv("NEO_MODELS_STRICT_TRANSFER", raising=False)
        settings = ModelSettings()
        assert settings.no_access_behavior is NoAccessBehavior.SHOW_ERROR
        assert settings.default_data_source == "default"
        assert settings.strict_transfer is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NEO_MODELS_NO_ACCESS_BEHAVIOR", "show_warning")
        monkeypatch.setenv("NEO_MODELS_DEFAULT_DATA_SOURCE", " sales ")
        monkeypatch.setenv("NEO_MODELS_STRICT_TRANSFER", "true")
        settings = ModelSettings()
        assert settings.no_access_behavior is NoAccessBehavior.SHOW_WARNING
        assert settings.default_data_source == "sales"
        assert settings.strict_transfer is True

    def test_blank_data_source_is_rejected(self):
        with pytest.raises(ValueError):
            ModelSettings(default_data_source="  ")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfiguration:
    """Test the runtime configuration registry."""

    def test_configure_replaces_active_configuration(self):
        manager = object()
        configuration = configure(connection_manager=manager, user_reader=lambda: "jdoe")
        assert get_configuration() is configuration
        assert configuration.require_connection_manager() is manager
        assert configuration.get_user() == "jdoe"

    def test_missing_connection_manager(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_configuration().require_connection_manager()
        assert exc_info.value.error_code == "no_connection_manager"

    def test_no_user_reader_means_no_principal(self):
        assert Configuration().get_user() is None

    def test_callables_are_checked(self):
        with pytest.raises(ConfigurationError):
            Configuration(dao_builder="not callable")
        with pytest.raises(ConfigurationError):
            Configuration(user_reader=42)

    def test_explicit_settings_win(self):
        settings = ModelSettings(default_data_source="archive")
        assert configure(settings=settings).settings.default_data_source == "archive"

    def test_reset(self):
        configure(connection_manager=object())
        reset_configuration()
        assert get_configuration().connection_manager is None


class TestLoggingConfig:
    """Test the logging configuration built from the environment."""

    def test_verbosity_mapping(self):
        assert get_log_level_from_verbosity("quiet") == "ERROR"
        assert get_log_level_from_verbosity("VERBOSE") == "INFO"
        assert get_log_level_from_verbosity("unknown") == "WARNING"

    def test_format_strings(self):
        assert get_format_string("json").startswith('{"time"')
        assert "%(lineno)d" in get_format_string("detailed")

    def test_explicit_level_wins_over_verbosity(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "info")
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        config = LoggingConfig.build_config()
        assert config["loggers"]["neo_models"]["level"] == "INFO"
        for module in LoggingConfig.DEFAULT_QUIET_MODULES:
            assert config["loggers"][module]["level"] == "WARNING"

    def test_debug_level_opens_quiet_modules(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_VERBOSITY", "DEBUG")
        config = LoggingConfig.build_config()
        assert config["loggers"]["neo_models"]["level"] == "DEBUG"
        assert config["loggers"]["neo_models.features.data_portal.services.data_portal"]["level"] == "DEBUG"
        assert config["loggers"]["asyncio"]["level"] == "ERROR"

    def test_silence_module(self):
        LoggingConfig.silence_module("neo_models.features.state.model_state_machine")
        logger = logging.getLogger("neo_models.features.state.model_state_machine")
        assert logger.level == logging.CRITICAL
        logger.setLevel(logging.NOTSET)
