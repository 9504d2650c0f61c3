"""Configuration module for neo-models.

Enumerations and defaults, environment settings, the runtime
collaborator registry and logging setup.
"""

from .constants import (
    Defaults,
    ModelState,
    RuleSeverity,
    NoAccessBehavior,
    AuthorizationAction,
    DataPortalAction,
    DataPortalEvent,
    DataPortalStage,
    ModelKind,
    CollectionKind,
    PropertyFlag,
    ALLOWED_CHILD_KINDS,
    parse_enum,
)

from .settings import ModelSettings, get_settings

from .manager import (
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
)

from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Constants
    "Defaults",
    "ModelState",
    "RuleSeverity",
    "NoAccessBehavior",
    "AuthorizationAction",
    "DataPortalAction",
    "DataPortalEvent",
    "DataPortalStage",
    "ModelKind",
    "CollectionKind",
    "PropertyFlag",
    "ALLOWED_CHILD_KINDS",
    "parse_enum",
    # Settings
    "ModelSettings",
    "get_settings",
    # Runtime configuration
    "Configuration",
    "configure",
    "get_configuration",
    "reset_configuration",
    # Logging
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
