"""Neo-Models - business object framework for the NeoMultiTenant ecosystem.

Defines domain objects that track their edit state, enforce validation
and authorization rules, and persist through a pluggable data portal.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
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
    ModelSettings,
    get_settings,
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
)

from .core.exceptions import (
    # Base Exception
    NeoModelsError,

    # Contract Violations
    ArgumentError,
    ConstructorError,
    MethodError,
    PropertyError,
    DataTypeError,
    EnumerationError,
    NotImplementedMethodError,
    ConfigurationError,

    # Lifecycle Errors
    ModelError,
    AuthorizationError,
    DataPortalError,

    # Utility Functions
    create_error_response,
)

from .features.properties import (
    DataType,
    Text,
    Integer,
    Decimal,
    Boolean,
    DateTime,
    PropertyDefinition,
    PropertyCatalog,
    PropertyCatalogBuilder,
    PropertyStore,
    PropertyContext,
    TransferContext,
)

from .features.rules import (
    BrokenRule,
    BrokenRuleSet,
    BrokenRulesOutput,
    BrokenRulesResponse,
    RuleBase,
    ValidationRule,
    AuthorizationRule,
    ValidationContext,
    AuthorizationContext,
    UserInfo,
    RuleCatalog,
    RuleCatalogBuilder,
    PermissionEvaluator,
    RequiredRule,
    MinLengthRule,
    MaxLengthRule,
    InformationRule,
    IsInRoleRule,
    IsNotInRoleRule,
)

from .features.state import ModelStateMachine

from .features.data_portal import (
    ConnectionManager,
    DataAccessObject,
    DataPortalContext,
    DataPortalEventArgs,
    EventHandlerList,
    DataPortal,
)

from .features.models import (
    ModelExtensions,
    BusinessObject,
    ModelCollection,
    ModelDefinition,
    CollectionDefinition,
)

__all__ = [
    "__version__",

    # Configuration
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
    "ModelSettings",
    "get_settings",
    "Configuration",
    "configure",
    "get_configuration",
    "reset_configuration",

    # Exceptions
    "NeoModelsError",
    "ArgumentError",
    "ConstructorError",
    "MethodError",
    "PropertyError",
    "DataTypeError",
    "EnumerationError",
    "NotImplementedMethodError",
    "ConfigurationError",
    "ModelError",
    "AuthorizationError",
    "DataPortalError",
    "create_error_response",

    # Properties
    "DataType",
    "Text",
    "Integer",
    "Decimal",
    "Boolean",
    "DateTime",
    "PropertyDefinition",
    "PropertyCatalog",
    "PropertyCatalogBuilder",
    "PropertyStore",
    "PropertyContext",
    "TransferContext",

    # Rules
    "BrokenRule",
    "BrokenRuleSet",
    "BrokenRulesOutput",
    "BrokenRulesResponse",
    "RuleBase",
    "ValidationRule",
    "AuthorizationRule",
    "ValidationContext",
    "AuthorizationContext",
    "UserInfo",
    "RuleCatalog",
    "RuleCatalogBuilder",
    "PermissionEvaluator",
    "RequiredRule",
    "MinLengthRule",
    "MaxLengthRule",
    "InformationRule",
    "IsInRoleRule",
    "IsNotInRoleRule",

    # State
    "ModelStateMachine",

    # Data portal
    "ConnectionManager",
    "DataAccessObject",
    "DataPortalContext",
    "DataPortalEventArgs",
    "EventHandlerList",
    "DataPortal",

    # Models
    "ModelExtensions",
    "BusinessObject",
    "ModelCollection",
    "ModelDefinition",
    "CollectionDefinition",
]
