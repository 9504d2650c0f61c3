"""Exceptions module for neo-models.

This module provides the complete exception hierarchy for neo-models,
split into contract violations (system) and lifecycle errors (domain).
"""

from .base import (
    NeoModelsError,
    create_error_response,
)

from .system import (
    ArgumentError,
    ConstructorError,
    MethodError,
    PropertyError,
    DataTypeError,
    EnumerationError,
    NotImplementedMethodError,
    ConfigurationError,
)

from .domain import (
    ModelError,
    AuthorizationError,
    DataPortalError,
)

__all__ = [
    "NeoModelsError",
    "create_error_response",
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
]
