"""Contract violation exceptions.

Raised at call time when a constructor, method or property receives
an argument it cannot accept, when an enumeration lookup fails, or when
an abstract extension point is invoked without an override.
"""

from typing import Any, Optional

from .base import NeoModelsError


class ArgumentError(NeoModelsError):
    """Raised when an argument violates the contract of the callee."""

    def __init__(self, message: str, argument: Optional[str] = None, **kwargs):
        details = {"argument": argument} if argument else {}
        super().__init__(message, details=details, **kwargs)
        self.argument = argument


class ConstructorError(ArgumentError):
    """Raised when a constructor argument is invalid."""

    def __init__(self, class_name: str, argument: str, message: str):
        super().__init__(
            f"The {argument} argument of {class_name} constructor {message}",
            argument=argument,
        )
        self.class_name = class_name


class MethodError(ArgumentError):
    """Raised when a method argument is invalid."""

    def __init__(self, class_name: str, method_name: str, argument: str, message: str):
        super().__init__(
            f"The {argument} argument of {class_name}.{method_name} method {message}",
            argument=argument,
        )
        self.class_name = class_name
        self.method_name = method_name


class PropertyError(ArgumentError):
    """Raised when a value assigned to a property is invalid."""

    def __init__(self, class_name: str, property_name: str, message: str):
        super().__init__(
            f"The value of {class_name}.{property_name} property {message}",
            argument=property_name,
        )
        self.class_name = class_name
        self.property_name = property_name


class DataTypeError(ArgumentError):
    """Raised when a value does not match the data type of a property."""

    def __init__(self, type_name: str, value: Any):
        super().__init__(
            f"The value {value!r} is not a valid {type_name} value.",
            error_code="data_type",
        )
        self.type_name = type_name
        self.value = value


class EnumerationError(NeoModelsError):
    """Raised when a value is not a member of an enumeration."""

    DEFAULT_MESSAGE = "An enumeration error occurred."

    def __init__(self, message: Optional[str] = None, **kwargs):
        if not message or message == "default":
            message = self.DEFAULT_MESSAGE
        super().__init__(message, **kwargs)


class NotImplementedMethodError(NeoModelsError, NotImplementedError):
    """Raised when an abstract method is called without an override."""

    def __init__(self, class_name: str, method_name: str):
        super().__init__(
            f"The {class_name}.{method_name} method is not implemented.",
            error_code="not_implemented",
            details={"class_name": class_name, "method_name": method_name},
        )


class ConfigurationError(NeoModelsError):
    """Raised when a required collaborator or setting is missing or invalid."""
