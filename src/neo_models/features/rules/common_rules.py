"""Common validation and authorization rules."""

from typing import Any, Dict, Optional

from ...core.exceptions import ConstructorError
from ...config.constants import AuthorizationAction, RuleSeverity
from ..properties.entities import PropertyDefinition
from .entities import AuthorizationRule, BrokenRule, ValidationRule


class RequiredRule(ValidationRule):
    """The property must have a value according to its data type."""

    def __init__(
        self,
        primary_property: PropertyDefinition,
        message: Optional[str] = None,
        priority: int = 50,
        stops_processing: bool = True,
    ):
        super().__init__(
            "Required",
            primary_property,
            message or f"The {getattr(primary_property, 'name', '')} value is required.",
            priority,
            stops_processing,
        )
        if primary_property is None or primary_property.is_child:
            raise ConstructorError("RequiredRule", "primary_property", "must be a primitive property.")

    def execute(self, inputs: Dict[str, Any]) -> Optional[BrokenRule]:
        value = inputs.get(self.primary_property.name)
        if not self.primary_property.kind.has_value(value):
            return self.result()
        return None


class _LengthRule(ValidationRule):
    def __init__(self, rule_name, primary_property, length, message, priority, stops_processing):
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise ConstructorError(f"{rule_name}Rule", "length", "must be a non-negative integer.")
        super().__init__(rule_name, primary_property, message, priority, stops_processing)
        if primary_property is None:
            raise ConstructorError(f"{rule_name}Rule", "primary_property", "must be a PropertyDefinition object.")
        self.length = length

    def _length_of(self, inputs: Dict[str, Any]) -> int:
        value = inputs.get(self.primary_property.name)
        return 0 if value is None else len(str(value))


class MinLengthRule(_LengthRule):
    """The text representation of the value must be at least `length` long."""

    def __init__(
        self,
        primary_property: PropertyDefinition,
        min_length: int,
        message: Optional[str] = None,
        priority: int = 10,
        stops_processing: bool = False,
    ):
        super().__init__(
            "MinLength",
            primary_property,
            min_length,
            message or f"The length of {getattr(primary_property, 'name', '')} must be at least {min_length}.",
            priority,
            stops_processing,
        )

    def execute(self, inputs: Dict[str, Any]) -> Optional[BrokenRule]:
        if self._length_of(inputs) < self.length:
            return self.result()
        return None


class MaxLengthRule(_LengthRule):
    """The text representation of the value must be at most `length` long."""

    def __init__(
        self,
        primary_property: PropertyDefinition,
        max_length: int,
        message: Optional[str] = None,
        priority: int = 10,
        stops_processing: bool = False,
    ):
        super().__init__(
            "MaxLength",
            primary_property,
            max_length,
            message or f"The length of {getattr(primary_property, 'name', '')} must be at most {max_length}.",
            priority,
            stops_processing,
        )

    def execute(self, inputs: Dict[str, Any]) -> Optional[BrokenRule]:
        if self._length_of(inputs) > self.length:
            return self.result()
        return None


class InformationRule(ValidationRule):
    """Always attaches an information message to the property."""

    def __init__(
        self,
        primary_property: PropertyDefinition,
        message: str,
        priority: int = 1,
        stops_processing: bool = False,
    ):
        if not isinstance(message, str) or not message:
            raise ConstructorError("InformationRule", "message", "must be a non-empty string.")
        super().__init__("Information", primary_property, message, priority, stops_processing)

    def execute(self, inputs: Dict[str, Any]) -> Optional[BrokenRule]:
        return self.result(severity=RuleSeverity.INFORMATION)


class _RoleRule(AuthorizationRule):
    def __init__(self, rule_name, action, target, role, message, priority, stops_processing):
        if not isinstance(role, str) or not role:
            raise ConstructorError(f"{rule_name}Rule", "role", "must be a non-empty string.")
        super().__init__(rule_name, action, target, message, priority, stops_processing)
        self.role = role


class IsInRoleRule(_RoleRule):
    """The principal must be a member of the role."""

    def __init__(
        self,
        action: AuthorizationAction,
        target: Optional[str],
        role: str,
        message: Optional[str] = None,
        priority: int = 10,
        stops_processing: bool = False,
    ):
        super().__init__(
            "IsInRole", action, target, role,
            message or f"The user is not a member of the {role} role.",
            priority, stops_processing,
        )

    def execute(self, principal: Any) -> Optional[BrokenRule]:
        if principal is None or not principal.is_in_role(self.role):
            return self.result()
        return None


class IsNotInRoleRule(_RoleRule):
    """The principal must not be a member of the role."""

    def __init__(
        self,
        action: AuthorizationAction,
        target: Optional[str],
        role: str,
        message: Optional[str] = None,
        priority: int = 10,
        stops_processing: bool = False,
    ):
        super().__init__(
            "IsNotInRole", action, target, role,
            message or f"Members of the {role} role are not allowed to do this.",
            priority, stops_processing,
        )

    def execute(self, principal: Any) -> Optional[BrokenRule]:
        if principal is None or principal.is_in_role(self.role):
            return self.result()
        return None
