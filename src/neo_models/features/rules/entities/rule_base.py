"""Rule base classes.

Validation rules check property values and return a BrokenRule on
failure. Authorization rules check a principal for an action on a
target (a property, a method or the whole object).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional, Tuple

from ....core.exceptions import AuthorizationError, ConstructorError
from ....config.constants import AuthorizationAction, Defaults, RuleSeverity, parse_enum
from ...properties.entities import PropertyDefinition
from .broken_rule import BrokenRule


class RuleBase(ABC):
    """Common attributes of validation and authorization rules."""

    def __init__(
        self,
        rule_name: str,
        message: Optional[str] = None,
        priority: int = Defaults.RULE_PRIORITY,
        stops_processing: bool = False,
    ):
        class_name = self.__class__.__name__
        if not isinstance(rule_name, str) or not rule_name:
            raise ConstructorError(class_name, "rule_name", "must be a non-empty string.")
        if message is not None and not isinstance(message, str):
            raise ConstructorError(class_name, "message", "must be a string.")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ConstructorError(class_name, "priority", "must be an integer.")
        if not isinstance(stops_processing, bool):
            raise ConstructorError(class_name, "stops_processing", "must be a Boolean value.")
        self.rule_name = rule_name
        self.message = message or f"The {rule_name} rule is broken."
        self.priority = priority
        self.stops_processing = stops_processing

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rule_name={self.rule_name!r}, priority={self.priority})"


class ValidationRule(RuleBase):
    """Rule validating the value of a property, or the whole object.

    A rule without a primary property runs at object level after the
    property rules. Subclasses implement execute(inputs), where inputs
    maps the primary property and the input properties to their values.
    """

    def __init__(
        self,
        rule_name: str,
        primary_property: Optional[PropertyDefinition],
        message: Optional[str] = None,
        priority: int = Defaults.RULE_PRIORITY,
        stops_processing: bool = False,
        input_properties: Iterable[PropertyDefinition] = (),
        affected_properties: Iterable[PropertyDefinition] = (),
    ):
        super().__init__(rule_name, message, priority, stops_processing)
        if primary_property is not None and not isinstance(primary_property, PropertyDefinition):
            raise ConstructorError(
                self.__class__.__name__, "primary_property", "must be a PropertyDefinition object."
            )
        self.primary_property = primary_property
        self.input_properties: Tuple[PropertyDefinition, ...] = self._check_properties(
            "input_properties", input_properties
        )
        self.affected_properties: Tuple[PropertyDefinition, ...] = self._check_properties(
            "affected_properties", affected_properties
        )

    def _check_properties(self, argument: str, properties: Iterable[Any]) -> Tuple[PropertyDefinition, ...]:
        properties = tuple(properties or ())
        if not all(isinstance(p, PropertyDefinition) for p in properties):
            raise ConstructorError(
                self.__class__.__name__, argument, "must be a list of PropertyDefinition objects."
            )
        return properties

    @property
    def property_name(self) -> Optional[str]:
        return self.primary_property.name if self.primary_property else None

    @property
    def required_properties(self) -> Tuple[PropertyDefinition, ...]:
        """Properties whose values are passed to execute()."""
        primary = (self.primary_property,) if self.primary_property else ()
        return primary + tuple(p for p in self.input_properties if p is not self.primary_property)

    @abstractmethod
    def execute(self, inputs: Dict[str, Any]) -> Optional[BrokenRule]:
        """Return None when the rule holds, a BrokenRule otherwise."""
        ...

    def result(self, message: Optional[str] = None, severity: RuleSeverity = RuleSeverity.ERROR) -> BrokenRule:
        return BrokenRule(
            rule_name=self.rule_name,
            property_name=self.property_name,
            message=message or self.message,
            severity=severity,
            stops_processing=self.stops_processing,
            is_preserved=False,
            affected_properties=tuple(p.name for p in self.affected_properties),
        )


class AuthorizationRule(RuleBase):
    """Rule deciding whether a principal may perform an action.

    The target is the property name for property actions, the method
    name for method execution and None for object actions.
    """

    def __init__(
        self,
        rule_name: str,
        action: AuthorizationAction,
        target: Optional[str] = None,
        message: Optional[str] = None,
        priority: int = Defaults.RULE_PRIORITY,
        stops_processing: bool = False,
    ):
        super().__init__(rule_name, message, priority, stops_processing)
        self.action = parse_enum(AuthorizationAction, action)
        if isinstance(target, PropertyDefinition):
            target = target.name
        if target is not None and (not isinstance(target, str) or not target):
            raise ConstructorError(self.__class__.__name__, "target", "must be a non-empty string.")
        self.target = target

    @property
    def rule_id(self) -> Tuple[AuthorizationAction, Optional[str]]:
        return self.action, self.target

    @abstractmethod
    def execute(self, principal: Any) -> Optional[BrokenRule]:
        """Return None when the principal is allowed, a BrokenRule otherwise."""
        ...

    def result(self, message: Optional[str] = None, severity: RuleSeverity = RuleSeverity.ERROR) -> BrokenRule:
        return BrokenRule(
            rule_name=self.rule_name,
            property_name=self.target,
            message=message or self.message,
            severity=severity,
            stops_processing=self.stops_processing,
            is_preserved=True,
        )

    def check(self, principal: Any) -> None:
        """Raise AuthorizationError unless the principal is allowed.

        Raises:
            AuthorizationError: When no principal is given or the rule denies it
        """
        if principal is None:
            raise AuthorizationError(details={"rule_name": self.rule_name, "action": self.action.value})
        if self.execute(principal) is not None:
            raise AuthorizationError(
                self.message,
                details={"rule_name": self.rule_name, "action": self.action.value},
            )
