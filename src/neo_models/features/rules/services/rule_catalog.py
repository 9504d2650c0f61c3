"""Rule catalog and its builder.

The builder collects the validation and authorization rules of one
model; build() seals them into an immutable catalog ordered by
descending priority, keeping definition order on ties.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ....core.exceptions import MethodError, ModelError
from ....config.constants import AuthorizationAction
from ...properties.entities import PropertyDefinition
from ..entities import (
    AuthorizationRule,
    ValidationContext,
    ValidationRule,
)

logger = logging.getLogger(__name__)


def _by_priority(rules: List[Any]) -> Tuple[Any, ...]:
    return tuple(sorted(rules, key=lambda rule: -rule.priority))


class RuleCatalog:
    """Sealed validation and authorization rules of one model."""

    def __init__(
        self,
        model_name: str,
        validation_rules: Dict[Optional[str], List[ValidationRule]],
        authorization_rules: Dict[Tuple[AuthorizationAction, Optional[str]], List[AuthorizationRule]],
    ):
        self.model_name = model_name
        self._validation = {name: _by_priority(rules) for name, rules in validation_rules.items()}
        self._authorization = {key: _by_priority(rules) for key, rules in authorization_rules.items()}

    def validation_rules(self, property_name: Optional[str] = None) -> Tuple[ValidationRule, ...]:
        """Rules of a property; the object-level rules when no name is given."""
        return self._validation.get(property_name, ())

    def authorization_rules(
        self, action: AuthorizationAction, target_name: Optional[str] = None
    ) -> Tuple[AuthorizationRule, ...]:
        return self._authorization.get((action, target_name), ())

    def has_validation_rules(self) -> bool:
        return any(self._validation.values())

    def _run(self, property_name: Optional[str], context: ValidationContext) -> bool:
        context.broken_rules.clear_property(property_name)
        for rule in self.validation_rules(property_name):
            inputs = {prop.name: context.get_value(prop) for prop in rule.required_properties}
            result = rule.execute(inputs)
            if not result:
                continue
            context.broken_rules.add(result)
            logger.debug(f"{self.model_name}.{property_name or '<object>'}: rule {rule.rule_name} failed")
            if rule.stops_processing:
                break
        return context.broken_rules.is_valid(property_name)

    def validate(self, prop: PropertyDefinition, context: ValidationContext) -> bool:
        """Run the validation rules of a property and report whether it is valid."""
        if not isinstance(prop, PropertyDefinition):
            raise MethodError("RuleCatalog", "validate", "prop", "must be a PropertyDefinition object.")
        return self._run(prop.name, context)

    def validate_object(self, context: ValidationContext) -> bool:
        """Run the object-level validation rules."""
        return self._run(None, context)

    def validate_all(self, properties: List[PropertyDefinition], context: ValidationContext) -> bool:
        """Run property rules in catalog order, then the object-level rules."""
        valid = True
        for prop in properties:
            valid = self.validate(prop, context) and valid
        return self.validate_object(context) and valid


class RuleCatalogBuilder:
    """Collects rules before the catalog is sealed."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        self._validation: Dict[Optional[str], List[ValidationRule]] = {}
        self._authorization: Dict[Tuple[AuthorizationAction, Optional[str]], List[AuthorizationRule]] = {}
        self._sealed = False

    def add(self, rule: Any) -> "RuleCatalogBuilder":
        if self._sealed:
            raise ModelError("sealed", self.model_name)
        if isinstance(rule, ValidationRule):
            self._validation.setdefault(rule.property_name, []).append(rule)
        elif isinstance(rule, AuthorizationRule):
            self._authorization.setdefault(rule.rule_id, []).append(rule)
        else:
            raise MethodError(
                "RuleCatalogBuilder", "add", "rule",
                "must be a ValidationRule or an AuthorizationRule object.",
            )
        return self

    def build(self) -> RuleCatalog:
        if self._sealed:
            raise ModelError("sealed", self.model_name)
        self._sealed = True
        return RuleCatalog(self.model_name, self._validation, self._authorization)
