"""Per-check contexts of the rule engine."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ....config.constants import AuthorizationAction, NoAccessBehavior
from ...properties.entities import PropertyDefinition
from .broken_rule_set import BrokenRuleSet


@dataclass
class ValidationContext:
    """Reads property values for validation rules and collects failures."""

    get_value: Callable[[PropertyDefinition], Any]
    broken_rules: BrokenRuleSet


@dataclass
class AuthorizationContext:
    """Describes one permission check: who wants to do what on which target."""

    action: AuthorizationAction
    target_name: Optional[str]
    principal: Any
    broken_rules: BrokenRuleSet
    no_access_behavior: NoAccessBehavior = NoAccessBehavior.SHOW_ERROR
    get_value: Optional[Callable[[PropertyDefinition], Any]] = None
    set_value: Optional[Callable[[PropertyDefinition, Any], Any]] = None
