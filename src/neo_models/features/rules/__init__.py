"""Rules feature for neo-models.

- entities/: broken rules, rule bases, contexts and the principal base
- services/: rule catalog and permission evaluator
- common_rules: ready-made validation and authorization rules
"""

from .entities import (
    BrokenRule, BrokenRuleSet, BrokenRulesOutput, BrokenRulesResponse, BrokenRuleResponse,
    RuleBase, ValidationRule, AuthorizationRule,
    ValidationContext, AuthorizationContext, UserInfo,
)
from .services import RuleCatalog, RuleCatalogBuilder, PermissionEvaluator
from .common_rules import (
    RequiredRule, MinLengthRule, MaxLengthRule, InformationRule,
    IsInRoleRule, IsNotInRoleRule,
)

__all__ = [
    # Entities
    "BrokenRule",
    "BrokenRuleSet",
    "BrokenRulesOutput",
    "BrokenRulesResponse",
    "BrokenRuleResponse",
    "RuleBase",
    "ValidationRule",
    "AuthorizationRule",
    "ValidationContext",
    "AuthorizationContext",
    "UserInfo",

    # Services
    "RuleCatalog",
    "RuleCatalogBuilder",
    "PermissionEvaluator",

    # Common rules
    "RequiredRule",
    "MinLengthRule",
    "MaxLengthRule",
    "InformationRule",
    "IsInRoleRule",
    "IsNotInRoleRule",
]
