"""Rule entities package.

Broken rules and their presentation, rule base classes, per-check
contexts and the principal base class.
"""

from .broken_rule import BrokenRule
from .broken_rules_output import BrokenRulesOutput, BrokenRulesResponse, BrokenRuleResponse
from .broken_rule_set import BrokenRuleSet
from .rule_base import RuleBase, ValidationRule, AuthorizationRule
from .contexts import ValidationContext, AuthorizationContext
from .user_info import UserInfo

__all__ = [
    # Broken rules
    "BrokenRule",
    "BrokenRuleSet",
    "BrokenRulesOutput",
    "BrokenRulesResponse",
    "BrokenRuleResponse",

    # Rule bases
    "RuleBase",
    "ValidationRule",
    "AuthorizationRule",

    # Contexts
    "ValidationContext",
    "AuthorizationContext",

    # Principal
    "UserInfo",
]
