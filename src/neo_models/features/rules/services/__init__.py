"""Rule services package."""

from .rule_catalog import RuleCatalog, RuleCatalogBuilder
from .permission_evaluator import PermissionEvaluator

__all__ = [
    "RuleCatalog",
    "RuleCatalogBuilder",
    "PermissionEvaluator",
]
