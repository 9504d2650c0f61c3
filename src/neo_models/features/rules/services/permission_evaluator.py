"""Permission evaluator.

Evaluates the authorization rules of a model for an action and a
target. A denial is recorded in the broken rule set of the instance
and reported as False; the evaluator never raises.
"""

import logging

from ..entities import AuthorizationContext, BrokenRule
from .rule_catalog import RuleCatalog

logger = logging.getLogger(__name__)


class PermissionEvaluator:
    """Checks authorization rules of one model against a principal."""

    def __init__(self, rules: RuleCatalog):
        self.rules = rules

    def has_permission(self, context: AuthorizationContext) -> bool:
        """Return True unless a rule denies the action.

        Rules run in descending priority; the first denial is recorded
        with the severity chosen by the no-access behavior and stops the
        evaluation.
        """
        severity = context.no_access_behavior.to_severity()
        for rule in self.rules.authorization_rules(context.action, context.target_name):
            try:
                result = None if context.principal is not None else rule.result()
                if result is None:
                    result = rule.execute(context.principal)
            except Exception as e:
                logger.error(
                    f"Authorization rule {rule.rule_name} of {self.rules.model_name} failed "
                    f"for {context.action.value} {context.target_name or ''}: {e}"
                )
                result = rule.result()

            if result is None:
                context.broken_rules.remove(rule.target, rule.rule_name)
                continue

            context.broken_rules.add(
                BrokenRule(
                    rule_name=result.rule_name,
                    property_name=result.property_name,
                    message=result.message,
                    severity=severity,
                    stops_processing=result.stops_processing,
                    is_preserved=True,
                    affected_properties=result.affected_properties,
                )
            )
            logger.debug(
                f"{self.rules.model_name}: {context.action.value} "
                f"{context.target_name or ''} denied by {rule.rule_name}"
            )
            return False
        return True
