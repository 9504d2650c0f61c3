"""Per-instance collection of broken rules."""

from typing import Dict, Iterator, List, Optional, Tuple

from ....config.constants import RuleSeverity
from .broken_rule import BrokenRule
from .broken_rules_output import BrokenRulesOutput


class BrokenRuleSet:
    """Broken rules of one model instance.

    At most one entry exists per (property, rule name) pair; adding a
    failure of the same rule for the same property replaces the earlier
    entry.
    """

    def __init__(self, model_name: str):
        self.model_name = model_name
        self._rules: Dict[Tuple[Optional[str], str], BrokenRule] = {}

    def add(self, rule: BrokenRule) -> None:
        self._rules[rule.key] = rule

    def remove(self, property_name: Optional[str], rule_name: str) -> None:
        self._rules.pop((property_name, rule_name), None)

    def clear(self, property_name: Optional[str] = None, include_preserved: bool = False) -> None:
        """Drop the entries of one property, or of all properties when none is given.

        Preserved entries are kept unless include_preserved is set.
        """
        for key, rule in list(self._rules.items()):
            if property_name is not None and rule.property_name != property_name:
                continue
            if rule.is_preserved and not include_preserved:
                continue
            del self._rules[key]

    def clear_property(self, property_name: Optional[str]) -> None:
        """Drop the non-preserved entries of a property or of the object itself."""
        for key, rule in list(self._rules.items()):
            if rule.property_name == property_name and not rule.is_preserved:
                del self._rules[key]

    def __iter__(self) -> Iterator[BrokenRule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, property_name: Optional[str] = None) -> List[BrokenRule]:
        return [rule for rule in self._rules.values() if rule.property_name == property_name]

    def filter(self, severity: RuleSeverity) -> List[BrokenRule]:
        return [rule for rule in self._rules.values() if rule.severity is severity]

    def is_valid(self, property_name: Optional[str] = None) -> bool:
        """Check for error entries of a property, or of any property when none is given."""
        return not any(
            rule.is_error
            for rule in self._rules.values()
            if property_name is None or rule.property_name == property_name
        )

    def output(self, name: Optional[str] = None) -> BrokenRulesOutput:
        output = BrokenRulesOutput(name or self.model_name)
        for rule in self._rules.values():
            output.add(rule)
        return output
