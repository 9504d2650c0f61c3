"""Broken rule entity.

Records the outcome of a failed validation or authorization check.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ....core.exceptions import ConstructorError
from ....config.constants import RuleSeverity


@dataclass(frozen=True)
class BrokenRule:
    """Immutable record of a rule failure.

    property_name is None for failures that concern the whole object.
    Preserved entries come from authorization checks and survive
    re-validation of the object.
    """

    rule_name: str
    property_name: Optional[str]
    message: str
    severity: RuleSeverity = RuleSeverity.ERROR
    stops_processing: bool = False
    is_preserved: bool = False
    affected_properties: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.rule_name or not isinstance(self.rule_name, str):
            raise ConstructorError("BrokenRule", "rule_name", "must be a non-empty string.")
        if not isinstance(self.message, str):
            raise ConstructorError("BrokenRule", "message", "must be a string.")
        if not isinstance(self.severity, RuleSeverity):
            object.__setattr__(self, "severity", RuleSeverity(self.severity))
        object.__setattr__(self, "affected_properties", tuple(self.affected_properties or ()))

    @property
    def key(self) -> Tuple[Optional[str], str]:
        return self.property_name, self.rule_name

    @property
    def is_error(self) -> bool:
        return self.severity is RuleSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_name": self.rule_name,
            "property_name": self.property_name,
            "message": self.message,
            "severity": self.severity.value,
            "is_preserved": self.is_preserved,
            "affected_properties": list(self.affected_properties),
        }
