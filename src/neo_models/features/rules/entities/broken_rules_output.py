"""Presentation of broken rules.

BrokenRulesOutput is the in-memory tree returned by get_broken_rules();
BrokenRulesResponse is its pydantic rendering for outward consumers.
"""

from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ....config.constants import RuleSeverity
from .broken_rule import BrokenRule


class BrokenRuleResponse(BaseModel):
    """One broken rule as seen by API consumers."""

    rule_name: str = Field(..., description="Name of the failed rule")
    property_name: Optional[str] = Field(default=None, description="Property the rule belongs to")
    message: str = Field(..., description="Message of the failed rule")
    severity: RuleSeverity = Field(default=RuleSeverity.ERROR, description="Severity of the failure")
    is_preserved: bool = Field(default=False, description="Whether the failure survives re-validation")
    affected_properties: List[str] = Field(default_factory=list, description="Other properties involved")


class BrokenRulesResponse(BaseModel):
    """Broken rules of a model and its children."""

    name: str = Field(..., description="Model, property or collection item name")
    count: int = Field(default=0, ge=0, description="Number of broken rules in the whole tree")
    properties: Dict[str, List[BrokenRuleResponse]] = Field(
        default_factory=dict,
        description="Broken rules keyed by property name",
    )
    children: Dict[str, "BrokenRulesResponse"] = Field(
        default_factory=dict,
        description="Broken rules of child models keyed by property name or item index",
    )


BrokenRulesResponse.model_rebuild()


class BrokenRulesOutput:
    """Tree of broken rules keyed by property name.

    Object-level failures are listed under the model name. Child models
    are nested under their property name, collection items under their
    index within the collection.
    """

    def __init__(self, name: str):
        self.name = name
        self.properties: Dict[str, List[BrokenRule]] = {}
        self.children: Dict[str, "BrokenRulesOutput"] = {}

    def add(self, rule: BrokenRule) -> None:
        key = rule.property_name if rule.property_name is not None else self.name
        self.properties.setdefault(key, []).append(rule)

    def add_child(self, name: str, output: Optional["BrokenRulesOutput"]) -> None:
        if output is not None and output.count:
            self.children[name] = output

    def add_children(self, outputs: Iterable[Optional["BrokenRulesOutput"]]) -> None:
        """Nest the outputs of collection items under the index of each item."""
        for index, output in enumerate(outputs):
            self.add_child(str(index), output)

    @property
    def count(self) -> int:
        return sum(len(rules) for rules in self.properties.values()) + sum(
            child.count for child in self.children.values()
        )

    def __len__(self) -> int:
        return self.count

    def __bool__(self) -> bool:
        return self.count > 0

    def filter(self, severity: RuleSeverity) -> "BrokenRulesOutput":
        """Return a copy holding only the rules of the given severity."""
        output = BrokenRulesOutput(self.name)
        for rules in self.properties.values():
            for rule in rules:
                if rule.severity is severity:
                    output.add(rule)
        for name, child in self.children.items():
            output.add_child(name, child.filter(severity))
        return output

    def to_response(self) -> BrokenRulesResponse:
        return BrokenRulesResponse(
            name=self.name,
            count=self.count,
            properties={
                key: [BrokenRuleResponse(**rule.to_dict()) for rule in rules]
                for key, rules in self.properties.items()
            },
            children={name: child.to_response() for name, child in self.children.items()},
        )

    def to_dict(self) -> Dict:
        return self.to_response().model_dump(mode="json")
