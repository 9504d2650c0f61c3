"""Tests for validation rules, the rule catalog and broken rule bookkeeping."""

import pytest

from neo_models.config import AuthorizationAction, RuleSeverity
from neo_models.core.exceptions import AuthorizationError, ConstructorError, MethodError, ModelError
from neo_models.features.properties import Integer, PropertyDefinition, Text
from neo_models.features.rules import (
    BrokenRule,
    BrokenRuleSet,
    BrokenRulesOutput,
    InformationRule,
    IsInRoleRule,
    IsNotInRoleRule,
    MaxLengthRule,
    MinLengthRule,
    RequiredRule,
    RuleCatalogBuilder,
    ValidationContext,
    ValidationRule,
)


class RecordingRule(ValidationRule):
    """Validation rule that records its runs and optionally fails."""

    def __init__(self, name, prop, log, priority, fails=False, stops_processing=False):
        super().__init__(name, prop, f"{name} failed", priority, stops_processing)
        self.log = log
        self.fails = fails

    def execute(self, inputs):
        self.log.append(self.rule_name)
        return self.result() if self.fails else None


@pytest.fixture
def city():
    return PropertyDefinition("city", Text())


def make_context(values):
    broken_rules = BrokenRuleSet("Address")
    return ValidationContext(get_value=lambda prop: values.get(prop.name), broken_rules=broken_rules)


class TestCommonValidationRules:
    """Test the built-in validation rules."""

    @pytest.mark.parametrize("value", ["Buenos Aires", "New York", "Montevideo"])
    def test_min_length_holds(self, city, value):
        rule = MinLengthRule(city, 8, "The city name is too short.")
        assert rule.execute({"city": value}) is None

    @pytest.mark.parametrize("value", ["London", "", None])
    def test_min_length_broken(self, city, value):
        rule = MinLengthRule(city, 8, "The city name is too short.")
        result = rule.execute({"city": value})
        assert result is not None
        assert result.message == "The city name is too short."
        assert result.severity is RuleSeverity.ERROR
        assert result.property_name == "city"
        assert result.rule_name == "MinLength"

    def test_max_length(self, city):
        rule = MaxLengthRule(city, 6)
        assert rule.execute({"city": "London"}) is None
        assert rule.execute({"city": "Buenos Aires"}).rule_name == "MaxLength"

    def test_required(self):
        quantity = PropertyDefinition("quantity", Integer())
        rule = RequiredRule(quantity)
        assert rule.stops_processing
        assert rule.priority == 50
        assert rule.execute({"quantity": 0}) is None
        assert rule.execute({"quantity": None}).message == "The quantity value is required."

    def test_information(self, city):
        result = InformationRule(city, "Cities are stored in upper case.").execute({})
        assert result.severity is RuleSeverity.INFORMATION
        assert not result.is_error

    def test_invalid_arguments(self, city):
        with pytest.raises(ConstructorError):
            MinLengthRule(city, -1)
        with pytest.raises(ConstructorError):
            InformationRule(city, "")
        with pytest.raises(ConstructorError):
            RecordingRule("", city, [], 10)
        with pytest.raises(ConstructorError):
            RecordingRule("Check", city, [], "high")


class TestRoleRules:
    """Test the role based authorization rules."""

    def test_is_in_role(self, make_user):
        rule = IsInRoleRule(AuthorizationAction.WRITE_PROPERTY, "city", "editors")
        assert rule.execute(make_user("jdoe", ["editors"])) is None
        denial = rule.execute(make_user("guest"))
        assert denial.is_preserved
        assert denial.property_name == "city"

    def test_is_not_in_role(self, make_user):
        rule = IsNotInRoleRule(AuthorizationAction.REMOVE_OBJECT, None, "auditors")
        assert rule.execute(make_user("jdoe", ["editors"])) is None
        assert rule.execute(make_user("audit", ["auditors"])) is not None

    def test_target_accepts_property_definition(self, city):
        rule = IsInRoleRule("read_property", city, "editors")
        assert rule.rule_id == (AuthorizationAction.READ_PROPERTY, "city")

    def test_role_is_required(self):
        with pytest.raises(ConstructorError):
            IsInRoleRule(AuthorizationAction.FETCH_OBJECT, None, "")

    def test_check_raises(self, make_user):
        rule = IsInRoleRule(AuthorizationAction.EXECUTE_METHOD, "recalculate", "managers")
        rule.check(make_user("boss", ["managers"]))
        with pytest.raises(AuthorizationError):
            rule.check(make_user("jdoe"))
        with pytest.raises(AuthorizationError):
            rule.check(None)


class TestRuleCatalog:
    """Test ordering and execution of validation rules."""

    def test_runs_in_descending_priority_and_stops(self, city):
        log = []
        builder = RuleCatalogBuilder("Address")
        builder.add(RecordingRule("Low", city, log, 15))
        builder.add(RecordingRule("High", city, log, 100, fails=True, stops_processing=True))
        catalog = builder.build()
        context = make_context({"city": "Rome"})

        assert not catalog.validate(city, context)
        assert log == ["High"]
        assert [rule.rule_name for rule in context.broken_rules] == ["High"]

    def test_ties_keep_definition_order(self, city):
        log = []
        builder = RuleCatalogBuilder("Address")
        builder.add(RecordingRule("First", city, log, 10))
        builder.add(RecordingRule("Second", city, log, 10))
        builder.build().validate(city, make_context({}))
        assert log == ["First", "Second"]

    def test_revalidation_replaces_entries(self, city):
        builder = RuleCatalogBuilder("Address")
        builder.add(MinLengthRule(city, 8))
        catalog = builder.build()
        values = {"city": "London"}
        context = make_context(values)
        assert not catalog.validate(city, context)
        values["city"] = "Buenos Aires"
        assert catalog.validate(city, context)
        assert len(context.broken_rules) == 0

    def test_object_level_rules_run_after_properties(self, city):
        log = []
        builder = RuleCatalogBuilder("Address")
        builder.add(RecordingRule("Whole", None, log, 100))
        builder.add(RecordingRule("City", city, log, 1))
        builder.build().validate_all([city], make_context({}))
        assert log == ["City", "Whole"]

    def test_builder_rejects_other_objects_and_seals(self, city):
        builder = RuleCatalogBuilder("Address")
        with pytest.raises(MethodError):
            builder.add("Required")
        builder.build()
        with pytest.raises(ModelError) as exc_info:
            builder.add(MinLengthRule(city, 1))
        assert exc_info.value.error_code == "sealed"

    def test_authorization_rules_by_action_and_target(self):
        builder = RuleCatalogBuilder("Address")
        rule = IsInRoleRule(AuthorizationAction.READ_PROPERTY, "city", "editors")
        builder.add(rule)
        catalog = builder.build()
        assert catalog.authorization_rules(AuthorizationAction.READ_PROPERTY, "city") == (rule,)
        assert catalog.authorization_rules(AuthorizationAction.READ_PROPERTY, "street") == ()
        assert not catalog.has_validation_rules()


class TestBrokenRuleSet:
    """Test bookkeeping of broken rules."""

    def test_same_rule_replaces_entry(self):
        rules = BrokenRuleSet("Address")
        rules.add(BrokenRule("MinLength", "city", "too short"))
        rules.add(BrokenRule("MinLength", "city", "still too short"))
        assert len(rules) == 1
        assert rules.get("city")[0].message == "still too short"

    def test_clear_keeps_preserved(self):
        rules = BrokenRuleSet("Address")
        rules.add(BrokenRule("MinLength", "city", "too short"))
        rules.add(BrokenRule("IsInRole", "city", "denied", is_preserved=True))
        rules.clear()
        assert [rule.rule_name for rule in rules] == ["IsInRole"]
        rules.clear(include_preserved=True)
        assert len(rules) == 0

    def test_warnings_do_not_invalidate(self):
        rules = BrokenRuleSet("Address")
        rules.add(BrokenRule("Hint", "city", "check spelling", severity=RuleSeverity.WARNING))
        assert rules.is_valid()
        rules.add(BrokenRule("Required", "street", "required"))
        assert not rules.is_valid()
        assert rules.is_valid("city")
        assert len(rules.filter(RuleSeverity.WARNING)) == 1


class TestBrokenRulesOutput:
    """Test the presentation tree of broken rules."""

    def test_object_rules_listed_under_model_name(self):
        output = BrokenRulesOutput("Order")
        output.add(BrokenRule("Total", None, "total mismatch"))
        output.add(BrokenRule("Required", "customer", "required"))
        assert set(output.properties) == {"Order", "customer"}
        assert output.count == 2

    def test_children_and_filter(self):
        item = BrokenRulesOutput("OrderLine")
        item.add(BrokenRule("Required", "product", "required"))
        item.add(BrokenRule("Hint", "quantity", "large", severity=RuleSeverity.WARNING))
        lines = BrokenRulesOutput("OrderLines")
        lines.add_children([BrokenRulesOutput("OrderLine"), item])
        output = BrokenRulesOutput("Order")
        output.add_child("lines", lines)

        assert output.count == 2
        assert list(output.children["lines"].children) == ["1"]
        warnings = output.filter(RuleSeverity.WARNING)
        assert warnings.count == 1
        assert warnings.children["lines"].children["1"].properties["quantity"][0].rule_name == "Hint"

    def test_to_dict(self):
        output = BrokenRulesOutput("Order")
        output.add(BrokenRule("Required", "customer", "required"))
        data = output.to_dict()
        assert data["name"] == "Order"
        assert data["count"] == 1
        assert data["properties"]["customer"][0]["severity"] == "error"
        assert data["children"] == {}
