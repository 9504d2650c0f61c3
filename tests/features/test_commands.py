"""Tests for command objects."""

import pytest

from neo_models.config import (
    AuthorizationAction,
    CollectionKind,
    DataPortalAction,
    ModelKind,
    PropertyFlag,
)
from neo_models.core.exceptions import DataPortalError, ModelError
from neo_models.features.models import CollectionDefinition, ModelDefinition, ModelExtensions
from neo_models.features.properties import Decimal, Integer, PropertyCatalogBuilder, Text
from neo_models.features.rules import IsInRoleRule, RuleCatalogBuilder


@pytest.fixture
def pricing_dao(make_dao):
    class PricingDao(make_dao):
        async def recalculate(self, connection, dto):
            self._record("recalculate", connection, dto)
            return {
                "updated": 2,
                "changes": [
                    {"product": "Pen", "price": 1.25},
                    {"product": "Ink", "price": 4.5},
                ],
            }

        def execute(self, connection, dto):
            self._record("execute", connection, dto)
            return {"updated": 0}

    return PricingDao("RecalculatePrices")


def build_command(dao=None, rules=None, **hooks):
    change_props = PropertyCatalogBuilder("PriceChange")
    change_props.add("product", Text())
    change_props.add("price", Decimal())
    change = ModelDefinition("PriceChange", ModelKind.READ_ONLY_CHILD, change_props.build())
    changes = CollectionDefinition("PriceChanges", CollectionKind.READ_ONLY_CHILD_COLLECTION, change)

    props = PropertyCatalogBuilder("RecalculatePrices")
    props.add("category", Text())
    props.add("updated", Integer(), PropertyFlag.READ_ONLY)
    props.add("changes", changes)
    return ModelDefinition(
        "RecalculatePrices",
        ModelKind.COMMAND,
        props.build(),
        rules,
        ModelExtensions(dao=dao, **hooks),
    )


class TestCommands:
    """Test creating and executing commands."""

    @pytest.mark.asyncio
    async def test_execute_named_method(self, configured, pricing_dao):
        command = await build_command(pricing_dao).create()
        assert command.state is None
        command.category = "pens"

        assert await command.execute("recalculate") is command

        assert pricing_dao.calls == [("recalculate", "transaction", {"category": "pens", "updated": None})]
        assert command.updated == 2
        assert [(c.product, c.price) for c in command.changes] == [("Pen", 1.25), ("Ink", 4.5)]
        configured.begin_transaction.assert_awaited_once_with("default")
        configured.commit_transaction.assert_awaited_once_with("default", "transaction")

    @pytest.mark.asyncio
    async def test_execute_default_method(self, configured, pricing_dao):
        command = await build_command(pricing_dao).create()
        await command.execute()
        assert pricing_dao.method_names == ["execute"]
        assert command.updated == 0

    @pytest.mark.asyncio
    async def test_execute_hook(self, configured):
        seen = []

        async def data_execute(ctx, method):
            seen.append((method, ctx.get_value("category")))
            return {"updated": 5}

        command = await build_command(data_execute=data_execute).create()
        command.category = "ink"
        await command.execute("recalculate")
        assert seen == [("recalculate", "ink")]
        assert command.updated == 5

    @pytest.mark.asyncio
    async def test_results_are_read_only(self, configured, pricing_dao):
        command = await build_command(pricing_dao).create()
        with pytest.raises(ModelError) as exc_info:
            command.updated = 3
        assert exc_info.value.error_code == "read_only"

    @pytest.mark.asyncio
    async def test_execute_denied(self, configured, pricing_dao):
        rules = RuleCatalogBuilder("RecalculatePrices")
        rules.add(IsInRoleRule(AuthorizationAction.EXECUTE_METHOD, "recalculate", "managers"))
        command = await build_command(pricing_dao, rules.build()).create()

        await command.execute("recalculate")

        assert pricing_dao.calls == []
        assert command.get_broken_rules().properties["recalculate"][0].rule_name == "IsInRole"
        configured.begin_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_execute_failure(self, configured, pricing_dao):
        pricing_dao.fail_on.add("recalculate")
        command = await build_command(pricing_dao).create()
        command.category = "pens"

        with pytest.raises(DataPortalError) as exc_info:
            await command.execute("recalculate")

        assert exc_info.value.action is DataPortalAction.EXECUTE
        configured.rollback_transaction.assert_awaited_once_with("default", "transaction")
        assert command.updated is None
        assert command.category == "pens"

    @pytest.mark.asyncio
    async def test_unsupported_operations(self, configured, pricing_dao, order_definitions):
        command = await build_command(pricing_dao).create()
        with pytest.raises(ModelError):
            await command.save()
        with pytest.raises(ModelError):
            command.remove()
        with pytest.raises(ModelError):
            await build_command(pricing_dao).fetch()

        order = await order_definitions.order.fetch(1)
        with pytest.raises(ModelError) as exc_info:
            await order.execute("recalculate")
        assert exc_info.value.error_code == "not_supported"
