"""Pytest configuration and fixtures for neo-models tests."""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from neo_models.config import (
    CollectionKind,
    ModelKind,
    PropertyFlag,
    configure,
    reset_configuration,
)
from neo_models.features.data_portal import DataAccessObject
from neo_models.features.models import CollectionDefinition, ModelDefinition, ModelExtensions
from neo_models.features.properties import Integer, PropertyCatalogBuilder, Text
from neo_models.features.rules import RequiredRule, RuleCatalogBuilder, UserInfo


class RoleUser(UserInfo):
    """Principal with a fixed set of roles."""

    def __init__(self, user_code, roles=()):
        super().__init__(user_code)
        self.roles = set(roles)

    def is_in_role(self, role):
        return role in self.roles


class RecordingDao(DataAccessObject):
    """DAO that records every call and serves canned rows."""

    def __init__(self, model_name, rows=None, insert_result=None, data_source="default"):
        super().__init__(data_source, model_name)
        self.calls = []
        self.rows = rows if rows is not None else {}
        self.insert_result = insert_result
        self.fail_on = set()

    @property
    def method_names(self):
        return [call[0] for call in self.calls]

    def _record(self, method, connection, *args):
        self.calls.append((method, connection) + args)
        if method in self.fail_on:
            raise RuntimeError(f"{method} rejected")

    async def fetch(self, connection, filter):
        self._record("fetch", connection, filter)
        return self.rows.get(filter)

    async def insert(self, connection, dto):
        self._record("insert", connection, dto)
        return self.insert_result

    async def update(self, connection, dto):
        self._record("update", connection, dto)

    def remove(self, connection, key):
        self._record("remove", connection, key)


@pytest.fixture(autouse=True)
def reset_models_configuration():
    """Start and finish every test with an empty configuration."""
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def connection_manager():
    """Mock connection manager handing out fixed connection objects."""
    manager = MagicMock()
    manager.open_connection = AsyncMock(return_value="connection")
    manager.close_connection = AsyncMock()
    manager.begin_transaction = AsyncMock(return_value="transaction")
    manager.commit_transaction = AsyncMock()
    manager.rollback_transaction = AsyncMock()
    return manager


@pytest.fixture
def user():
    return RoleUser("jdoe", roles=["sales"])


@pytest.fixture
def configured(connection_manager, user):
    """Configuration with the mock connection manager and a sales user."""
    configure(connection_manager=connection_manager, user_reader=lambda: user)
    return connection_manager


@pytest.fixture
def order_daos():
    return SimpleNamespace(
        order=RecordingDao(
            "Order",
            rows={
                1: {
                    "order_key": 1,
                    "customer": "ACME",
                    "lines": [{"order_key": 1, "line_no": 1, "product": "Pen", "quantity": 2}],
                },
            },
            insert_result={"order_key": 7},
        ),
        line=RecordingDao("OrderLine"),
    )


def build_order_definitions(order_daos, order_rules=None):
    """Order root with an editable collection of order lines.

    order_rules is an optional callable receiving the rule builder and
    the property definitions of the order.
    """
    line_props = PropertyCatalogBuilder("OrderLine")
    line_props.add("order_key", Integer(), PropertyFlag.PARENT_KEY)
    line_props.add("line_no", Integer(), PropertyFlag.KEY)
    product = line_props.add("product", Text())
    line_props.add("quantity", Integer())
    line_rules = RuleCatalogBuilder("OrderLine")
    line_rules.add(RequiredRule(product))
    line = ModelDefinition(
        "OrderLine",
        ModelKind.EDITABLE_CHILD,
        line_props.build(),
        line_rules.build(),
        ModelExtensions(dao=order_daos.line),
    )
    lines = CollectionDefinition("OrderLines", CollectionKind.EDITABLE_CHILD_COLLECTION, line)

    props = PropertyCatalogBuilder("Order")
    order_key = props.add("order_key", Integer(), PropertyFlag.KEY | PropertyFlag.READ_ONLY)
    customer = props.add("customer", Text())
    props.add("lines", lines)
    rules = RuleCatalogBuilder("Order")
    rules.add(RequiredRule(customer))
    if order_rules is not None:
        order_rules(rules, SimpleNamespace(order_key=order_key, customer=customer))
    order = ModelDefinition(
        "Order",
        ModelKind.EDITABLE_ROOT,
        props.build(),
        rules.build(),
        ModelExtensions(dao=order_daos.order),
    )
    return SimpleNamespace(order=order, line=line, lines=lines)


@pytest.fixture
def order_definitions(order_daos):
    return build_order_definitions(order_daos)


@pytest.fixture
def make_order_definitions(order_daos):
    """Factory of order definitions with extra order rules."""

    def make(order_rules=None):
        return build_order_definitions(order_daos, order_rules)

    return make


@pytest.fixture
def make_dao():
    """Factory of recording DAOs."""
    return RecordingDao


@pytest.fixture
def make_user():
    """Factory of principals with the given roles."""
    return RoleUser
