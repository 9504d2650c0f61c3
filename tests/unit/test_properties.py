"""Tests for data types, property definitions, catalogs, stores and contexts."""

import decimal
from datetime import datetime

import pytest

from neo_models.config import PropertyFlag
from neo_models.core.exceptions import ConstructorError, DataTypeError, ModelError
from neo_models.features.properties import (
    Boolean,
    DateTime,
    Decimal,
    Integer,
    PropertyCatalogBuilder,
    PropertyContext,
    PropertyDefinition,
    PropertyStore,
    Text,
    TransferContext,
)


class TestDataTypes:
    """Test value checks of the primitive data types."""

    @pytest.mark.parametrize("data_type, valid, invalid", [
        (Text(), "Pen", 5),
        (Integer(), 5, True),
        (Decimal(), decimal.Decimal("1.5"), "1.5"),
        (Boolean(), False, 0),
        (DateTime(), datetime(2024, 1, 1), "2024-01-01"),
    ])
    def test_check(self, data_type, valid, invalid):
        data_type.check(valid)
        data_type.check(None)
        with pytest.raises(DataTypeError):
            data_type.check(invalid)

    def test_empty_text_has_no_value(self):
        assert not Text().has_value("")
        assert not Text().has_value(None)
        assert Text().has_value("x")

    def test_zero_has_value(self):
        assert Integer().has_value(0)
        assert Boolean().has_value(False)

    def test_name(self):
        assert Integer().name == "Integer"
        assert str(Decimal()) == "Decimal"


class TestPropertyDefinition:
    """Test validation and flags of property definitions."""

    def test_flags(self):
        prop = PropertyDefinition("order_key", Integer(), PropertyFlag.KEY | PropertyFlag.READ_ONLY)
        assert prop.is_key
        assert prop.is_read_only
        assert not prop.is_parent_key
        assert prop.is_on_dto and prop.is_on_cto
        assert not prop.is_child

    def test_transfer_flags(self):
        assert not PropertyDefinition("secret", Text(), PropertyFlag.ON_DTO_ONLY).is_on_cto
        assert not PropertyDefinition("display", Text(), PropertyFlag.ON_CTO_ONLY).is_on_dto

    @pytest.mark.parametrize("name", ["", "not valid", "_hidden", 3])
    def test_invalid_name(self, name):
        with pytest.raises(ConstructorError):
            PropertyDefinition(name, Text())

    def test_invalid_kind(self):
        with pytest.raises(ConstructorError):
            PropertyDefinition("quantity", int)

    def test_invalid_accessor(self):
        with pytest.raises(ConstructorError):
            PropertyDefinition("quantity", Integer(), getter="get")


class TestPropertyCatalog:
    """Test the builder and the sealed catalog."""

    @pytest.fixture
    def catalog(self):
        builder = PropertyCatalogBuilder("OrderLine")
        builder.add("order_key", Integer(), PropertyFlag.PARENT_KEY)
        builder.add("line_no", Integer(), PropertyFlag.KEY)
        builder.add("product", Text())
        builder.add("note", Text(), PropertyFlag.ON_CTO_ONLY)
        return builder.build()

    def test_order_and_lookup(self, catalog):
        assert catalog.names() == ["order_key", "line_no", "product", "note"]
        assert "product" in catalog
        assert catalog.find("missing") is None
        assert len(catalog) == 4

    def test_get_unknown_property(self, catalog):
        with pytest.raises(ModelError) as exc_info:
            catalog.get("price")
        assert exc_info.value.error_code == "no_property"

    def test_filters(self, catalog):
        assert [p.name for p in catalog.keys()] == ["line_no"]
        assert [p.name for p in catalog.parent_keys()] == ["order_key"]
        assert [p.name for p in catalog.on_dto()] == ["order_key", "line_no", "product"]
        assert catalog.children() == []

    def test_key_helpers(self, catalog):
        values = {"order_key": 1, "line_no": 3}
        read = lambda prop: values.get(prop.name)
        assert catalog.get_key(read) == 3
        assert catalog.key_equals({"line_no": 3}, read)
        assert not catalog.key_equals({"line_no": 4}, read)

    def test_composite_key(self):
        builder = PropertyCatalogBuilder("Stock")
        builder.add("warehouse", Text(), PropertyFlag.KEY)
        builder.add("product", Text(), PropertyFlag.KEY)
        catalog = builder.build()
        values = {"warehouse": "W1", "product": "Pen"}
        assert catalog.get_key(lambda prop: values[prop.name]) == values

    def test_no_key(self):
        builder = PropertyCatalogBuilder("Note")
        builder.add("text", Text())
        with pytest.raises(ModelError) as exc_info:
            builder.build().get_key(lambda prop: None)
        assert exc_info.value.error_code == "no_key"

    def test_duplicate_and_sealed(self):
        builder = PropertyCatalogBuilder("Order")
        builder.add("customer", Text())
        with pytest.raises(ModelError) as exc_info:
            builder.add("customer", Text())
        assert exc_info.value.error_code == "duplicate_property"
        builder.build()
        assert builder.is_sealed
        with pytest.raises(ModelError):
            builder.add("total", Decimal())


class TestPropertyStore:
    """Test value storage, change detection and snapshots."""

    @pytest.fixture
    def quantity(self):
        return PropertyDefinition("quantity", Integer())

    def test_set_value_reports_change(self, quantity):
        store = PropertyStore()
        store.init_value(quantity)
        assert store.set_value(quantity, 5)
        assert not store.set_value(quantity, 5)
        assert store.is_dirty(quantity)
        store.mark_clean()
        assert not store.is_dirty(quantity)

    def test_set_value_checks_type(self, quantity):
        store = PropertyStore()
        store.init_value(quantity)
        with pytest.raises(DataTypeError):
            store.set_value(quantity, "five")
        assert store.get_value(quantity) is None

    def test_snapshot_restore(self, quantity):
        store = PropertyStore()
        store.init_value(quantity, 1)
        snapshot = store.snapshot()
        store.set_value(quantity, 2)
        store.restore(snapshot)
        assert store.get_value(quantity) == 1
        assert not store.is_dirty(quantity)


class TestContexts:
    """Test the contexts handed to accessors and transfer hooks."""

    @pytest.fixture
    def catalog(self):
        builder = PropertyCatalogBuilder("Stock")
        builder.add("quantity", Integer())
        builder.add("price", Decimal())
        return builder.build()

    def test_property_context(self, catalog):
        values = {"quantity": 2, "price": 1.5}
        context = PropertyContext(
            catalog,
            lambda prop: values[prop.name],
            lambda prop, value: values.__setitem__(prop.name, value),
        ).with_property(catalog.get("quantity"))
        assert context.get_value() == 2
        assert context.get_value("price") == 1.5
        context.set_value("price", 2.0)
        assert values["price"] == 2.0

    def test_transfer_context_directions(self, catalog):
        reading = TransferContext(catalog, list(catalog), get_value=lambda prop: prop.name)
        assert reading.get_value("quantity") == "quantity"
        with pytest.raises(ModelError) as exc_info:
            reading.set_value("quantity", 1)
        assert exc_info.value.error_code == "set_value"

        writing = TransferContext(catalog, list(catalog), set_value=lambda prop, value: None)
        with pytest.raises(ModelError) as exc_info:
            writing.get_value("quantity")
        assert exc_info.value.error_code == "get_value"
