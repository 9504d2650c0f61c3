"""Properties feature for neo-models.

- entities/: data types, property definitions, catalogs, stores and contexts
"""

from .entities import (
    DataType, Text, Integer, Decimal, Boolean, DateTime,
    ChildDefinition, PropertyDefinition, PropertyCatalog, PropertyCatalogBuilder,
    PropertyStore, StoreSnapshot, PropertyContext, TransferContext,
)

__all__ = [
    "DataType",
    "Text",
    "Integer",
    "Decimal",
    "Boolean",
    "DateTime",
    "ChildDefinition",
    "PropertyDefinition",
    "PropertyCatalog",
    "PropertyCatalogBuilder",
    "PropertyStore",
    "StoreSnapshot",
    "PropertyContext",
    "TransferContext",
]
