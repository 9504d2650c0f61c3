"""Property entities package.

Data types, property definitions, the sealed property catalog and the
per-instance property store.
"""

from .data_types import DataType, Text, Integer, Decimal, Boolean, DateTime
from .protocols import ChildDefinition
from .property_definition import PropertyDefinition, PropertyGetter, PropertySetter
from .property_catalog import PropertyCatalog, PropertyCatalogBuilder
from .property_store import PropertyStore, StoreSnapshot
from .contexts import PropertyContext, TransferContext

__all__ = [
    # Data types
    "DataType",
    "Text",
    "Integer",
    "Decimal",
    "Boolean",
    "DateTime",

    # Protocols
    "ChildDefinition",

    # Definitions
    "PropertyDefinition",
    "PropertyGetter",
    "PropertySetter",
    "PropertyCatalog",
    "PropertyCatalogBuilder",

    # Storage and contexts
    "PropertyStore",
    "StoreSnapshot",
    "PropertyContext",
    "TransferContext",
]
