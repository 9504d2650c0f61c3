"""Models feature for neo-models.

- definition: model and collection definitions
- extensions: data access settings and hook overrides
- business_object: instances of model definitions
- collections: instances of collection definitions
"""

from .extensions import ModelExtensions
from .model_base import ModelBase
from .business_object import BusinessObject
from .collections import ModelCollection, CollectionTransfer
from .definition import ModelDefinition, CollectionDefinition, RESERVED_NAMES

__all__ = [
    "ModelExtensions",
    "ModelBase",
    "BusinessObject",
    "ModelCollection",
    "CollectionTransfer",
    "ModelDefinition",
    "CollectionDefinition",
    "RESERVED_NAMES",
]
