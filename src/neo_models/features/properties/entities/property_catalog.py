"""Property catalog and its builder.

The builder collects property definitions for one model; build() seals
it into an immutable catalog shared by every instance of the model.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from ....core.exceptions import ModelError
from ....config.constants import PropertyFlag
from .property_definition import PropertyDefinition, PropertyGetter, PropertySetter

logger = logging.getLogger(__name__)

ValueReader = Callable[[PropertyDefinition], Any]


class PropertyCatalog:
    """Ordered, name-unique and immutable set of property definitions."""

    __slots__ = ("_model_name", "_properties", "_by_name")

    def __init__(self, model_name: str, properties: Iterable[PropertyDefinition]):
        self._model_name = model_name
        self._properties: Tuple[PropertyDefinition, ...] = tuple(properties)
        self._by_name: Dict[str, PropertyDefinition] = {p.name: p for p in self._properties}

    @property
    def model_name(self) -> str:
        return self._model_name

    def __iter__(self) -> Iterator[PropertyDefinition]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def names(self) -> List[str]:
        return [p.name for p in self._properties]

    def get(self, name: str) -> PropertyDefinition:
        """Return the property with the given name or raise ModelError."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ModelError("no_property", self._model_name, name) from None

    def find(self, name: str) -> Optional[PropertyDefinition]:
        return self._by_name.get(name)

    def on_dto(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.is_on_dto]

    def on_cto(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.is_on_cto]

    def keys(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.is_key]

    def parent_keys(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.is_parent_key]

    def children(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if p.is_child]

    def primitives(self) -> List[PropertyDefinition]:
        return [p for p in self._properties if not p.is_child]

    def get_key(self, get_value: ValueReader) -> Any:
        """Return the key value, or a dict of key values for composite keys.

        Raises:
            ModelError: When no property is flagged as key
        """
        keys = self.keys()
        if not keys:
            raise ModelError("no_key", self._model_name)
        if len(keys) == 1:
            return get_value(keys[0])
        return {p.name: get_value(p) for p in keys}

    def key_equals(self, data: Dict[str, Any], get_value: ValueReader) -> bool:
        """Check whether a transfer object carries the current key."""
        keys = self.keys()
        if not keys:
            raise ModelError("no_key", self._model_name)
        return all(data.get(p.name) == get_value(p) for p in keys)

    def verify_child_kinds(self, allowed: Iterable[Any]) -> None:
        """Raise ModelError when a child property has a kind the parent cannot hold."""
        allowed = tuple(allowed)
        for prop in self.children():
            if prop.kind.kind not in allowed:
                raise ModelError(
                    "invalid_child",
                    self._model_name,
                    prop.name,
                    ", ".join(str(getattr(kind, "value", kind)) for kind in allowed),
                    prop.kind.kind.value,
                )

    def __repr__(self) -> str:
        return f"PropertyCatalog({self._model_name!r}, {self.names()!r})"


class PropertyCatalogBuilder:
    """Collects property definitions before the catalog is sealed."""

    def __init__(self, model_name: str):
        self._model_name = model_name
        self._properties: List[PropertyDefinition] = []
        self._sealed = False

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def add(
        self,
        name: str,
        kind: Any,
        flags: PropertyFlag = PropertyFlag.NONE,
        getter: Optional[PropertyGetter] = None,
        setter: Optional[PropertySetter] = None,
    ) -> PropertyDefinition:
        if self._sealed:
            raise ModelError("sealed", self._model_name)
        if any(p.name == name for p in self._properties):
            raise ModelError("duplicate_property", self._model_name, name)
        prop = PropertyDefinition(name, kind, flags, getter, setter)
        self._properties.append(prop)
        return prop

    def build(self) -> PropertyCatalog:
        if self._sealed:
            raise ModelError("sealed", self._model_name)
        self._sealed = True
        logger.debug(f"Sealed property catalog of {self._model_name} with {len(self._properties)} properties")
        return PropertyCatalog(self._model_name, self._properties)
