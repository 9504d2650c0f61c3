"""Contexts handed to custom property accessors and transfer hooks."""

from typing import Any, Callable, List, Optional

from ....core.exceptions import ModelError
from .property_catalog import PropertyCatalog
from .property_definition import PropertyDefinition

Reader = Callable[[PropertyDefinition], Any]
Writer = Callable[[PropertyDefinition, Any], Any]


class PropertyContext:
    """Gives a custom getter or setter access to the other properties.

    Values are read and written through the store directly, bypassing
    authorization and custom accessors.
    """

    def __init__(
        self,
        catalog: PropertyCatalog,
        read: Reader,
        write: Writer,
        primary_property: Optional[PropertyDefinition] = None,
    ):
        self._catalog = catalog
        self._read = read
        self._write = write
        self.primary_property = primary_property

    @property
    def properties(self) -> PropertyCatalog:
        return self._catalog

    def with_property(self, prop: PropertyDefinition) -> "PropertyContext":
        return PropertyContext(self._catalog, self._read, self._write, prop)

    def get_value(self, name: Optional[str] = None) -> Any:
        """Read a property; the primary property when no name is given."""
        prop = self._catalog.get(name) if name else self.primary_property
        if prop is None:
            raise ModelError("no_property", self._catalog.model_name, name)
        return self._read(prop)

    def set_value(self, name: str, value: Any) -> Any:
        return self._write(self._catalog.get(name), value)


class TransferContext:
    """Context of to_dto, from_dto, to_cto and from_cto extension hooks.

    A context created for reading has no writer and vice versa; calling
    the missing direction raises ModelError.
    """

    def __init__(
        self,
        catalog: PropertyCatalog,
        properties: List[PropertyDefinition],
        get_value: Optional[Reader] = None,
        set_value: Optional[Writer] = None,
    ):
        self._catalog = catalog
        self.properties = properties
        self._get_value = get_value
        self._set_value = set_value

    def get_value(self, name: str) -> Any:
        if self._get_value is None:
            raise ModelError("get_value")
        return self._get_value(self._catalog.get(name))

    def set_value(self, name: str, value: Any) -> None:
        if self._set_value is None:
            raise ModelError("set_value")
        self._set_value(self._catalog.get(name), value)
