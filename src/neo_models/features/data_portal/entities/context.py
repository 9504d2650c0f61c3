"""Context of data portal extension hooks."""

from typing import Any, Callable, List

from ...properties.entities import PropertyCatalog, PropertyDefinition


class DataPortalContext:
    """Gives a data_* extension hook access to the instance being persisted.

    Values are read and written through the property store, bypassing
    authorization; writes during a hook do not change the model state.
    """

    def __init__(
        self,
        dao: Any,
        catalog: PropertyCatalog,
        read: Callable[[PropertyDefinition], Any],
        write: Callable[[PropertyDefinition, Any], Any],
        connection: Any = None,
        principal: Any = None,
        is_self_dirty: bool = False,
    ):
        self.dao = dao
        self._catalog = catalog
        self._read = read
        self._write = write
        self.connection = connection
        self.principal = principal
        self.is_self_dirty = is_self_dirty

    @property
    def properties(self) -> List[PropertyDefinition]:
        return list(self._catalog)

    def get_value(self, name: str) -> Any:
        return self._read(self._catalog.get(name))

    def set_value(self, name: str, value: Any) -> None:
        self._write(self._catalog.get(name), value)

