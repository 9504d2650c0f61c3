"""Per-instance storage of property values and dirty bits."""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet

from .property_definition import PropertyDefinition


@dataclass(frozen=True)
class StoreSnapshot:
    """Copy of a store's values and dirty bits taken before an action."""

    values: Dict[str, Any]
    dirty: FrozenSet[str]


class PropertyStore:
    """Current value and dirty flag of each property of one model instance.

    Child objects are compared by identity, primitive values by equality.
    Values written through set_value are checked against the data type
    of the property first.
    """

    __slots__ = ("_values", "_dirty")

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._dirty: set = set()

    def init_value(self, prop: PropertyDefinition, initial: Any = None) -> None:
        if not prop.is_child:
            prop.kind.check(initial)
        self._values[prop.name] = initial
        self._dirty.discard(prop.name)

    def get_value(self, prop: PropertyDefinition) -> Any:
        return self._values.get(prop.name)

    def set_value(self, prop: PropertyDefinition, value: Any) -> bool:
        """Store a value and return True when it differs from the current one.

        Raises:
            DataTypeError: When the value does not match the property type
        """
        current = self._values.get(prop.name)
        if prop.is_child:
            changed = current is not value
        else:
            prop.kind.check(value)
            changed = current != value
        if changed:
            self._values[prop.name] = value
            self._dirty.add(prop.name)
        return changed

    def is_dirty(self, prop: PropertyDefinition) -> bool:
        return prop.name in self._dirty

    def mark_clean(self) -> None:
        self._dirty.clear()

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(dict(self._values), frozenset(self._dirty))

    def restore(self, snapshot: StoreSnapshot) -> None:
        self._values = dict(snapshot.values)
        self._dirty = set(snapshot.dirty)
