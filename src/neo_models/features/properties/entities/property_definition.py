"""Property definition entity.

Describes one property of a model: its name, its data type or child
definition, its flags and its optional custom accessors.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from ....core.exceptions import ConstructorError
from ....config.constants import PropertyFlag
from .data_types import DataType
from .protocols import ChildDefinition

# getter(ctx) -> value
PropertyGetter = Callable[[Any], Any]
# setter(ctx, value) -> bool
PropertySetter = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class PropertyDefinition:
    """Immutable description of a model property."""

    name: str
    kind: Union[DataType, ChildDefinition]
    flags: PropertyFlag = PropertyFlag.NONE
    getter: Optional[PropertyGetter] = field(default=None, compare=False)
    setter: Optional[PropertySetter] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise ConstructorError("PropertyDefinition", "name", "must be a valid identifier.")
        if self.name.startswith("_"):
            raise ConstructorError("PropertyDefinition", "name", "must not start with an underscore.")
        if not isinstance(self.kind, (DataType, ChildDefinition)):
            raise ConstructorError(
                "PropertyDefinition", "kind", "must be a data type or a model definition."
            )
        try:
            object.__setattr__(self, "flags", PropertyFlag(self.flags or 0))
        except (TypeError, ValueError):
            raise ConstructorError("PropertyDefinition", "flags", "must be a PropertyFlag value.")
        if self.getter is not None and not callable(self.getter):
            raise ConstructorError("PropertyDefinition", "getter", "must be a function.")
        if self.setter is not None and not callable(self.setter):
            raise ConstructorError("PropertyDefinition", "setter", "must be a function.")

    @property
    def is_child(self) -> bool:
        return not isinstance(self.kind, DataType)

    @property
    def is_key(self) -> bool:
        return bool(self.flags & PropertyFlag.KEY)

    @property
    def is_parent_key(self) -> bool:
        return bool(self.flags & PropertyFlag.PARENT_KEY)

    @property
    def is_read_only(self) -> bool:
        return bool(self.flags & PropertyFlag.READ_ONLY)

    @property
    def is_on_dto(self) -> bool:
        """Child properties travel as nested DTO slices, not as own values."""
        return not self.is_child and not self.flags & PropertyFlag.ON_CTO_ONLY

    @property
    def is_on_cto(self) -> bool:
        return not self.flags & PropertyFlag.ON_DTO_ONLY

    def __str__(self) -> str:
        return f"{self.name}: {self.kind}"
