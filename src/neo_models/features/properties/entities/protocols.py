"""Protocol interfaces for property kinds.

A property either holds a primitive value described by a DataType, or
a child object described by a model or collection definition.
"""

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ChildDefinition(Protocol):
    """Protocol for definitions that can be used as child property kinds."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Model or collection name."""
        ...

    @property
    @abstractmethod
    def kind(self) -> Any:
        """The ModelKind or CollectionKind variant tag."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable variant description used in error messages."""
        ...
