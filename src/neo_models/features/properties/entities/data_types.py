"""Primitive data types of model properties.

A data type verifies the values written to a property and decides
whether a value counts as present. None is accepted by every type.
"""

import decimal
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ....core.exceptions import DataTypeError


@dataclass(frozen=True)
class DataType(ABC):
    """Base class of property data types."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        """Return True when a non-None value belongs to this type."""
        ...

    def check(self, value: Any) -> None:
        """Raise DataTypeError when the value does not belong to this type."""
        if value is not None and not self.is_valid(value):
            raise DataTypeError(self.name, value)

    def has_value(self, value: Any) -> bool:
        self.check(value)
        return value is not None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Text(DataType):
    """Unicode string. The empty string counts as no value."""

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, str)

    def has_value(self, value: Any) -> bool:
        self.check(value)
        return value is not None and value != ""


@dataclass(frozen=True)
class Integer(DataType):
    def is_valid(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Decimal(DataType):
    """Any real number: int, float or decimal.Decimal."""

    def is_valid(self, value: Any) -> bool:
        if isinstance(value, bool):
            return False
        return isinstance(value, (int, float, decimal.Decimal))


@dataclass(frozen=True)
class Boolean(DataType):
    def is_valid(self, value: Any) -> bool:
        return isinstance(value, bool)


@dataclass(frozen=True)
class DateTime(DataType):
    def is_valid(self, value: Any) -> bool:
        return isinstance(value, datetime)
