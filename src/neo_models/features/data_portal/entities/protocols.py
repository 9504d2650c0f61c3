"""Protocol interfaces of the data portal collaborators.

Every method may return its result directly or as an awaitable; the
data portal supports both.
"""

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConnectionManager(Protocol):
    """Protocol for opening connections and transactions on a data source."""

    @abstractmethod
    def open_connection(self, data_source: str) -> Any:
        """Open a connection for reading."""
        ...

    @abstractmethod
    def close_connection(self, data_source: str, connection: Any) -> Any:
        """Close a connection opened by open_connection."""
        ...

    @abstractmethod
    def begin_transaction(self, data_source: str) -> Any:
        """Open a connection and start a transaction on it."""
        ...

    @abstractmethod
    def commit_transaction(self, data_source: str, connection: Any) -> Any:
        """Commit the transaction and release its connection."""
        ...

    @abstractmethod
    def rollback_transaction(self, data_source: str, connection: Any) -> Any:
        """Roll back the transaction and release its connection."""
        ...


@runtime_checkable
class Principal(Protocol):
    """Protocol for the user checked by authorization rules."""

    @abstractmethod
    def is_in_role(self, role: str) -> bool:
        """Check role membership."""
        ...
