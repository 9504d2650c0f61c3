"""Data portal feature for neo-models.

- entities/: collaborator protocols, DAO base, hook context and events
- services/: the data portal orchestrator
"""

from .entities import (
    ConnectionManager, Principal, DataAccessObject, DataPortalContext,
    DataPortalEventArgs, ModelEventEmitter, EventHandlerList,
)
from .services import DataPortal, data_portal

__all__ = [
    "ConnectionManager",
    "Principal",
    "DataAccessObject",
    "DataPortalContext",
    "DataPortalEventArgs",
    "ModelEventEmitter",
    "EventHandlerList",
    "DataPortal",
    "data_portal",
]
