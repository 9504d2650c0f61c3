"""Data portal entities package.

Collaborator protocols, the DAO base class, the hook context and the
lifecycle event primitives.
"""

from .protocols import ConnectionManager, Principal
from .dao import DataAccessObject
from .context import DataPortalContext
from .events import DataPortalEventArgs, ModelEventEmitter, EventHandlerList, EventHandler

__all__ = [
    # Protocols
    "ConnectionManager",
    "Principal",

    # DAO and context
    "DataAccessObject",
    "DataPortalContext",

    # Events
    "DataPortalEventArgs",
    "ModelEventEmitter",
    "EventHandlerList",
    "EventHandler",
]
