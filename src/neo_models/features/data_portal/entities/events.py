"""
Lifecycle events of the data portal.

Handlers are plain functions or coroutines called with the event
arguments and the model instance. A failing handler is logged and does
not stop the action or the other handlers.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ....core.exceptions import MethodError
from ....config.constants import DataPortalAction, DataPortalEvent, parse_enum
from ....utils import maybe_await

logger = logging.getLogger(__name__)

# handler(args, instance) -> None or awaitable
EventHandler = Callable[["DataPortalEventArgs", Any], Any]


@dataclass(frozen=True)
class DataPortalEventArgs:
    """Arguments passed to data portal event handlers."""

    event: DataPortalEvent
    model_name: str
    action: DataPortalAction
    method_name: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event": self.event.value,
            "model_name": self.model_name,
            "action": self.action.value,
            "method_name": self.method_name,
            "error": str(self.error) if self.error else None,
        }


class ModelEventEmitter:
    """Handler registry of one model instance."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        self._handlers: Dict[DataPortalEvent, List[EventHandler]] = defaultdict(list)

    def on(self, event: Any, handler: EventHandler) -> None:
        if not callable(handler):
            raise MethodError("ModelEventEmitter", "on", "handler", "must be a function.")
        self._handlers[parse_enum(DataPortalEvent, event)].append(handler)

    def off(self, event: Any, handler: EventHandler) -> bool:
        """Remove a handler; returns False when it was not registered."""
        handlers = self._handlers[parse_enum(DataPortalEvent, event)]
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def handler_count(self, event: Any) -> int:
        return len(self._handlers[parse_enum(DataPortalEvent, event)])

    async def emit(self, args: DataPortalEventArgs, instance: Any) -> None:
        handlers = list(self._handlers.get(args.event, ()))
        if not handlers:
            return
        logger.debug(f"Emitting {args.event.value} of {self.model_name} to {len(handlers)} handlers")
        for handler in handlers:
            try:
                await maybe_await(handler(args, instance))
            except Exception as e:
                logger.error(
                    f"Handler of {args.event.value} on {self.model_name} failed: {e}",
                    exc_info=True,
                )


class EventHandlerList:
    """Handlers to register on a new instance and on all of its children."""

    def __init__(self):
        self._items: List[Tuple[DataPortalEvent, EventHandler]] = []

    def add(self, event: Any, handler: EventHandler) -> "EventHandlerList":
        if not callable(handler):
            raise MethodError("EventHandlerList", "add", "handler", "must be a function.")
        self._items.append((parse_enum(DataPortalEvent, event), handler))
        return self

    def apply(self, emitter: ModelEventEmitter) -> None:
        for event, handler in self._items:
            emitter.on(event, handler)

    def __len__(self) -> int:
        return len(self._items)
