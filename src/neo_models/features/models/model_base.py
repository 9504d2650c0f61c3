"""Plumbing shared by business objects and collections.

Covers the members the data portal relies on that do not depend on
property values: identity, principal, permission checks, DAO lookup,
lifecycle events and the reentrancy flag.
"""

import logging
from typing import Any, Optional

from ...core.exceptions import ModelError
from ...config.constants import AuthorizationAction
from ...config.manager import get_configuration
from ..data_portal.entities import DataPortalEventArgs, EventHandlerList, ModelEventEmitter
from ..rules.entities import AuthorizationContext, BrokenRuleSet

logger = logging.getLogger(__name__)


class ModelBase:
    """Base of BusinessObject and ModelCollection.

    Attribute names starting with an underscore are internal; every
    other attribute name of a business object is a model property.
    """

    def __init__(self, definition: Any, parent: Any = None, event_handlers: Optional[EventHandlerList] = None):
        self._definition = definition
        self._parent = parent
        self._event_handlers = event_handlers
        self._broken_rules = BrokenRuleSet(definition.name)
        self._emitter = ModelEventEmitter(definition.name)
        if event_handlers is not None:
            event_handlers.apply(self._emitter)
        self._principal = parent._principal if parent is not None else get_configuration().get_user()
        self._dao = None
        self._busy = False

    # Identity

    @property
    def _model_name(self) -> str:
        return self._definition.name

    @property
    def _model_description(self) -> str:
        return self._definition.description

    @property
    def _is_root(self) -> bool:
        return self._parent is None and self._definition.kind.is_root

    @property
    def _data_source(self) -> str:
        return self._definition.data_source

    @property
    def _extensions(self) -> Any:
        return self._definition.extensions

    # Collaborators

    def _has_permission(self, action: AuthorizationAction, target: Optional[str] = None) -> bool:
        context = AuthorizationContext(
            action=action,
            target_name=target,
            principal=self._principal,
            broken_rules=self._broken_rules,
            no_access_behavior=get_configuration().settings.no_access_behavior,
        )
        return self._definition.evaluator.has_permission(context)

    def _find_dao(self) -> Any:
        if self._dao is None:
            extensions = self._extensions
            if extensions.dao is not None:
                self._dao = extensions.dao
            else:
                builder = extensions.dao_builder or get_configuration().dao_builder
                if builder is not None:
                    self._dao = builder(self._data_source, self._model_name)
                    logger.debug(f"Built DAO {type(self._dao).__name__} for {self._model_name}")
        return self._dao

    def _get_dao(self) -> Any:
        dao = self._find_dao()
        if dao is None:
            raise ModelError("no_dao", self._model_name)
        return dao

    def _owner(self) -> Any:
        """The business object this instance belongs to, skipping collections."""
        parent = self._parent
        if parent is not None and parent._is_collection:
            return parent._parent
        return parent

    def _mark_clean(self) -> None:
        """Forget per-property dirty bits after the values were persisted."""

    # Events

    async def _emit(self, args: DataPortalEventArgs) -> None:
        await self._emitter.emit(args, self)

    def on(self, event: Any, handler: Any) -> None:
        """Register a handler of a data portal event."""
        self._emitter.on(event, handler)

    def off(self, event: Any, handler: Any) -> bool:
        """Remove a handler of a data portal event."""
        return self._emitter.off(event, handler)
