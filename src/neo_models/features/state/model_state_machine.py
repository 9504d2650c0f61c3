"""Lifecycle state machine of editable models.

Transitions (from -> to):

    unset             -> pristine, created
    pristine          -> changed, marked_for_removal
    created           -> pristine, removed (marked_for_removal short-circuits to removed)
    changed           -> pristine, marked_for_removal
    marked_for_removal -> removed

A transition to the current state is a no-op, as is changed from
created or marked_for_removal. Every other transition raises
ModelError("transition").
"""

import logging
from typing import Callable, Optional, Tuple

from ...core.exceptions import ModelError
from ...config.constants import ModelState

logger = logging.getLogger(__name__)


class ModelStateMachine:
    """Holds the state and the self-dirty flag of one model instance.

    on_change is called after a change that the parent must see, usually
    the parent's child_has_changed(). on_remove_children is called before
    the instance itself is marked for removal.
    """

    _DIRTY_STATES = (ModelState.CREATED, ModelState.CHANGED, ModelState.MARKED_FOR_REMOVAL)

    def __init__(
        self,
        model_name: str,
        on_change: Optional[Callable[[], None]] = None,
        on_remove_children: Optional[Callable[[], None]] = None,
    ):
        self.model_name = model_name
        self._on_change = on_change
        self._on_remove_children = on_remove_children
        self._state = ModelState.UNSET
        self._is_self_dirty = False

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def is_new(self) -> bool:
        return self._state is ModelState.CREATED

    @property
    def is_self_dirty(self) -> bool:
        return self._is_self_dirty

    @property
    def is_dirty(self) -> bool:
        return self._is_self_dirty or self._state in self._DIRTY_STATES

    @property
    def is_deleted(self) -> bool:
        return self._state is ModelState.MARKED_FOR_REMOVAL

    def _illegal(self, target: ModelState) -> ModelError:
        return ModelError("transition", self._state.value, target.value)

    def _set(self, state: ModelState) -> None:
        logger.debug(f"{self.model_name}: {self._state.value} -> {state.value}")
        self._state = state

    def _propagate_change(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def mark_as_created(self) -> None:
        if self._state is ModelState.UNSET:
            self._set(ModelState.CREATED)
            self._is_self_dirty = True
            self._propagate_change()
        elif self._state is not ModelState.CREATED:
            raise self._illegal(ModelState.CREATED)

    def mark_as_pristine(self) -> None:
        if self._state in (ModelState.MARKED_FOR_REMOVAL, ModelState.REMOVED):
            raise self._illegal(ModelState.PRISTINE)
        if self._state is not ModelState.PRISTINE:
            self._set(ModelState.PRISTINE)
        self._is_self_dirty = False

    def mark_as_changed(self, self_caused: bool) -> None:
        """Note a change of the instance itself or of one of its children."""
        if self._state is ModelState.PRISTINE:
            self._set(ModelState.CHANGED)
            self._is_self_dirty = self._is_self_dirty or self_caused
            self._propagate_change()
        elif self._state is ModelState.CREATED:
            self._is_self_dirty = self._is_self_dirty or self_caused
            self._propagate_change()
        elif self._state is ModelState.CHANGED:
            self._is_self_dirty = self._is_self_dirty or self_caused
        elif self._state in (ModelState.UNSET, ModelState.REMOVED):
            raise self._illegal(ModelState.CHANGED)

    def mark_for_removal(self) -> None:
        if self._state in (ModelState.PRISTINE, ModelState.CHANGED):
            if self._on_remove_children is not None:
                self._on_remove_children()
            self._set(ModelState.MARKED_FOR_REMOVAL)
            self._is_self_dirty = True
            self._propagate_change()
        elif self._state is ModelState.CREATED:
            self._set(ModelState.REMOVED)
            self._is_self_dirty = False
        elif self._state is not ModelState.MARKED_FOR_REMOVAL:
            raise self._illegal(ModelState.MARKED_FOR_REMOVAL)

    def mark_as_removed(self) -> None:
        if self._state in (ModelState.CREATED, ModelState.MARKED_FOR_REMOVAL):
            self._set(ModelState.REMOVED)
            self._is_self_dirty = False
        elif self._state is not ModelState.REMOVED:
            raise self._illegal(ModelState.REMOVED)

    def snapshot(self) -> Tuple[ModelState, bool]:
        return self._state, self._is_self_dirty

    def restore(self, snapshot: Tuple[ModelState, bool]) -> None:
        """Put back a state taken by snapshot(), bypassing the transition table."""
        self._state, self._is_self_dirty = snapshot

    def child_has_changed(self) -> None:
        """Called by a child; makes this instance dirty without self-dirtying it.

        Ignored while the instance itself is still being created or fetched.
        """
        if self._state is not ModelState.UNSET:
            self.mark_as_changed(False)

    def __repr__(self) -> str:
        return f"ModelStateMachine({self.model_name!r}, state={self._state.value})"
