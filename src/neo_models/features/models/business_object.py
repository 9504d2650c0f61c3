"""Business object: one instance of a model definition.

Property values are reached as attributes. Reads and writes go through
a single dispatch that consults the property catalog and the
authorization rules:

- a denied read returns None and records a broken rule;
- a denied write is dropped and records a broken rule;
- writing a read-only property, a child property or any property of a
  read-only model raises ModelError("read_only");
- a changed value re-runs the rules of the property and marks the
  instance as changed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ...core.exceptions import MethodError, ModelError
from ...config.constants import AuthorizationAction, ModelKind, ModelState, RuleSeverity
from ...config.manager import get_configuration
from ...utils import gather_all
from ..data_portal.services import data_portal
from ..data_portal.entities import DataPortalContext, EventHandlerList
from ..properties.entities import (
    PropertyContext,
    PropertyDefinition,
    PropertyStore,
    StoreSnapshot,
    TransferContext,
)
from ..rules.entities import BrokenRulesOutput, ValidationContext
from ..state import ModelStateMachine
from .model_base import ModelBase

logger = logging.getLogger(__name__)

_READ_ONLY_KINDS = (ModelKind.READ_ONLY_ROOT, ModelKind.READ_ONLY_CHILD)


@dataclass(frozen=True)
class ObjectSnapshot:
    """Values and state of an object and of all its descendants."""

    store: StoreSnapshot
    state: Optional[Tuple[ModelState, bool]]
    children: Tuple[Any, ...]


class BusinessObject(ModelBase):
    """Instance of a model definition of any ModelKind."""

    _is_collection = False

    def __init__(self, definition: Any, parent: Any = None, event_handlers: Optional[EventHandlerList] = None):
        super().__init__(definition, parent, event_handlers)
        self._store = PropertyStore()
        self._is_validated = False
        if definition.kind.is_editable:
            self._state = ModelStateMachine(
                definition.name,
                on_change=parent._child_has_changed if parent is not None else None,
                on_remove_children=self._remove_children,
            )
        else:
            self._state = None
        self._property_context = PropertyContext(
            definition.properties, self._store.get_value, self._store.set_value
        )
        for prop in definition.properties:
            if prop.is_child:
                self._store.init_value(prop, prop.kind.new(self, event_handlers))
            else:
                self._store.init_value(prop)

    # Attribute dispatch

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        prop = self._definition.properties.find(name)
        if prop is None:
            raise AttributeError(f"{self._definition.name} has no property named {name}")
        return self._read_property(prop)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        self._write_property(self._definition.properties.get(name), value)

    def _read_property(self, prop: PropertyDefinition) -> Any:
        if not self._has_permission(AuthorizationAction.READ_PROPERTY, prop.name):
            return None
        if prop.getter is not None:
            return prop.getter(self._property_context.with_property(prop))
        return self._store.get_value(prop)

    def _write_property(self, prop: PropertyDefinition, value: Any) -> None:
        if self._definition.kind in _READ_ONLY_KINDS or prop.is_read_only or prop.is_child:
            raise ModelError("read_only", self._model_name, prop.name)
        if self._state is not None and self._state.state in (ModelState.UNSET, ModelState.REMOVED):
            raise ModelError("transition", self._state.state.value, ModelState.CHANGED.value)
        if not self._has_permission(AuthorizationAction.WRITE_PROPERTY, prop.name):
            logger.debug(f"{self._model_name}.{prop.name}: write denied, value dropped")
            return
        if prop.setter is not None:
            changed = prop.setter(self._property_context.with_property(prop), value)
        else:
            changed = self._store.set_value(prop, value)
        if changed:
            self._is_validated = False
            self._definition.rules.validate(prop, self._validation_context())
            if self._state is not None:
                self._state.mark_as_changed(True)

    def _set_internal(self, prop: PropertyDefinition, value: Any) -> None:
        if self._store.set_value(prop, value):
            self._is_validated = False

    # State

    @property
    def state(self) -> Optional[ModelState]:
        return self._state.state if self._state is not None else None

    @property
    def is_new(self) -> bool:
        return self._state is not None and self._state.is_new

    @property
    def is_dirty(self) -> bool:
        return self._state is not None and self._state.is_dirty

    @property
    def is_self_dirty(self) -> bool:
        return self._state is not None and self._state.is_self_dirty

    @property
    def is_deleted(self) -> bool:
        return self._state is not None and self._state.is_deleted

    @property
    def is_savable(self) -> bool:
        """Dirty, valid and permitted for the action the next save would run."""
        if self._state is None or not self.is_dirty:
            return False
        action = {
            ModelState.CREATED: AuthorizationAction.CREATE_OBJECT,
            ModelState.CHANGED: AuthorizationAction.UPDATE_OBJECT,
            ModelState.MARKED_FOR_REMOVAL: AuthorizationAction.REMOVE_OBJECT,
        }.get(self._state.state)
        if action is None or not self._has_permission(action):
            return False
        return action is AuthorizationAction.REMOVE_OBJECT or self.is_valid()

    def _child_has_changed(self) -> None:
        if self._state is not None:
            self._state.child_has_changed()

    def _remove_children(self) -> None:
        for child in self._children():
            child._mark_for_removal_by_parent()

    def _mark_for_removal_by_parent(self) -> None:
        if self._state is not None and self._state.state in (
            ModelState.PRISTINE, ModelState.CHANGED, ModelState.CREATED
        ):
            self._state.mark_for_removal()

    def _children(self) -> list:
        return [self._store.get_value(prop) for prop in self._definition.properties.children()]

    # Public lifecycle operations

    async def save(self) -> Optional["BusinessObject"]:
        """Insert, update or remove the object depending on its state.

        Invalid objects are not saved and are returned unchanged.
        Returns None after a removal.
        """
        if self._definition.kind is not ModelKind.EDITABLE_ROOT:
            raise ModelError("not_supported", self._model_name, "save")
        if self._state.state is not ModelState.MARKED_FOR_REMOVAL and not self.is_valid():
            logger.debug(f"{self._model_name}: invalid, save skipped")
            return self
        return await data_portal.save(self)

    def remove(self) -> None:
        """Mark the object for removal; a root is removed by the next save()."""
        if self._state is None:
            raise ModelError("not_supported", self._model_name, "remove")
        self._state.mark_for_removal()

    async def execute(self, method: Optional[str] = None) -> "BusinessObject":
        """Run a command through its DAO and load the result."""
        if self._definition.kind is not ModelKind.COMMAND:
            raise ModelError("not_supported", self._model_name, "execute")
        return await data_portal.execute(self, method)

    # Data portal participation

    def _snapshot(self) -> ObjectSnapshot:
        return ObjectSnapshot(
            store=self._store.snapshot(),
            state=self._state.snapshot() if self._state is not None else None,
            children=tuple(child._snapshot() for child in self._children()),
        )

    def _restore(self, snapshot: ObjectSnapshot) -> None:
        self._store.restore(snapshot.store)
        if snapshot.state is not None:
            self._state.restore(snapshot.state)
        for child, child_snapshot in zip(self._children(), snapshot.children):
            child._restore(child_snapshot)
        self._is_validated = False

    def _mark_clean(self) -> None:
        self._store.mark_clean()

    def _to_dto(self) -> Dict[str, Any]:
        catalog = self._definition.properties
        if self._extensions.to_dto is not None:
            context = TransferContext(catalog, catalog.on_dto(), get_value=self._store.get_value)
            return self._extensions.to_dto(context)
        return {prop.name: self._store.get_value(prop) for prop in catalog.on_dto()}

    def _load_dto(self, dto: Any) -> None:
        if dto is None:
            return
        if not isinstance(dto, dict):
            raise MethodError(self.__class__.__name__, "from_dto", "dto", "must be a dictionary.")
        catalog = self._definition.properties
        if get_configuration().settings.strict_transfer:
            for name in dto:
                catalog.get(name)
        if self._extensions.from_dto is not None:
            context = TransferContext(catalog, catalog.on_dto(), set_value=self._set_internal)
            self._extensions.from_dto(context, dto)
            return
        for prop in catalog.on_dto():
            if prop.name in dto:
                self._set_internal(prop, dto[prop.name])

    def _portal_context(self, connection: Any) -> DataPortalContext:
        return DataPortalContext(
            dao=self._find_dao(),
            catalog=self._definition.properties,
            read=self._store.get_value,
            write=self._set_internal,
            connection=connection,
            principal=self._principal,
            is_self_dirty=self.is_self_dirty,
        )

    def _get_key(self) -> Any:
        return self._definition.properties.get_key(self._store.get_value)

    def _copy_parent_keys(self) -> None:
        owner = self._owner()
        if owner is None:
            return
        for prop in self._definition.properties.parent_keys():
            source = owner._definition.properties.find(prop.name)
            if source is not None:
                self._set_internal(prop, owner._store.get_value(source))

    async def _create_children(self, connection: Any) -> None:
        await gather_all(child._child_create(connection) for child in self._children())

    async def _fetch_children(self, connection: Any, dto: Any) -> None:
        data = dto if isinstance(dto, dict) else {}
        await gather_all(
            self._store.get_value(prop)._child_fetch(connection, data.get(prop.name))
            for prop in self._definition.properties.children()
        )

    async def _save_children(self, connection: Any) -> None:
        await gather_all(child._child_save(connection) for child in self._children())

    async def _child_create(self, connection: Any) -> None:
        await data_portal.create(self, connection)

    async def _child_fetch(self, connection: Any, data: Any) -> None:
        await data_portal.fetch(self, connection=connection, data=data)

    async def _child_save(self, connection: Any) -> None:
        await data_portal.save(self, connection)

    # Transfer objects

    def to_cto(self) -> Dict[str, Any]:
        """Client transfer object: authorized property values and nested children."""
        catalog = self._definition.properties
        if self._extensions.to_cto is not None:
            context = TransferContext(catalog, catalog.on_cto(), get_value=self._read_property)
            cto = self._extensions.to_cto(context)
        else:
            cto = {prop.name: self._read_property(prop) for prop in catalog.on_cto() if not prop.is_child}
        for prop in catalog.children():
            if prop.is_on_cto:
                child = self._read_property(prop)
                cto[prop.name] = child.to_cto() if child is not None else None
        return cto

    async def from_cto(self, cto: Dict[str, Any]) -> "BusinessObject":
        """Apply a client transfer object through authorized writes."""
        if self._definition.kind in _READ_ONLY_KINDS:
            raise ModelError("not_supported", self._model_name, "from_cto")
        if not isinstance(cto, dict):
            raise MethodError(self.__class__.__name__, "from_cto", "cto", "must be a dictionary.")
        catalog = self._definition.properties
        if get_configuration().settings.strict_transfer:
            for name in cto:
                catalog.get(name)
        if self._extensions.from_cto is not None:
            context = TransferContext(catalog, catalog.on_cto(), set_value=self._write_property)
            self._extensions.from_cto(context, cto)
        else:
            for prop in catalog.on_cto():
                if not prop.is_child and not prop.is_read_only and prop.name in cto:
                    self._write_property(prop, cto[prop.name])
        for prop in catalog.children():
            child = self._store.get_value(prop)
            if prop.is_on_cto and prop.name in cto and child._is_editable:
                await child.from_cto(cto[prop.name])
        return self

    @property
    def _is_editable(self) -> bool:
        return self._definition.kind.is_editable

    # Rules

    def _validation_context(self) -> ValidationContext:
        return ValidationContext(get_value=self._store.get_value, broken_rules=self._broken_rules)

    def _validate_own(self) -> None:
        self._broken_rules.clear()
        self._definition.rules.validate_all(
            self._definition.properties.primitives(), self._validation_context()
        )
        self._is_validated = True

    def check_rules(self) -> None:
        """Re-run every validation rule of the object and its children."""
        self._validate_own()
        for child in self._children():
            child.check_rules()

    def is_valid(self) -> bool:
        """True when neither the object nor any descendant has an error."""
        if not self._is_validated:
            self._validate_own()
        if not self._broken_rules.is_valid():
            return False
        return all(child.is_valid() for child in self._children())

    def _collect_broken_rules(self) -> BrokenRulesOutput:
        output = self._broken_rules.output()
        for prop in self._definition.properties.children():
            output.add_child(prop.name, self._store.get_value(prop)._collect_broken_rules())
        return output

    def get_broken_rules(self, severity: Optional[RuleSeverity] = None) -> Optional[BrokenRulesOutput]:
        """Broken rules of the object and its children, or None when there are none."""
        output = self._collect_broken_rules()
        if severity is not None:
            output = output.filter(severity)
        return output if output.count else None

    def __repr__(self) -> str:
        state = f", state={self.state.value}" if self._state is not None else ""
        return f"<{self._definition.description} {self._model_name}{state}>"
