"""Collections of business objects.

An editable child collection holds editable children of an editable
parent; a read-only child collection holds read-only children; a
read-only root collection is fetched on its own through its DAO and may
carry the total number of items available on the data source.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ...core.exceptions import MethodError, ModelError
from ...config.constants import CollectionKind, ModelState
from ...utils import gather_all
from ..data_portal.services import data_portal
from ..data_portal.entities import DataPortalContext, EventHandlerList
from ..properties.entities import PropertyCatalog
from ..rules.entities import BrokenRulesOutput
from .model_base import ModelBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionSnapshot:
    """Items of a collection together with the snapshot of each item."""

    items: Tuple[Any, ...]
    item_snapshots: Tuple[Any, ...]
    total_items: Optional[int]


class CollectionTransfer(list):
    """List of item transfer objects with the total item count as sidecar."""

    def __init__(self, items=(), total_items: Optional[int] = None):
        super().__init__(items)
        self.total_items = total_items


class ModelCollection(ModelBase):
    """Instance of a collection definition of any CollectionKind."""

    _is_collection = True
    _state = None

    def __init__(self, definition: Any, parent: Any = None, event_handlers: Optional[EventHandlerList] = None):
        super().__init__(definition, parent, event_handlers)
        self._items: List[Any] = []
        self._total_items: Optional[int] = None
        self._pending: List[Any] = []

    # Container protocol

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    @property
    def items(self) -> Tuple[Any, ...]:
        return tuple(self._items)

    @property
    def total_items(self) -> Optional[int]:
        return self._total_items

    @property
    def _is_editable(self) -> bool:
        return self._definition.kind is CollectionKind.EDITABLE_CHILD_COLLECTION

    @property
    def is_dirty(self) -> bool:
        return any(item.is_dirty for item in self._items)

    def _new_item(self) -> Any:
        return self._definition.item.new(self, self._event_handlers)

    def _require_editable(self, operation: str) -> None:
        if not self._is_editable:
            raise ModelError("not_supported", self._model_name, operation)

    # Editing

    async def create_item(self, index: Optional[int] = None) -> Optional[Any]:
        """Create a new item through the data portal and add it to the collection.

        Returns None when creating items is not permitted.
        """
        self._require_editable("create_item")
        item = self._new_item()
        await data_portal.create(item)
        if not item.is_new:
            logger.debug(f"{self._model_name}: item creation denied")
            return None
        if index is None:
            self._items.append(item)
        else:
            self._items.insert(index, item)
        return item

    def remove_item(self, item: Any) -> None:
        """Mark an item for removal; it leaves the collection when the root is saved."""
        self._require_editable("remove_item")
        if item not in self._items:
            raise MethodError(self.__class__.__name__, "remove_item", "item", "must be an item of the collection.")
        item.remove()
        if item.state is ModelState.REMOVED:
            self._items.remove(item)

    def _child_has_changed(self) -> None:
        if self._parent is not None:
            self._parent._child_has_changed()

    def _mark_for_removal_by_parent(self) -> None:
        for item in self._items:
            item._mark_for_removal_by_parent()

    # Data portal participation as a child

    async def _child_create(self, connection: Any) -> None:
        self._items = []

    async def _child_fetch(self, connection: Any, data: Any) -> None:
        self._load_dto(data)
        await self._fetch_children(connection, data)

    async def _child_save(self, connection: Any) -> None:
        if not self._is_editable:
            return
        await gather_all(item._child_save(connection) for item in self._items)
        self._items = [item for item in self._items if item.state is not ModelState.REMOVED]

    # Data portal participation as a root

    def _snapshot(self) -> CollectionSnapshot:
        return CollectionSnapshot(
            items=tuple(self._items),
            item_snapshots=tuple(item._snapshot() for item in self._items),
            total_items=self._total_items,
        )

    def _restore(self, snapshot: CollectionSnapshot) -> None:
        self._items = list(snapshot.items)
        for item, item_snapshot in zip(self._items, snapshot.item_snapshots):
            item._restore(item_snapshot)
        self._total_items = snapshot.total_items
        self._pending = []

    def _load_dto(self, dto: Any) -> None:
        """Accept a list of item DTOs, or a dict with items and total_items."""
        if dto is None:
            items, total = [], None
        elif isinstance(dto, dict):
            items, total = dto.get("items") or [], dto.get("total_items")
        elif isinstance(dto, (list, tuple)):
            items, total = dto, getattr(dto, "total_items", None)
        else:
            raise MethodError(self.__class__.__name__, "fetch", "dto", "must be a list or a dictionary.")
        self._total_items = total if isinstance(total, int) and not isinstance(total, bool) else None
        self._pending = list(items)

    async def _fetch_children(self, connection: Any, dto: Any) -> None:
        items = [self._new_item() for _ in self._pending]
        await gather_all(
            item._child_fetch(connection, data) for item, data in zip(items, self._pending)
        )
        self._pending = []
        self._items = items

    def _portal_context(self, connection: Any) -> DataPortalContext:
        catalog = PropertyCatalog(self._model_name, ())
        return DataPortalContext(
            dao=self._find_dao(),
            catalog=catalog,
            read=lambda prop: None,
            write=lambda prop, value: None,
            connection=connection,
            principal=self._principal,
        )

    # Transfer objects

    def to_cto(self) -> List[Dict[str, Any]]:
        items = [item.to_cto() for item in self._items]
        if self._definition.kind is CollectionKind.READ_ONLY_ROOT_COLLECTION:
            return CollectionTransfer(items, self._total_items)
        return items

    async def from_cto(self, cto: List[Dict[str, Any]]) -> "ModelCollection":
        """Update items matching by key, create new ones and remove missing ones."""
        self._require_editable("from_cto")
        if not isinstance(cto, (list, tuple)):
            raise MethodError(self.__class__.__name__, "from_cto", "cto", "must be a list.")
        catalog = self._definition.item.properties
        matched = []
        for data in cto:
            item = next(
                (
                    candidate for candidate in self._items
                    if candidate not in matched
                    and candidate.state is not ModelState.MARKED_FOR_REMOVAL
                    and catalog.key_equals(data, candidate._store.get_value)
                ),
                None,
            )
            if item is None:
                item = await self.create_item()
                if item is None:
                    continue
            await item.from_cto(data)
            matched.append(item)
        for item in list(self._items):
            if item not in matched and item.state in (ModelState.PRISTINE, ModelState.CHANGED, ModelState.CREATED):
                self.remove_item(item)
        return self

    # Rules

    def check_rules(self) -> None:
        for item in self._items:
            item.check_rules()

    def is_valid(self) -> bool:
        return self._broken_rules.is_valid() and all(item.is_valid() for item in self._items)

    def _collect_broken_rules(self) -> BrokenRulesOutput:
        output = self._broken_rules.output()
        output.add_children(item._collect_broken_rules() for item in self._items)
        return output

    def get_broken_rules(self) -> Optional[BrokenRulesOutput]:
        """Broken rules of the collection keyed by item index, or None when there are none."""
        output = self._collect_broken_rules()
        return output if output.count else None

    def __repr__(self) -> str:
        return f"<{self._definition.description} {self._model_name} ({len(self._items)} items)>"
