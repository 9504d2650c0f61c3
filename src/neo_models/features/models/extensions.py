"""Extension hooks of model definitions.

Hooks replace the standard data portal and transfer steps of a model:

    data_create(ctx)                data_fetch(ctx, filter, method)
    data_insert(ctx)                data_update(ctx)
    data_remove(ctx)                data_execute(ctx, method)
    to_dto(ctx) -> dict             from_dto(ctx, dto)
    to_cto(ctx) -> dict             from_cto(ctx, cto)

data_* hooks receive a DataPortalContext and may be coroutines;
data_fetch and data_execute return the DTO the children are loaded
from. Transfer hooks receive a TransferContext and are synchronous.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from ...core.exceptions import ConstructorError

Hook = Callable[..., Any]

_HOOKS = (
    "data_create", "data_fetch", "data_insert", "data_update", "data_remove", "data_execute",
    "to_dto", "from_dto", "to_cto", "from_cto",
)


@dataclass(frozen=True)
class ModelExtensions:
    """Data access settings and hook overrides of one model."""

    data_source: Optional[str] = None
    dao: Any = None
    dao_builder: Optional[Callable[[str, str], Any]] = None
    data_create: Optional[Hook] = None
    data_fetch: Optional[Hook] = None
    data_insert: Optional[Hook] = None
    data_update: Optional[Hook] = None
    data_remove: Optional[Hook] = None
    data_execute: Optional[Hook] = None
    to_dto: Optional[Hook] = None
    from_dto: Optional[Hook] = None
    to_cto: Optional[Hook] = None
    from_cto: Optional[Hook] = None

    def __post_init__(self):
        if self.data_source is not None and (not isinstance(self.data_source, str) or not self.data_source):
            raise ConstructorError("ModelExtensions", "data_source", "must be a non-empty string.")
        if self.dao_builder is not None and not callable(self.dao_builder):
            raise ConstructorError("ModelExtensions", "dao_builder", "must be a function.")
        for name in _HOOKS:
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ConstructorError("ModelExtensions", name, "must be a function.")

    def overridden(self) -> list:
        """Names of the hooks this instance overrides."""
        return [f.name for f in fields(self) if f.name in _HOOKS and getattr(self, f.name) is not None]
