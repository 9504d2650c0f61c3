"""Constants and enums for neo-models.

This module defines the enumerations shared across the library:
model states, rule severities, authorization actions, data portal
actions, events and stages, and the model variant tags.
"""

from enum import Enum, IntFlag
from typing import Any, Final, Type, TypeVar

from ..core.exceptions import EnumerationError

E = TypeVar("E", bound=Enum)


class Defaults:
    """Default values used when a definition leaves them out."""

    DATA_SOURCE: Final[str] = "default"
    RULE_PRIORITY: Final[int] = 10
    FETCH_METHOD: Final[str] = "fetch"
    EXECUTE_METHOD: Final[str] = "execute"


class ModelState(str, Enum):
    """Lifecycle states of an editable model instance."""

    UNSET = "unset"
    PRISTINE = "pristine"
    CREATED = "created"
    CHANGED = "changed"
    MARKED_FOR_REMOVAL = "marked_for_removal"
    REMOVED = "removed"


class RuleSeverity(str, Enum):
    """Severity of a broken rule."""

    SUCCESS = "success"
    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"


class NoAccessBehavior(str, Enum):
    """Severity recorded when an authorization rule denies an action."""

    SHOW_ERROR = "show_error"
    SHOW_WARNING = "show_warning"
    SHOW_INFORMATION = "show_information"

    def to_severity(self) -> RuleSeverity:
        return {
            NoAccessBehavior.SHOW_ERROR: RuleSeverity.ERROR,
            NoAccessBehavior.SHOW_WARNING: RuleSeverity.WARNING,
            NoAccessBehavior.SHOW_INFORMATION: RuleSeverity.INFORMATION,
        }[self]


class AuthorizationAction(str, Enum):
    """Actions guarded by authorization rules."""

    READ_PROPERTY = "read_property"
    WRITE_PROPERTY = "write_property"
    CREATE_OBJECT = "create_object"
    FETCH_OBJECT = "fetch_object"
    UPDATE_OBJECT = "update_object"
    REMOVE_OBJECT = "remove_object"
    EXECUTE_METHOD = "execute_method"


class DataPortalAction(str, Enum):
    """Actions sequenced by the data portal."""

    CREATE = "create"
    FETCH = "fetch"
    INSERT = "insert"
    UPDATE = "update"
    REMOVE = "remove"
    EXECUTE = "execute"


class DataPortalEvent(str, Enum):
    """Lifecycle events raised around data portal actions."""

    PRE_CREATE = "pre_create"
    POST_CREATE = "post_create"
    PRE_FETCH = "pre_fetch"
    POST_FETCH = "post_fetch"
    PRE_INSERT = "pre_insert"
    POST_INSERT = "post_insert"
    PRE_UPDATE = "pre_update"
    POST_UPDATE = "post_update"
    PRE_REMOVE = "pre_remove"
    POST_REMOVE = "post_remove"
    PRE_EXECUTE = "pre_execute"
    POST_EXECUTE = "post_execute"
    PRE_SAVE = "pre_save"
    POST_SAVE = "post_save"

    @classmethod
    def pre(cls, action: DataPortalAction) -> "DataPortalEvent":
        return cls(f"pre_{action.value}")

    @classmethod
    def post(cls, action: DataPortalAction) -> "DataPortalEvent":
        return cls(f"post_{action.value}")


class DataPortalStage(str, Enum):
    """Stage of a data portal action, reported on failures."""

    CONNECT = "connect"
    EXECUTE = "execute"
    CHILDREN = "children"
    FINISH = "finish"


class ModelKind(str, Enum):
    """Tagged variants of business objects."""

    EDITABLE_ROOT = "editable_root"
    EDITABLE_CHILD = "editable_child"
    READ_ONLY_ROOT = "read_only_root"
    READ_ONLY_CHILD = "read_only_child"
    COMMAND = "command"

    @property
    def is_root(self) -> bool:
        return self in (ModelKind.EDITABLE_ROOT, ModelKind.READ_ONLY_ROOT, ModelKind.COMMAND)

    @property
    def is_editable(self) -> bool:
        return self in (ModelKind.EDITABLE_ROOT, ModelKind.EDITABLE_CHILD)

    @property
    def description(self) -> str:
        return {
            ModelKind.EDITABLE_ROOT: "Editable root object",
            ModelKind.EDITABLE_CHILD: "Editable child object",
            ModelKind.READ_ONLY_ROOT: "Read-only root object",
            ModelKind.READ_ONLY_CHILD: "Read-only child object",
            ModelKind.COMMAND: "Command object",
        }[self]


class CollectionKind(str, Enum):
    """Tagged variants of business object collections."""

    EDITABLE_CHILD_COLLECTION = "editable_child_collection"
    READ_ONLY_CHILD_COLLECTION = "read_only_child_collection"
    READ_ONLY_ROOT_COLLECTION = "read_only_root_collection"

    @property
    def is_root(self) -> bool:
        return self is CollectionKind.READ_ONLY_ROOT_COLLECTION

    @property
    def item_kind(self) -> ModelKind:
        if self is CollectionKind.EDITABLE_CHILD_COLLECTION:
            return ModelKind.EDITABLE_CHILD
        return ModelKind.READ_ONLY_CHILD

    @property
    def description(self) -> str:
        return {
            CollectionKind.EDITABLE_CHILD_COLLECTION: "Editable child collection",
            CollectionKind.READ_ONLY_CHILD_COLLECTION: "Read-only child collection",
            CollectionKind.READ_ONLY_ROOT_COLLECTION: "Read-only root collection",
        }[self]


# Child kinds each parent variant accepts
ALLOWED_CHILD_KINDS: Final[dict] = {
    ModelKind.EDITABLE_ROOT: (ModelKind.EDITABLE_CHILD, CollectionKind.EDITABLE_CHILD_COLLECTION),
    ModelKind.EDITABLE_CHILD: (ModelKind.EDITABLE_CHILD, CollectionKind.EDITABLE_CHILD_COLLECTION),
    ModelKind.READ_ONLY_ROOT: (ModelKind.READ_ONLY_CHILD, CollectionKind.READ_ONLY_CHILD_COLLECTION),
    ModelKind.READ_ONLY_CHILD: (ModelKind.READ_ONLY_CHILD, CollectionKind.READ_ONLY_CHILD_COLLECTION),
    ModelKind.COMMAND: (ModelKind.READ_ONLY_CHILD, CollectionKind.READ_ONLY_CHILD_COLLECTION),
}


class PropertyFlag(IntFlag):
    """Flags of a property definition."""

    NONE = 0
    READ_ONLY = 1
    KEY = 2
    PARENT_KEY = 4
    ON_DTO_ONLY = 8
    ON_CTO_ONLY = 16


def parse_enum(enum_type: Type[E], value: Any) -> E:
    """Resolve a member of an enumeration by member, value or name.

    Args:
        enum_type: The enumeration class
        value: A member, a member value or a member name

    Returns:
        The enumeration member

    Raises:
        EnumerationError: When the value does not identify a member
    """
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        pass
    if isinstance(value, str) and value.upper() in enum_type.__members__:
        return enum_type.__members__[value.upper()]
    raise EnumerationError(
        f"{value!r} is not a member of {enum_type.__name__}.",
        details={"enumeration": enum_type.__name__, "value": repr(value)},
    )
