"""Model and collection definitions.

A definition binds a name and a variant tag to the sealed property and
rule catalogs and the extension hooks of a model type. It creates the
instances and is the entry point of root level create and fetch.
"""

import logging
from typing import Any, Optional

from ...core.exceptions import ConstructorError, ModelError
from ...config.constants import ALLOWED_CHILD_KINDS, CollectionKind, ModelKind, parse_enum
from ...config.manager import get_configuration
from ..data_portal.entities import EventHandlerList
from ..data_portal.services import data_portal
from ..properties.entities import PropertyCatalog
from ..rules.services import PermissionEvaluator, RuleCatalog, RuleCatalogBuilder
from .business_object import BusinessObject
from .collections import ModelCollection
from .extensions import ModelExtensions

logger = logging.getLogger(__name__)

# Public attribute names of business objects that properties cannot shadow
RESERVED_NAMES = frozenset(name for name in dir(BusinessObject) if not name.startswith("_"))


def _check_name(class_name: str, name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise ConstructorError(class_name, "name", "must be a non-empty string.")
    return name


def _check_rules(class_name: str, name: str, rules: Optional[RuleCatalog]) -> RuleCatalog:
    if rules is None:
        return RuleCatalogBuilder(name).build()
    if not isinstance(rules, RuleCatalog):
        raise ConstructorError(class_name, "rules", "must be a RuleCatalog object.")
    return rules


def _check_extensions(class_name: str, extensions: Optional[ModelExtensions]) -> ModelExtensions:
    if extensions is None:
        return ModelExtensions()
    if not isinstance(extensions, ModelExtensions):
        raise ConstructorError(class_name, "extensions", "must be a ModelExtensions object.")
    return extensions


class _DefinitionBase:
    """Attributes shared by model and collection definitions."""

    def __init__(self, class_name: str, name: str, rules, extensions):
        self._name = _check_name(class_name, name)
        self.rules = _check_rules(class_name, name, rules)
        self.extensions = _check_extensions(class_name, extensions)
        self.evaluator = PermissionEvaluator(self.rules)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._kind.description

    @property
    def kind(self) -> Any:
        return self._kind

    @property
    def data_source(self) -> str:
        return self.extensions.data_source or get_configuration().settings.default_data_source

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._name!r}, {self._kind.value})"


class ModelDefinition(_DefinitionBase):
    """Definition of a business object type."""

    def __init__(
        self,
        name: str,
        kind: ModelKind,
        properties: PropertyCatalog,
        rules: Optional[RuleCatalog] = None,
        extensions: Optional[ModelExtensions] = None,
    ):
        super().__init__("ModelDefinition", name, rules, extensions)
        self._kind = parse_enum(ModelKind, kind)
        if not isinstance(properties, PropertyCatalog):
            raise ConstructorError("ModelDefinition", "properties", "must be a PropertyCatalog object.")
        for prop_name in properties.names():
            if prop_name in RESERVED_NAMES:
                raise ConstructorError(
                    "ModelDefinition", "properties", f"must not define {prop_name}, the name is reserved."
                )
        properties.verify_child_kinds(ALLOWED_CHILD_KINDS[self._kind])
        self.properties = properties
        overridden = self.extensions.overridden()
        if overridden:
            logger.debug(f"{name}: extension hooks {', '.join(overridden)}")

    def new(self, parent: Any = None, event_handlers: Optional[EventHandlerList] = None) -> BusinessObject:
        """Instantiate the model without running any data portal action."""
        if parent is None and not self._kind.is_root:
            raise ModelError("not_supported", self._name, "new")
        return BusinessObject(self, parent, event_handlers)

    async def create(self, event_handlers: Optional[EventHandlerList] = None) -> BusinessObject:
        """Create a new editable root, or a new command object."""
        if self._kind is ModelKind.COMMAND:
            return self.new(None, event_handlers)
        if self._kind is not ModelKind.EDITABLE_ROOT:
            raise ModelError("not_supported", self._name, "create")
        return await data_portal.create(self.new(None, event_handlers))

    async def fetch(
        self,
        filter: Any = None,
        method: Optional[str] = None,
        event_handlers: Optional[EventHandlerList] = None,
    ) -> BusinessObject:
        """Fetch an editable or read-only root from its data source."""
        if self._kind not in (ModelKind.EDITABLE_ROOT, ModelKind.READ_ONLY_ROOT):
            raise ModelError("not_supported", self._name, "fetch")
        return await data_portal.fetch(self.new(None, event_handlers), filter, method)


class CollectionDefinition(_DefinitionBase):
    """Definition of a collection of business objects."""

    def __init__(
        self,
        name: str,
        kind: CollectionKind,
        item: ModelDefinition,
        rules: Optional[RuleCatalog] = None,
        extensions: Optional[ModelExtensions] = None,
    ):
        super().__init__("CollectionDefinition", name, rules, extensions)
        self._kind = parse_enum(CollectionKind, kind)
        if not isinstance(item, ModelDefinition):
            raise ConstructorError("CollectionDefinition", "item", "must be a ModelDefinition object.")
        if item.kind is not self._kind.item_kind:
            raise ModelError("invalid_item", name, item.kind.value, self._kind.item_kind.value)
        self.item = item

    def new(self, parent: Any = None, event_handlers: Optional[EventHandlerList] = None) -> ModelCollection:
        if parent is None and not self._kind.is_root:
            raise ModelError("not_supported", self._name, "new")
        return ModelCollection(self, parent, event_handlers)

    async def fetch(
        self,
        filter: Any = None,
        method: Optional[str] = None,
        event_handlers: Optional[EventHandlerList] = None,
    ) -> ModelCollection:
        """Fetch a read-only root collection from its data source."""
        if not self._kind.is_root:
            raise ModelError("not_supported", self._name, "fetch")
        return await data_portal.fetch(self.new(None, event_handlers), filter, method)
