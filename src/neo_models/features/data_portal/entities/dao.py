"""Data access object base class."""

import logging
from typing import Any

from ....core.exceptions import ConstructorError, ModelError
from ....utils import maybe_await

logger = logging.getLogger(__name__)


class DataAccessObject:
    """Base class of data access objects.

    Subclasses implement any of create, fetch, insert, update, remove
    and execute, plus named methods for custom fetches and commands.
    Each method receives the connection first and may be synchronous or
    a coroutine.
    """

    def __init__(self, data_source: str, model_name: str):
        if not isinstance(data_source, str) or not data_source:
            raise ConstructorError(self.__class__.__name__, "data_source", "must be a non-empty string.")
        if not isinstance(model_name, str) or not model_name:
            raise ConstructorError(self.__class__.__name__, "model_name", "must be a non-empty string.")
        self.data_source = data_source
        self.model_name = model_name

    def has_method(self, method_name: str) -> bool:
        return not method_name.startswith("_") and callable(getattr(self, method_name, None))

    def has_create(self) -> bool:
        return self.has_method("create")

    async def run_method(self, method_name: str, connection: Any, *args: Any) -> Any:
        """Call a DAO method by name and resolve its result.

        Raises:
            ModelError: When the DAO has no such method
        """
        if not isinstance(method_name, str) or not self.has_method(method_name):
            raise ModelError("no_dao_method", self.model_name, method_name)
        logger.debug(f"Running {self.__class__.__name__}.{method_name} for {self.model_name}")
        return await maybe_await(getattr(self, method_name)(connection, *args))
