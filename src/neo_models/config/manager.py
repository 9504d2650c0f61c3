"""Runtime configuration registry for neo-models.

Holds the collaborators the data portal needs at run time: the
connection manager, the optional DAO builder and the reader that
returns the current principal. Settings come from ModelSettings unless
an explicit instance is configured.
"""

from typing import Any, Callable, Optional
import logging

from ..core.exceptions import ConfigurationError
from .settings import ModelSettings, get_settings


logger = logging.getLogger(__name__)

# dao_builder(data_source, model_name) -> DataAccessObject
DaoBuilder = Callable[[str, str], Any]
# user_reader() -> principal or None
UserReader = Callable[[], Any]


class Configuration:
    """Collaborators shared by every model definition."""

    def __init__(
        self,
        connection_manager: Any = None,
        dao_builder: Optional[DaoBuilder] = None,
        user_reader: Optional[UserReader] = None,
        settings: Optional[ModelSettings] = None,
    ):
        if dao_builder is not None and not callable(dao_builder):
            raise ConfigurationError("The dao_builder must be callable.")
        if user_reader is not None and not callable(user_reader):
            raise ConfigurationError("The user_reader must be callable.")
        self.connection_manager = connection_manager
        self.dao_builder = dao_builder
        self.user_reader = user_reader
        self._settings = settings

    @property
    def settings(self) -> ModelSettings:
        return self._settings or get_settings()

    def get_user(self) -> Any:
        """Return the current principal, or None when no reader is set."""
        return self.user_reader() if self.user_reader else None

    def require_connection_manager(self) -> Any:
        if self.connection_manager is None:
            raise ConfigurationError(
                "No connection manager is configured.",
                error_code="no_connection_manager",
            )
        return self.connection_manager


_configuration = Configuration()


def configure(
    connection_manager: Any = None,
    dao_builder: Optional[DaoBuilder] = None,
    user_reader: Optional[UserReader] = None,
    settings: Optional[ModelSettings] = None,
) -> Configuration:
    """Replace the active configuration and return it."""
    global _configuration
    _configuration = Configuration(
        connection_manager=connection_manager,
        dao_builder=dao_builder,
        user_reader=user_reader,
        settings=settings,
    )
    logger.debug(
        f"Configured neo-models: connection_manager={type(connection_manager).__name__}, "
        f"dao_builder={'set' if dao_builder else 'none'}, "
        f"user_reader={'set' if user_reader else 'none'}"
    )
    return _configuration


def get_configuration() -> Configuration:
    """Return the active configuration."""
    return _configuration


def reset_configuration() -> None:
    """Restore the empty configuration and drop cached settings."""
    global _configuration
    _configuration = Configuration()
    get_settings.cache_clear()
