"""Data portal orchestrator.

Sequences the persistence actions of business objects and collections:
permission check, connection or transaction handling, extension hook
or DAO call, DTO transfer, child cascade, state transition, lifecycle
events and error wrapping.

Root models open their own connection (create, fetch) or transaction
(insert, update, remove, execute); child models run on the connection
of their parent. Models take part through a set of underscored members:
_model_name, _model_description, _is_root, _data_source, _extensions,
_principal, _state, _busy, _has_permission(), _find_dao(), _get_dao(),
_snapshot(), _restore(), _mark_clean(), _to_dto(), _load_dto(), _portal_context(),
_get_key(), _copy_parent_keys(), _emit() and the cascade coroutines
_create_children(), _fetch_children() and _save_children().
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from ....core.exceptions import DataPortalError, ModelError
from ....config.constants import (
    AuthorizationAction,
    DataPortalAction,
    DataPortalEvent,
    DataPortalStage,
    Defaults,
    ModelState,
)
from ....config.manager import get_configuration
from ....utils import maybe_await
from ..entities import DataPortalEventArgs

logger = logging.getLogger(__name__)

_TRANSACTIONAL = (
    DataPortalAction.INSERT,
    DataPortalAction.UPDATE,
    DataPortalAction.REMOVE,
    DataPortalAction.EXECUTE,
)
_SAVE_ACTIONS = (DataPortalAction.INSERT, DataPortalAction.UPDATE, DataPortalAction.REMOVE)


@dataclass
class ActionRun:
    """State of one running data portal action."""

    model: Any
    action: DataPortalAction
    connection: Any = None
    method_name: Optional[str] = None
    stage: DataPortalStage = DataPortalStage.CONNECT
    owns_connection: bool = False

    @property
    def is_transactional(self) -> bool:
        return self.action in _TRANSACTIONAL


class DataPortal:
    """Runs create, fetch, insert, update, remove and execute on models."""

    async def create(self, model: Any, connection: Any = None) -> Any:
        if not model._has_permission(AuthorizationAction.CREATE_OBJECT):
            return model
        run = ActionRun(model, DataPortalAction.CREATE, connection)
        await self._run(run, self._create, self._finish_create)
        return model

    async def fetch(
        self,
        model: Any,
        filter: Any = None,
        method: Optional[str] = None,
        connection: Any = None,
        data: Any = None,
    ) -> Any:
        """Fetch a root model through its DAO, or load a child from its parent's data."""
        if method is not None:
            allowed = model._has_permission(AuthorizationAction.EXECUTE_METHOD, method)
        else:
            allowed = model._has_permission(AuthorizationAction.FETCH_OBJECT)
        if not allowed:
            return model
        run = ActionRun(model, DataPortalAction.FETCH, connection, method)

        async def body(run: ActionRun) -> None:
            await self._fetch(run, filter, data)

        await self._run(run, body, self._finish_fetch)
        return model

    async def insert(self, model: Any, connection: Any = None) -> Any:
        if not model._has_permission(AuthorizationAction.CREATE_OBJECT):
            return model
        run = ActionRun(model, DataPortalAction.INSERT, connection)
        await self._run(run, self._insert, self._finish_save)
        return model

    async def update(self, model: Any, connection: Any = None) -> Any:
        if not model._has_permission(AuthorizationAction.UPDATE_OBJECT):
            return model
        run = ActionRun(model, DataPortalAction.UPDATE, connection)
        await self._run(run, self._update, self._finish_save)
        return model

    async def remove(self, model: Any, connection: Any = None) -> None:
        if not model._has_permission(AuthorizationAction.REMOVE_OBJECT):
            return None
        run = ActionRun(model, DataPortalAction.REMOVE, connection)
        await self._run(run, self._remove, self._finish_remove)
        return None

    async def execute(self, model: Any, method: Optional[str] = None, connection: Any = None) -> Any:
        method = method or Defaults.EXECUTE_METHOD
        if not model._has_permission(AuthorizationAction.EXECUTE_METHOD, method):
            return model
        run = ActionRun(model, DataPortalAction.EXECUTE, connection, method)
        await self._run(run, self._execute, None)
        return model

    async def save(self, model: Any, connection: Any = None) -> Any:
        """Dispatch on the model state: insert, update, remove or nothing."""
        if model._state is None:
            return model
        state = model._state.state
        if state is ModelState.CREATED:
            return await self.insert(model, connection)
        if state is ModelState.CHANGED:
            return await self.update(model, connection)
        if state is ModelState.MARKED_FOR_REMOVAL:
            return await self.remove(model, connection)
        return model

    # Template

    async def _run(
        self,
        run: ActionRun,
        body: Callable[[ActionRun], Awaitable[None]],
        finish: Optional[Callable[[Any], None]],
    ) -> None:
        model = run.model
        if model._busy:
            raise ModelError("reentrant", model._model_name)
        model._busy = True
        snapshot = model._snapshot()
        try:
            if run.connection is None and model._is_root:
                run.owns_connection = True
                run.connection = await self._acquire(run)
            run.stage = DataPortalStage.EXECUTE
            await self._emit_pre(run)
            logger.debug(f"{model._model_name}: {run.action.value} started")

            await body(run)

            run.stage = DataPortalStage.FINISH
            if run.owns_connection:
                await self._release(run, success=True)
            if finish is not None:
                finish(model)
            await self._emit_post(run)
            logger.debug(f"{model._model_name}: {run.action.value} finished")
        except Exception as e:
            if isinstance(e, DataPortalError):
                error = e
            else:
                error = DataPortalError(
                    model._model_description, model._model_name, run.action, e, run.stage
                )
            logger.error(f"{model._model_name}: {run.action.value} failed at {run.stage.value}: {e}")
            await self._emit_post(run, error)
            if run.owns_connection and run.connection is not None:
                await self._release(run, success=False)
            model._restore(snapshot)
            if error is e:
                raise
            raise error from e
        finally:
            model._busy = False

    async def _acquire(self, run: ActionRun) -> Any:
        manager = get_configuration().require_connection_manager()
        data_source = run.model._data_source
        if run.is_transactional:
            return await maybe_await(manager.begin_transaction(data_source))
        return await maybe_await(manager.open_connection(data_source))

    async def _release(self, run: ActionRun, success: bool) -> None:
        manager = get_configuration().require_connection_manager()
        data_source = run.model._data_source
        if not run.is_transactional:
            release = manager.close_connection
        elif success:
            release = manager.commit_transaction
        else:
            release = manager.rollback_transaction
        if success:
            await maybe_await(release(data_source, run.connection))
            return
        try:
            await maybe_await(release(data_source, run.connection))
        except Exception as e:
            logger.error(f"{run.model._model_name}: releasing the connection failed: {e}")

    async def _emit_pre(self, run: ActionRun) -> None:
        model = run.model
        await model._emit(self._event_args(run, DataPortalEvent.pre(run.action)))
        if model._is_root and run.action in _SAVE_ACTIONS:
            await model._emit(self._event_args(run, DataPortalEvent.PRE_SAVE))

    async def _emit_post(self, run: ActionRun, error: Optional[BaseException] = None) -> None:
        model = run.model
        await model._emit(self._event_args(run, DataPortalEvent.post(run.action), error))
        if model._is_root and run.action in _SAVE_ACTIONS:
            await model._emit(self._event_args(run, DataPortalEvent.POST_SAVE, error))

    @staticmethod
    def _event_args(run: ActionRun, event: DataPortalEvent, error=None) -> DataPortalEventArgs:
        return DataPortalEventArgs(
            event=event,
            model_name=run.model._model_name,
            action=run.action,
            method_name=run.method_name,
            error=error,
        )

    # Action bodies

    async def _create(self, run: ActionRun) -> None:
        model = run.model
        hook = model._extensions.data_create
        if hook is not None:
            await maybe_await(hook(model._portal_context(run.connection)))
        else:
            dao = model._find_dao()
            if dao is not None and dao.has_create():
                dto = await dao.run_method("create", run.connection)
                model._load_dto(dto)
        run.stage = DataPortalStage.CHILDREN
        await model._create_children(run.connection)

    async def _fetch(self, run: ActionRun, filter: Any, data: Any) -> None:
        model = run.model
        hook = model._extensions.data_fetch
        if model._is_root:
            if hook is not None:
                dto = await maybe_await(hook(model._portal_context(run.connection), filter, run.method_name))
            else:
                method = run.method_name or Defaults.FETCH_METHOD
                dto = await model._get_dao().run_method(method, run.connection, filter)
        elif hook is not None:
            dto = await maybe_await(hook(model._portal_context(run.connection), data, None))
            if dto is None:
                dto = data
        else:
            dto = data
        model._load_dto(dto)
        run.stage = DataPortalStage.CHILDREN
        await model._fetch_children(run.connection, dto)

    async def _insert(self, run: ActionRun) -> None:
        model = run.model
        model._copy_parent_keys()
        hook = model._extensions.data_insert
        if hook is not None:
            await maybe_await(hook(model._portal_context(run.connection)))
        else:
            result = await model._get_dao().run_method("insert", run.connection, model._to_dto())
            model._load_dto(result)
        run.stage = DataPortalStage.CHILDREN
        await model._save_children(run.connection)

    async def _update(self, run: ActionRun) -> None:
        model = run.model
        hook = model._extensions.data_update
        if hook is not None:
            await maybe_await(hook(model._portal_context(run.connection)))
        elif model._state.is_self_dirty:
            result = await model._get_dao().run_method("update", run.connection, model._to_dto())
            model._load_dto(result)
        else:
            logger.debug(f"{model._model_name}: not self-dirty, update of own data skipped")
        run.stage = DataPortalStage.CHILDREN
        await model._save_children(run.connection)

    async def _remove(self, run: ActionRun) -> None:
        model = run.model
        run.stage = DataPortalStage.CHILDREN
        await model._save_children(run.connection)
        run.stage = DataPortalStage.EXECUTE
        hook = model._extensions.data_remove
        if hook is not None:
            await maybe_await(hook(model._portal_context(run.connection)))
        else:
            await model._get_dao().run_method("remove", run.connection, model._get_key())

    async def _execute(self, run: ActionRun) -> None:
        model = run.model
        hook = model._extensions.data_execute
        if hook is not None:
            dto = await maybe_await(hook(model._portal_context(run.connection), run.method_name))
        else:
            dto = await model._get_dao().run_method(run.method_name, run.connection, model._to_dto())
        model._load_dto(dto)
        run.stage = DataPortalStage.CHILDREN
        await model._fetch_children(run.connection, dto)

    # State transitions

    @staticmethod
    def _finish_create(model: Any) -> None:
        if model._state is not None:
            model._state.mark_as_created()

    @staticmethod
    def _finish_fetch(model: Any) -> None:
        if model._state is not None:
            model._state.mark_as_pristine()
        model._mark_clean()

    @staticmethod
    def _finish_save(model: Any) -> None:
        model._state.mark_as_pristine()
        model._mark_clean()

    @staticmethod
    def _finish_remove(model: Any) -> None:
        model._state.mark_as_removed()


data_portal = DataPortal()
