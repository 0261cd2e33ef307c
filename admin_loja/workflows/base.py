"""Shared plumbing for the create/edit form workflows."""

import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Generic, Optional, Tuple, TypeVar

from admin_loja.clients.errors import PersistenceError
from admin_loja.models import Notification
from admin_loja.services.persistence_gateway import EntityRepository, PersistenceGateway
from admin_loja.workflows.results import WorkflowResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

BUSY_MESSAGE = "Aguarde, o formulário ainda está sendo salvo"


class WorkflowBusyError(RuntimeError):
    """Raised when a submission starts while another one is running."""

    pass


class FormWorkflow(Generic[T]):
    """Base for the entity form workflows.

    Subclasses set ``list_route`` and the load messages. ``busy`` is true for
    the whole duration of a submission.
    """

    list_route = "/"
    not_found_message = "Registro não encontrado"
    load_error_message = "Erro ao carregar registro"

    def __init__(self, gateway: PersistenceGateway):
        self._gateway = gateway
        self.busy = False

    @property
    def repository(self) -> EntityRepository:
        raise NotImplementedError

    @asynccontextmanager
    async def busy_scope(self):
        """Mark the form busy; always cleared on exit."""
        if self.busy:
            raise WorkflowBusyError(BUSY_MESSAGE)
        self.busy = True
        try:
            yield
        finally:
            self.busy = False

    async def _submit(self, run: Callable[[], Awaitable[WorkflowResult]]) -> WorkflowResult:
        try:
            async with self.busy_scope():
                return await run()
        except WorkflowBusyError as e:
            logger.warning(f"Rejected concurrent submission on {type(self).__name__}")
            return WorkflowResult.busy_submission(str(e))

    async def load_for_edit(self, item_id: str) -> Tuple[Optional[T], Optional[WorkflowResult]]:
        """
        Fetch an entity for its edit screen.

        Returns:
            ``(entity, None)`` when found, otherwise ``(None, result)`` with a
            notification and a redirect back to the list route.
        """
        try:
            entity = await self.repository.get(item_id)
        except PersistenceError:
            logger.exception(f"Failed to load {self.repository.collection}/{item_id}")
            return None, WorkflowResult(
                ok=False,
                notification=Notification.error(self.load_error_message),
                redirect_to=self.list_route,
            )

        if entity is None:
            return None, WorkflowResult(
                ok=False,
                notification=Notification.warning(self.not_found_message),
                redirect_to=self.list_route,
            )
        return entity, None
