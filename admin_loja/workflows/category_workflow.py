"""Single-step create and edit for categories."""

import logging
from typing import Any, Mapping

from admin_loja.clients.errors import PersistenceError
from admin_loja.models import Category, Notification
from admin_loja.services.persistence_gateway import EntityRepository
from admin_loja.workflows.base import FormWorkflow
from admin_loja.workflows.forms import CategoryForm, validate_form
from admin_loja.workflows.results import WorkflowResult

logger = logging.getLogger(__name__)

CATEGORIES_ROUTE = "/categorias"


class CategoryWorkflow(FormWorkflow[Category]):
    list_route = CATEGORIES_ROUTE
    not_found_message = "Categoria não encontrada"
    load_error_message = "Erro ao carregar categoria"

    @property
    def repository(self) -> EntityRepository:
        return self._gateway.categories

    async def create(self, data: Mapping[str, Any]) -> WorkflowResult:
        form, errors = validate_form(CategoryForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)

        return await self._submit(lambda: self._create(form))

    async def _create(self, form: CategoryForm) -> WorkflowResult:
        try:
            category_id = await self._gateway.categories.create(Category(**form.category_fields()))
        except PersistenceError:
            logger.exception("Failed to create category")
            return WorkflowResult.failed("Erro ao criar categoria")

        return WorkflowResult(
            ok=True,
            notification=Notification.success("Categoria criada com sucesso!"),
            entity_id=category_id,
            redirect_to=CATEGORIES_ROUTE,
        )

    async def update(self, category_id: str, data: Mapping[str, Any]) -> WorkflowResult:
        form, errors = validate_form(CategoryForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)

        return await self._submit(lambda: self._update(category_id, form))

    async def _update(self, category_id: str, form: CategoryForm) -> WorkflowResult:
        category, failure = await self.load_for_edit(category_id)
        if category is None:
            return failure

        try:
            await self._gateway.categories.update(category_id, form.category_fields())
        except PersistenceError:
            logger.exception(f"Failed to update category {category_id}")
            return WorkflowResult.failed("Erro ao atualizar categoria", entity_id=category_id)

        return WorkflowResult(
            ok=True,
            notification=Notification.success("Categoria atualizada com sucesso!"),
            entity_id=category_id,
            redirect_to=CATEGORIES_ROUTE,
        )
