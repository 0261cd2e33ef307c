"""Create and edit workflows for banners.

The banner image is stored at ``banners/<id>``, so the record is created
first with an empty image to obtain the id. Creation is all-or-nothing: if
anything fails after the placeholder exists, the placeholder is deleted.
"""

import logging
from typing import Any, Mapping

from admin_loja.clients.errors import AssetStoreError, PersistenceError
from admin_loja.models import PLACEHOLDER_IMAGE, Banner, Notification
from admin_loja.services.persistence_gateway import EntityRepository
from admin_loja.workflows.base import FormWorkflow
from admin_loja.workflows.forms import BannerForm, validate_form
from admin_loja.workflows.results import WorkflowResult
from admin_loja.workflows.staging import StagingArea

logger = logging.getLogger(__name__)

BANNERS_ROUTE = "/banners"
ASSET_PREFIX = "banners"

NO_IMAGE = "Selecione uma imagem para o banner"
CREATED = "Banner criado com sucesso!"
UPDATED = "Banner atualizado com sucesso!"
CREATE_FAILED = "Erro ao criar banner"
UPDATE_FAILED = "Erro ao atualizar banner"


def banner_asset_path(banner_id: str) -> str:
    return f"{ASSET_PREFIX}/{banner_id}"


class BannerWorkflow(FormWorkflow[Banner]):
    """Banner create/edit form logic."""

    list_route = BANNERS_ROUTE
    not_found_message = "Banner não encontrado"
    load_error_message = "Erro ao carregar banner"

    @property
    def repository(self) -> EntityRepository:
        return self._gateway.banners

    async def create(self, data: Mapping[str, Any], staging: StagingArea) -> WorkflowResult:
        form, errors = validate_form(BannerForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)
        if staging.is_empty:
            return WorkflowResult.rejected(NO_IMAGE)

        return await self._submit(lambda: self._create(form, staging))

    async def _create(self, form: BannerForm, staging: StagingArea) -> WorkflowResult:
        staged = staging.files[0]
        try:
            banner_id = await self._gateway.banners.create(
                Banner(image=PLACEHOLDER_IMAGE, active=form.ativo, order=form.ordem)
            )
        except PersistenceError:
            logger.exception("Failed to create banner placeholder")
            return WorkflowResult.failed(CREATE_FAILED)

        uploaded = False
        try:
            url = await self._gateway.upload_asset(
                banner_asset_path(banner_id), staged.data, staged.content_type
            )
            uploaded = True
            await self._gateway.banners.update(banner_id, {"image": url, **form.banner_fields()})
        except (AssetStoreError, PersistenceError):
            logger.exception(f"Failed to finalise banner {banner_id}, rolling back")
            await self._rollback(banner_id, uploaded)
            return WorkflowResult.failed(CREATE_FAILED)

        return WorkflowResult(
            ok=True,
            notification=Notification.success(CREATED),
            entity_id=banner_id,
            redirect_to=BANNERS_ROUTE,
        )

    async def _rollback(self, banner_id: str, uploaded: bool) -> None:
        """Best-effort delete of a placeholder banner and its image. Failures are only logged."""
        if uploaded:
            try:
                await self._gateway.delete_asset(banner_asset_path(banner_id))
            except AssetStoreError:
                logger.exception(f"Rollback of banner image {banner_id} failed, image left behind")
        try:
            await self._gateway.banners.delete(banner_id)
        except PersistenceError:
            logger.exception(f"Rollback of banner {banner_id} failed, placeholder left behind")

    async def update(self, banner_id: str, data: Mapping[str, Any], staging: StagingArea) -> WorkflowResult:
        """Save an edited banner. A staged image replaces the current one."""
        form, errors = validate_form(BannerForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)

        return await self._submit(lambda: self._update(banner_id, form, staging))

    async def _update(self, banner_id: str, form: BannerForm, staging: StagingArea) -> WorkflowResult:
        banner, failure = await self.load_for_edit(banner_id)
        if banner is None:
            return failure

        image = banner.image
        try:
            if not staging.is_empty:
                staged = staging.files[0]
                image = await self._gateway.upload_asset(
                    banner_asset_path(banner_id), staged.data, staged.content_type
                )
            await self._gateway.banners.update(banner_id, {"image": image, **form.banner_fields()})
        except (AssetStoreError, PersistenceError):
            logger.exception(f"Failed to update banner {banner_id}")
            return WorkflowResult.failed(UPDATE_FAILED, entity_id=banner_id)

        return WorkflowResult(
            ok=True,
            notification=Notification.success(UPDATED),
            entity_id=banner_id,
            redirect_to=BANNERS_ROUTE,
        )
