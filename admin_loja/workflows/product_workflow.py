"""Create and edit workflows for products.

Creating a product is a two-phase sequence: a placeholder without images is
created first, then the staged images are uploaded one by one and the
placeholder is updated with the form values and the resulting URLs.

Uploads are best-effort: as long as one image succeeds the product is saved
with the successful URLs and a warning names how many failed.
"""

import logging
import re
import time
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from admin_loja.clients.errors import AssetStoreError, PersistenceError
from admin_loja.models import Notification, Product
from admin_loja.services.persistence_gateway import EntityRepository, PersistenceGateway
from admin_loja.workflows.base import FormWorkflow
from admin_loja.workflows.forms import ProductForm, validate_form
from admin_loja.workflows.results import WorkflowResult
from admin_loja.workflows.staging import StagedFile, StagingArea

logger = logging.getLogger(__name__)

PRODUCTS_ROUTE = "/produtos"
ASSET_PREFIX = "produtos"

NO_IMAGES = "Adicione pelo menos uma imagem"
NO_IMAGES_ON_EDIT = "O produto deve ter pelo menos uma imagem"
CREATED = "Produto criado com sucesso!"
UPDATED = "Produto atualizado com sucesso!"
CREATE_FAILED = "Erro ao criar produto"
UPDATE_FAILED = "Erro ao atualizar produto"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace characters that are unsafe in an asset path with underscores."""
    cleaned = _UNSAFE_CHARS.sub("_", filename.rsplit("/", 1)[-1].rsplit("\\", 1)[-1])
    return cleaned or "imagem"


def partial_upload_warning(action: str, failures: int) -> str:
    return f"Produto {action}, mas {failures} imagem(ns) falharam no upload"


class ProductWorkflow(FormWorkflow[Product]):
    """Product create/edit form logic."""

    list_route = PRODUCTS_ROUTE
    not_found_message = "Produto não encontrado"
    load_error_message = "Erro ao carregar produto"

    def __init__(self, gateway: PersistenceGateway, clock: Callable[[], float] = time.time):
        super().__init__(gateway)
        self._clock = clock

    @property
    def repository(self) -> EntityRepository:
        return self._gateway.products

    def asset_path(self, staged: StagedFile) -> str:
        """One path per staged file, even when file names repeat."""
        timestamp_ms = int(self._clock() * 1000)
        return f"{ASSET_PREFIX}/{timestamp_ms}_{staged.local_id[:8]}_{sanitize_filename(staged.filename)}"

    async def _upload_all(self, files: Sequence[StagedFile]) -> Tuple[List[str], List[str]]:
        """Upload files sequentially. Returns (urls in staging order, failed filenames)."""
        urls: List[str] = []
        failed: List[str] = []
        for staged in files:
            path = self.asset_path(staged)
            try:
                urls.append(await self._gateway.upload_asset(path, staged.data, staged.content_type))
            except AssetStoreError:
                logger.exception(f"Failed to upload product image {staged.filename}")
                failed.append(staged.filename)
        return urls, failed

    async def _discard_placeholder(self, product_id: str) -> None:
        try:
            await self._gateway.products.delete(product_id)
        except PersistenceError:
            logger.exception(f"Failed to delete placeholder product {product_id}")

    async def create(self, data: Mapping[str, Any], staging: StagingArea) -> WorkflowResult:
        """
        Validate, create the placeholder, upload the staged images and finalise.

        Args:
            data: Submitted form values keyed by document field name.
            staging: Staged images, uploaded in order.

        Returns:
            WorkflowResult describing what the form should show next.
        """
        form, errors = validate_form(ProductForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)
        if staging.is_empty:
            return WorkflowResult.rejected(NO_IMAGES)

        return await self._submit(lambda: self._create(form, staging))

    async def _create(self, form: ProductForm, staging: StagingArea) -> WorkflowResult:
        fields = form.product_fields()
        try:
            product_id = await self._gateway.products.create(Product(images=[], **fields))
        except PersistenceError:
            logger.exception("Failed to create product placeholder")
            return WorkflowResult.failed(CREATE_FAILED)

        urls, failed = await self._upload_all(staging.files)
        if not urls:
            logger.error(f"No image could be uploaded for product {product_id}")
            await self._discard_placeholder(product_id)
            return WorkflowResult(
                ok=False,
                notification=Notification.error(CREATE_FAILED),
                failed_uploads=tuple(failed),
            )

        try:
            await self._gateway.products.update(product_id, {**fields, "images": urls})
        except PersistenceError:
            logger.exception(f"Failed to finalise product {product_id}")
            return WorkflowResult.failed(CREATE_FAILED, entity_id=product_id)

        if failed:
            notification = Notification.warning(partial_upload_warning("criado", len(failed)))
        else:
            notification = Notification.success(CREATED)

        return WorkflowResult(
            ok=True,
            notification=notification,
            entity_id=product_id,
            redirect_to=PRODUCTS_ROUTE,
            failed_uploads=tuple(failed),
        )

    async def update(
        self,
        product_id: str,
        data: Mapping[str, Any],
        keep_images: Optional[Sequence[str]],
        staging: StagingArea,
    ) -> WorkflowResult:
        """
        Save an edited product.

        Args:
            product_id: Product being edited.
            data: Submitted form values.
            keep_images: Existing image URLs still on the form, in order.
                None keeps every current image.
            staging: Newly staged images, appended after the kept ones.
        """
        form, errors = validate_form(ProductForm, data)
        if form is None:
            return WorkflowResult.invalid(errors)

        return await self._submit(lambda: self._update(product_id, form, keep_images, staging))

    async def _update(
        self,
        product_id: str,
        form: ProductForm,
        keep_images: Optional[Sequence[str]],
        staging: StagingArea,
    ) -> WorkflowResult:
        product, failure = await self.load_for_edit(product_id)
        if product is None:
            return failure

        if keep_images is None:
            kept = list(product.images)
        else:
            current = set(product.images)
            kept = [url for url in keep_images if url in current]

        if not kept and staging.is_empty:
            return WorkflowResult.rejected(NO_IMAGES_ON_EDIT)

        new_urls, failed = await self._upload_all(staging.files)
        images = kept + new_urls
        if not images:
            return WorkflowResult(
                ok=False,
                notification=Notification.error(UPDATE_FAILED),
                entity_id=product_id,
                failed_uploads=tuple(failed),
            )

        try:
            await self._gateway.products.update(product_id, {**form.product_fields(), "images": images})
        except PersistenceError:
            logger.exception(f"Failed to update product {product_id}")
            return WorkflowResult.failed(UPDATE_FAILED, entity_id=product_id)

        if failed:
            notification = Notification.warning(partial_upload_warning("atualizado", len(failed)))
        else:
            notification = Notification.success(UPDATED)

        return WorkflowResult(
            ok=True,
            notification=notification,
            entity_id=product_id,
            redirect_to=PRODUCTS_ROUTE,
            failed_uploads=tuple(failed),
        )
