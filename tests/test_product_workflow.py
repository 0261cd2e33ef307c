"""Tests for the product create/edit workflow.

These tests verify:
- Validation and the image requirement happen before any network call
- Two-phase create: placeholder, sequential uploads, finalise
- Partial upload failures keep the successful images
- Edit merges kept and new images
"""

import asyncio
import tempfile
from pathlib import Path

import pytest

from admin_loja.clients import LocalAssetStore
from admin_loja.models import NotificationKind
from admin_loja.services import PersistenceGateway
from admin_loja.workflows import ProductWorkflow, StagingArea, sanitize_filename, stage_files

FIXED_TIME = 1700000000.5


@pytest.fixture
def workflow(gateway):
    return ProductWorkflow(gateway, clock=lambda: FIXED_TIME)


@pytest.fixture
def staged_three(make_file):
    files = [make_file("frente.png"), make_file("costas.png"), make_file("lado.png")]
    return stage_files(StagingArea.for_products(), files).area


class TestSanitizeFilename:
    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("foto.png", "foto.png"),
            ("minha foto (1).png", "minha_foto__1_.png"),
            ("camiseta-azul_P.jpg", "camiseta-azul_P.jpg"),
            ("ação.webp", "a__o.webp"),
            ("../../etc/passwd", "passwd"),
        ],
    )
    def test_sanitize(self, filename, expected):
        assert sanitize_filename(filename) == expected

    def test_asset_path_uses_millisecond_timestamp(self, workflow, make_file):
        staged = stage_files(StagingArea.for_products(), [make_file("minha foto.png")]).area.files[0]

        assert workflow.asset_path(staged) == f"produtos/1700000000500_{staged.local_id[:8]}_minha_foto.png"

    def test_same_name_gets_distinct_paths(self, workflow, make_file):
        area = stage_files(StagingArea.for_products(), [make_file("image.png"), make_file("image.png")]).area

        first, second = (workflow.asset_path(staged) for staged in area.files)

        assert first != second


def expected_url(staged) -> str:
    return f"https://assets.test/produtos/1700000000500_{staged.local_id[:8]}_{staged.filename}"


class TestCreateProduct:
    """Test ProductWorkflow.create."""

    @pytest.mark.asyncio
    async def test_create_success(self, workflow, gateway, asset_store, product_data, staged_three):
        """Test the product is finalised with every uploaded URL in staging order."""
        result = await workflow.create(product_data, staged_three)

        assert result.ok
        assert result.notification.kind == NotificationKind.SUCCESS
        assert result.redirect_to == "/produtos"

        product = await gateway.products.get(result.entity_id)
        assert product.images == [expected_url(staged) for staged in staged_three.files]
        assert product.name == "Camiseta Básica"
        assert product.created_at is not None
        assert workflow.busy is False

        print(f"Created product {result.entity_id} with {len(product.images)} images")

    @pytest.mark.asyncio
    async def test_create_call_sequence(self, workflow, flaky_store, product_data, staged_three):
        """Test placeholder creation precedes the single finalising update."""
        await workflow.create(product_data, staged_three)

        assert flaky_store.calls == ["create_item", "patch_item"]

    @pytest.mark.asyncio
    async def test_invalid_form_makes_no_calls(self, workflow, flaky_store, asset_store, product_data, staged_three):
        result = await workflow.create({**product_data, "nome": "TV"}, staged_three)

        assert not result.ok
        assert result.field_errors == {"nome": "Nome deve ter no mínimo 3 caracteres"}
        assert flaky_store.calls == []
        assert asset_store.upload_calls == 0

    @pytest.mark.asyncio
    async def test_no_images_rejected_before_network(self, workflow, flaky_store, asset_store, product_data):
        result = await workflow.create(product_data, StagingArea.for_products())

        assert not result.ok
        assert result.notification.kind == NotificationKind.WARNING
        assert result.notification.message == "Adicione pelo menos uma imagem"
        assert flaky_store.calls == []
        assert asset_store.upload_calls == 0

    @pytest.mark.asyncio
    async def test_second_upload_fails(self, asset_store_factory, flaky_store, product_data, staged_three):
        """Test 3 images with the 2nd failing yields 2 URLs and a warning naming 1 failure."""
        assets = asset_store_factory(fail_uploads=[2])
        gateway = PersistenceGateway(flaky_store, assets)
        workflow = ProductWorkflow(gateway, clock=lambda: FIXED_TIME)

        result = await workflow.create(product_data, staged_three)

        assert result.ok
        assert result.notification.kind == NotificationKind.WARNING
        assert "1 imagem(ns) falharam" in result.notification.message
        assert result.failed_uploads == ("costas.png",)

        product = await gateway.products.get(result.entity_id)
        frente, _, lado = staged_three.files
        assert product.images == [expected_url(frente), expected_url(lado)]

    @pytest.mark.asyncio
    async def test_all_uploads_fail_discards_placeholder(
        self, asset_store_factory, flaky_store, product_data, staged_three
    ):
        assets = asset_store_factory(fail_uploads=[1, 2, 3])
        gateway = PersistenceGateway(flaky_store, assets)
        workflow = ProductWorkflow(gateway)

        result = await workflow.create(product_data, staged_three)

        assert not result.ok
        assert result.notification.kind == NotificationKind.ERROR
        assert result.notification.message == "Erro ao criar produto"
        assert await gateway.products.list() == []

    @pytest.mark.asyncio
    async def test_placeholder_creation_fails(self, workflow, flaky_store, asset_store, product_data, staged_three):
        flaky_store.fail_on.add("create_item")

        result = await workflow.create(product_data, staged_three)

        assert not result.ok
        assert result.notification.message == "Erro ao criar produto"
        assert asset_store.upload_calls == 0
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_finalise_fails(self, workflow, flaky_store, product_data, staged_three):
        flaky_store.fail_on.add("patch_item")

        result = await workflow.create(product_data, staged_three)

        assert not result.ok
        assert result.notification.kind == NotificationKind.ERROR
        assert result.entity_id is not None
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_concurrent_submission_rejected(self, asset_store_factory, flaky_store, product_data, staged_three):
        """Test a second submission while the first is running is rejected."""
        release = asyncio.Event()
        assets = asset_store_factory()
        original_upload = assets.upload

        async def slow_upload(path, data, content_type):
            await release.wait()
            return await original_upload(path, data, content_type)

        assets.upload = slow_upload
        workflow = ProductWorkflow(PersistenceGateway(flaky_store, assets))

        first = asyncio.create_task(workflow.create(product_data, staged_three))
        await asyncio.sleep(0)
        while not workflow.busy:
            await asyncio.sleep(0)

        second = await workflow.create(product_data, staged_three)
        release.set()
        first_result = await first

        assert not second.ok
        assert second.busy
        assert "Aguarde" in second.notification.message
        assert first_result.ok
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_same_named_files_keep_their_own_content(self, flaky_store, product_data, make_file):
        """Test two files named alike, uploaded within one millisecond, stay distinct on disk."""
        with tempfile.TemporaryDirectory() as media_root:
            assets = LocalAssetStore(media_root, "http://localhost/media")
            await assets.connect()
            workflow = ProductWorkflow(PersistenceGateway(flaky_store, assets))
            area = stage_files(
                StagingArea.for_products(),
                [make_file("image.png", data=b"primeira"), make_file("image.png", data=b"segunda")],
            ).area

            result = await workflow.create(product_data, area)

            images = (await workflow.repository.get(result.entity_id)).images
            assert len(set(images)) == 2
            stored = [Path(media_root, url.removeprefix("http://localhost/media/")).read_bytes() for url in images]
            assert stored == [b"primeira", b"segunda"]

            print(f"Stored images: {images}")


class TestUpdateProduct:
    """Test ProductWorkflow.update."""

    @pytest.fixture
    async def existing_id(self, workflow, product_data, make_file):
        area = stage_files(StagingArea.for_products(), [make_file("a.png"), make_file("b.png")]).area
        result = await workflow.create(product_data, area)
        return result.entity_id

    @pytest.mark.asyncio
    async def test_keep_all_and_add_new(self, workflow, gateway, existing_id, product_data, make_file):
        area = stage_files(StagingArea.for_products(), [make_file("c.png")]).area

        result = await workflow.update(existing_id, {**product_data, "preco": 79.9}, None, area)

        assert result.ok
        product = await gateway.products.get(existing_id)
        assert [url.rsplit("_", 1)[-1] for url in product.images] == ["a.png", "b.png", "c.png"]
        assert product.price == 79.9

    @pytest.mark.asyncio
    async def test_remove_existing_image(self, workflow, gateway, existing_id, product_data):
        current = (await gateway.products.get(existing_id)).images

        result = await workflow.update(existing_id, product_data, [current[1]], StagingArea.for_products())

        assert result.ok
        assert (await gateway.products.get(existing_id)).images == [current[1]]

    @pytest.mark.asyncio
    async def test_unknown_kept_urls_ignored(self, workflow, gateway, existing_id, product_data):
        current = (await gateway.products.get(existing_id)).images
        keep = ["https://evil.test/x.png", current[0]]

        await workflow.update(existing_id, product_data, keep, StagingArea.for_products())

        assert (await gateway.products.get(existing_id)).images == [current[0]]

    @pytest.mark.asyncio
    async def test_removing_every_image_rejected(self, workflow, gateway, existing_id, product_data, asset_store):
        uploads_before = asset_store.upload_calls

        result = await workflow.update(existing_id, product_data, [], StagingArea.for_products())

        assert not result.ok
        assert result.notification.message == "O produto deve ter pelo menos uma imagem"
        assert asset_store.upload_calls == uploads_before
        assert len((await gateway.products.get(existing_id)).images) == 2

    @pytest.mark.asyncio
    async def test_missing_product(self, workflow, product_data):
        result = await workflow.update("nao-existe", product_data, None, StagingArea.for_products())

        assert not result.ok
        assert result.notification.message == "Produto não encontrado"
        assert result.redirect_to == "/produtos"

    @pytest.mark.asyncio
    async def test_load_for_edit(self, workflow, existing_id):
        product, failure = await workflow.load_for_edit(existing_id)

        assert failure is None
        assert product.id == existing_id

    @pytest.mark.asyncio
    async def test_load_for_edit_failure(self, workflow, flaky_store, existing_id):
        flaky_store.fail_on.add("read_item")

        product, failure = await workflow.load_for_edit(existing_id)

        assert product is None
        assert failure.notification.kind == NotificationKind.ERROR
        assert failure.redirect_to == "/produtos"
