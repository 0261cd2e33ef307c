"""Tests for the banner (all-or-nothing) and category (single-step) workflows."""

import pytest

from admin_loja.models import NotificationKind
from admin_loja.services import PersistenceGateway
from admin_loja.workflows import BannerWorkflow, CategoryWorkflow, StagingArea, stage_files


@pytest.fixture
def banner_area(make_file):
    return stage_files(StagingArea.for_banners(), [make_file("promo.png")]).area


class TestCreateBanner:
    """Test BannerWorkflow.create."""

    @pytest.mark.asyncio
    async def test_create_success(self, gateway, asset_store, banner_area):
        """Test the image is stored at banners/<id> and attached to the banner."""
        workflow = BannerWorkflow(gateway)

        result = await workflow.create({"ordem": "2", "ativo": True}, banner_area)

        assert result.ok
        assert result.notification.message == "Banner criado com sucesso!"
        assert result.redirect_to == "/banners"
        assert asset_store.uploaded_paths == [f"banners/{result.entity_id}"]

        banner = await gateway.banners.get(result.entity_id)
        assert banner.image == f"https://assets.test/banners/{result.entity_id}"
        assert banner.order == 2
        assert banner.active is True

        print(f"Created banner {result.entity_id}")

    @pytest.mark.asyncio
    async def test_no_image_rejected(self, gateway, flaky_store, asset_store):
        workflow = BannerWorkflow(gateway)

        result = await workflow.create({"ordem": 1}, StagingArea.for_banners())

        assert not result.ok
        assert result.notification.kind == NotificationKind.WARNING
        assert result.notification.message == "Selecione uma imagem para o banner"
        assert flaky_store.calls == []
        assert asset_store.upload_calls == 0

    @pytest.mark.asyncio
    async def test_invalid_order(self, gateway, flaky_store, banner_area):
        result = await BannerWorkflow(gateway).create({"ordem": 1000}, banner_area)

        assert not result.ok
        assert "ordem" in result.field_errors
        assert flaky_store.calls == []

    @pytest.mark.asyncio
    async def test_upload_failure_rolls_back(self, asset_store_factory, flaky_store, banner_area):
        """Test the placeholder is deleted and no banner remains listed."""
        assets = asset_store_factory(fail_uploads=[1])
        gateway = PersistenceGateway(flaky_store, assets)
        workflow = BannerWorkflow(gateway)

        result = await workflow.create({"ordem": 0}, banner_area)

        assert not result.ok
        assert result.notification.kind == NotificationKind.ERROR
        assert result.notification.message == "Erro ao criar banner"
        assert "delete_item" in flaky_store.calls
        assert await gateway.banners.list() == []
        assert assets.deleted_paths == []
        assert workflow.busy is False

    @pytest.mark.asyncio
    async def test_update_failure_rolls_back(self, gateway, flaky_store, asset_store, banner_area):
        """Test the uploaded image is removed together with the placeholder."""
        flaky_store.fail_on.add("patch_item")

        result = await BannerWorkflow(gateway).create({"ordem": 0}, banner_area)

        assert not result.ok
        assert await gateway.banners.list() == []
        assert len(asset_store.uploaded_paths) == 1
        assert asset_store.deleted_paths == asset_store.uploaded_paths
        assert asset_store.files == {}

    @pytest.mark.asyncio
    async def test_failed_image_rollback_still_deletes_placeholder(
        self, asset_store_factory, flaky_store, banner_area
    ):
        gateway = PersistenceGateway(flaky_store, asset_store_factory(fail_deletes=True))
        flaky_store.fail_on.add("patch_item")

        result = await BannerWorkflow(gateway).create({"ordem": 0}, banner_area)

        assert result.notification.message == "Erro ao criar banner"
        flaky_store.fail_on.clear()
        assert await gateway.banners.list() == []

    @pytest.mark.asyncio
    async def test_failed_rollback_is_not_raised(self, asset_store_factory, flaky_store, banner_area):
        """Test a failing rollback leaves the placeholder but still reports the error."""
        gateway = PersistenceGateway(flaky_store, asset_store_factory(fail_uploads=[1]))
        flaky_store.fail_on.add("delete_item")

        result = await BannerWorkflow(gateway).create({"ordem": 0}, banner_area)

        assert not result.ok
        assert result.notification.message == "Erro ao criar banner"
        flaky_store.fail_on.clear()
        remaining = await gateway.banners.list()
        assert len(remaining) == 1
        assert remaining[0].image == ""


class TestUpdateBanner:
    """Test BannerWorkflow.update."""

    @pytest.fixture
    async def banner_id(self, gateway, banner_area):
        return (await BannerWorkflow(gateway).create({"ordem": 1}, banner_area)).entity_id

    @pytest.mark.asyncio
    async def test_keeps_image_without_new_file(self, gateway, asset_store, banner_id):
        uploads_before = asset_store.upload_calls
        workflow = BannerWorkflow(gateway)

        result = await workflow.update(banner_id, {"ordem": 4, "ativo": False}, StagingArea.for_banners())

        assert result.ok
        banner = await gateway.banners.get(banner_id)
        assert banner.image == f"https://assets.test/banners/{banner_id}"
        assert banner.order == 4
        assert banner.active is False
        assert asset_store.upload_calls == uploads_before

    @pytest.mark.asyncio
    async def test_new_file_overwrites_same_path(self, gateway, asset_store, banner_id, make_file):
        area = stage_files(StagingArea.for_banners(), [make_file("nova.png", data=b"nova")]).area

        result = await BannerWorkflow(gateway).update(banner_id, {"ordem": 1}, area)

        assert result.ok
        assert asset_store.uploaded_paths == [f"banners/{banner_id}", f"banners/{banner_id}"]
        assert asset_store.files[f"banners/{banner_id}"] == b"nova"

    @pytest.mark.asyncio
    async def test_missing_banner(self, gateway):
        result = await BannerWorkflow(gateway).update("nao-existe", {"ordem": 1}, StagingArea.for_banners())

        assert not result.ok
        assert result.notification.message == "Banner não encontrado"
        assert result.redirect_to == "/banners"


class TestCategoryWorkflow:
    """Test single-step category create and update."""

    @pytest.mark.asyncio
    async def test_create(self, gateway, flaky_store):
        result = await CategoryWorkflow(gateway).create({"nome": "Relógios", "icone": "IoWatch", "ordem": 1})

        assert result.ok
        assert result.redirect_to == "/categorias"
        assert flaky_store.calls == ["create_item"]
        category = await gateway.categories.get(result.entity_id)
        assert category.icon == "IoWatch"

    @pytest.mark.asyncio
    async def test_create_invalid_icon(self, gateway, flaky_store):
        result = await CategoryWorkflow(gateway).create({"nome": "Relógios", "icone": "Foguete"})

        assert result.field_errors == {"icone": "Selecione um ícone"}
        assert flaky_store.calls == []

    @pytest.mark.asyncio
    async def test_create_failure(self, gateway, flaky_store):
        flaky_store.fail_on.add("create_item")

        result = await CategoryWorkflow(gateway).create({"nome": "Relógios", "icone": "IoWatch"})

        assert not result.ok
        assert result.notification.message == "Erro ao criar categoria"

    @pytest.mark.asyncio
    async def test_update(self, gateway):
        workflow = CategoryWorkflow(gateway)
        category_id = (await workflow.create({"nome": "Relógios", "icone": "IoWatch"})).entity_id

        result = await workflow.update(category_id, {"nome": "Relógios", "icone": "IoWatch", "ordem": 7})

        assert result.ok
        assert (await gateway.categories.get(category_id)).order == 7

    @pytest.mark.asyncio
    async def test_update_missing(self, gateway):
        result = await CategoryWorkflow(gateway).update("nao-existe", {"nome": "Casa", "icone": "IoHome"})

        assert result.notification.message == "Categoria não encontrada"
        assert result.redirect_to == "/categorias"
