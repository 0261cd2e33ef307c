"""Tests for the presentation helpers used by the list and form screens."""

from datetime import datetime, timedelta, timezone

import pytest

from admin_loja.models import Product
from admin_loja.presentation import (
    EMPTY_MESSAGE,
    CategoryIcon,
    Column,
    build_table,
    delete_confirmation,
    format_price,
    icon_options,
    is_active,
    is_known_icon,
    product_badges,
    sidebar,
    status_tag,
    yes_no,
)
from admin_loja.presentation.uploads import drop_zone, preview_grid
from admin_loja.workflows import StagingArea, stage_files

NOW = datetime(2024, 5, 20, 12, 0, tzinfo=timezone.utc)


def make_product(**overrides) -> Product:
    values = dict(
        name="Relógio Clássico",
        price=199.9,
        category="Acessórios",
        description="Relógio de pulso analógico",
        images=["https://assets.test/produtos/1_relogio.png"],
        id="p1",
    )
    values.update(overrides)
    return Product(**values)


class TestTable:
    def test_rows_use_attribute_and_render(self):
        columns = [
            Column("name", "Nome"),
            Column("price", "Preço", render=lambda p: format_price(p.price)),
        ]

        table = build_table(columns, [make_product()], key=lambda p: p.id)

        assert table.columns == [{"key": "name", "label": "Nome"}, {"key": "price", "label": "Preço"}]
        assert table.rows == [{"key": "p1", "cells": {"name": "Relógio Clássico", "price": "R$ 199.90"}}]
        assert table.empty_message is None

    def test_empty_table_message(self):
        table = build_table([Column("name", "Nome")], [], key=lambda p: p.id)

        assert table.rows == []
        assert table.to_dict()["emptyMessage"] == EMPTY_MESSAGE == "Nenhum registro encontrado"

    def test_dict_items(self):
        table = build_table([Column("nome", "Nome")], [{"id": "x", "nome": "Casa"}], key=lambda d: d["id"])

        assert table.rows[0]["cells"] == {"nome": "Casa"}


class TestTags:
    def test_format_price(self):
        assert format_price(99.9) == "R$ 99.90"
        assert format_price(None) == "R$ 0.00"

    def test_yes_no(self):
        assert yes_no(True) == "Sim"
        assert yes_no(False) == "Não"

    def test_status_tag(self):
        assert status_tag(True) == {"active": True, "label": "Ativo"}
        assert status_tag(False) == {"active": False, "label": "Inativo"}

    def test_new_and_promotion_badges(self):
        product = make_product(created_at=NOW - timedelta(days=2), on_promotion=True)

        assert product_badges(product, NOW) == ["NOVO", "PROMOÇÃO"]

    def test_old_product_has_no_badges(self):
        product = make_product(created_at=NOW - timedelta(days=30))

        assert product_badges(product, NOW) == []

    def test_naive_timestamp_treated_as_utc(self):
        product = make_product(created_at=(NOW - timedelta(hours=1)).replace(tzinfo=None))

        assert product_badges(product, NOW) == ["NOVO"]


class TestNavigation:
    @pytest.mark.parametrize(
        "href,path,expected",
        [
            ("/produtos", "/produtos", True),
            ("/produtos", "/produtos/novo", True),
            ("/produtos", "/produtos-antigos", False),
            ("/banners", "/produtos", False),
        ],
    )
    def test_is_active(self, href, path, expected):
        assert is_active(href, path) is expected

    def test_sidebar_marks_current_section(self):
        items = sidebar("/categorias/abc")

        assert [item["label"] for item in items] == ["Dashboard", "Produtos", "Categorias", "Banners", "Sair"]
        assert [item["label"] for item in items if item["active"]] == ["Categorias"]
        assert items[-1]["href"] == "/logout"


class TestIconsAndModal:
    def test_icon_options(self):
        options = icon_options()

        assert len(options) == len(CategoryIcon) == 12
        assert {"value": "IoWatch", "label": "Relógio"} in options

    def test_is_known_icon(self):
        assert is_known_icon("IoHome")
        assert not is_known_icon("IoRocket")

    def test_delete_confirmation_article(self):
        assert delete_confirmation("categoria").message == "Tem certeza que deseja deletar esta categoria?"

        modal = delete_confirmation("produto", "/produtos/p1")
        assert modal.to_dict() == {
            "message": "Tem certeza que deseja deletar este produto?",
            "confirmLabel": "Deletar",
            "cancelLabel": "Cancelar",
            "confirmHref": "/produtos/p1",
        }


class TestUploadWidgets:
    def test_drop_zone_hint(self, make_file):
        products = stage_files(StagingArea.for_products(), [make_file()]).area

        zone = drop_zone(products)

        assert zone["hint"] == "Arraste e solte os arquivos aqui ou clique para selecionar"
        assert zone["multiple"] is True
        assert zone["remaining"] == 4
        assert drop_zone(StagingArea.for_banners())["hint"] == (
            "Arraste e solte o arquivo aqui ou clique para selecionar"
        )

    def test_preview_grid(self, make_file):
        area = stage_files(StagingArea.for_products(), [make_file("a.png"), make_file("b.png")]).area

        grid = preview_grid(area)

        assert [item["alt"] for item in grid] == ["Preview 1", "Preview 2"]
        assert grid[0]["localId"] == area.files[0].local_id
        assert grid[0]["src"].startswith("data:image/png;base64,")
