"""Presentation helpers: tables, tags, navigation, dialogs and upload widgets."""

from admin_loja.presentation.icons import CategoryIcon, icon_options, is_known_icon
from admin_loja.presentation.modal import ConfirmModal, delete_confirmation
from admin_loja.presentation.navigation import MENU_ITEMS, is_active, sidebar
from admin_loja.presentation.table import EMPTY_MESSAGE, Column, Table, build_table
from admin_loja.presentation.tags import format_price, product_badges, status_tag, yes_no

__all__ = [
    "CategoryIcon",
    "icon_options",
    "is_known_icon",
    "ConfirmModal",
    "delete_confirmation",
    "MENU_ITEMS",
    "is_active",
    "sidebar",
    "EMPTY_MESSAGE",
    "Column",
    "Table",
    "build_table",
    "format_price",
    "product_badges",
    "status_tag",
    "yes_no",
]
