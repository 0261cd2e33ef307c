"""Sidebar navigation of the back-office layout."""

from dataclasses import dataclass
from typing import List

LOGOUT_LABEL = "Sair"
LOGOUT_HREF = "/logout"


@dataclass(frozen=True)
class MenuItem:
    href: str
    label: str
    icon: str


MENU_ITEMS = (
    MenuItem("/dashboard", "Dashboard", "IoHome"),
    MenuItem("/produtos", "Produtos", "IoGrid"),
    MenuItem("/categorias", "Categorias", "IoList"),
    MenuItem("/banners", "Banners", "IoImage"),
)


def is_active(href: str, path: str) -> bool:
    """A menu item is active on its own route and on any route below it."""
    return path == href or path.startswith(href + "/")


def sidebar(path: str) -> List[dict]:
    items = [
        {"href": item.href, "label": item.label, "icon": item.icon, "active": is_active(item.href, path)}
        for item in MENU_ITEMS
    ]
    items.append({"href": LOGOUT_HREF, "label": LOGOUT_LABEL, "icon": "IoLogOut", "active": False})
    return items
