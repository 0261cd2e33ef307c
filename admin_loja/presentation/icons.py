"""Closed set of icons a category can use in the storefront menu."""

from enum import Enum
from typing import Dict, List


class CategoryIcon(str, Enum):
    SHIRT = "IoShirt"
    WATCH = "IoWatch"
    PHONE = "IoPhonePortrait"
    LAPTOP = "IoLaptop"
    HEADSET = "IoHeadset"
    GAME_CONTROLLER = "IoGameController"
    BASKETBALL = "IoBasketball"
    BOOK = "IoBook"
    HOME = "IoHome"
    BAG = "IoBag"
    GLASSES = "IoGlasses"
    FOOTBALL = "IoFootball"

    @property
    def label(self) -> str:
        return ICON_LABELS[self]


ICON_LABELS: Dict[CategoryIcon, str] = {
    CategoryIcon.SHIRT: "Camiseta",
    CategoryIcon.WATCH: "Relógio",
    CategoryIcon.PHONE: "Celular",
    CategoryIcon.LAPTOP: "Laptop",
    CategoryIcon.HEADSET: "Fone",
    CategoryIcon.GAME_CONTROLLER: "Game",
    CategoryIcon.BASKETBALL: "Esportes",
    CategoryIcon.BOOK: "Livros",
    CategoryIcon.HOME: "Casa",
    CategoryIcon.BAG: "Bolsa",
    CategoryIcon.GLASSES: "Óculos",
    CategoryIcon.FOOTBALL: "Futebol",
}


def icon_options() -> List[Dict[str, str]]:
    """Options for the icon picker, in menu order."""
    return [{"value": icon.value, "label": icon.label} for icon in CategoryIcon]


def is_known_icon(value: str) -> bool:
    return value in {icon.value for icon in CategoryIcon}
