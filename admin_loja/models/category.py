"""Category model for the categorias collection."""

from dataclasses import dataclass
from typing import Optional

from admin_loja.models.base import DocumentModel


@dataclass
class Category(DocumentModel):
    """Product category with its menu icon and display order."""

    name: str
    icon: str  # CategoryIcon value, e.g. "IoShirt"
    order: int = 0  # Lower values are shown first
    id: Optional[str] = None

    DOCUMENT_KEYS = {
        "name": "nome",
        "icon": "icone",
        "order": "ordem",
    }
