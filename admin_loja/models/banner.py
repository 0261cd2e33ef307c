"""Banner model for the banners collection."""

from dataclasses import dataclass
from typing import Optional

from admin_loja.models.base import DocumentModel

# Stored while the banner image is still being uploaded
PLACEHOLDER_IMAGE = ""


@dataclass
class Banner(DocumentModel):
    """Promotional banner displayed on the storefront home page."""

    image: str = PLACEHOLDER_IMAGE
    active: bool = True
    order: int = 0  # 0-999, lower values are shown first
    id: Optional[str] = None

    DOCUMENT_KEYS = {
        "image": "imagem",
        "active": "ativo",
        "order": "ordem",
    }
