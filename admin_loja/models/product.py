"""Product model for the produtos collection."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from admin_loja.models.base import DocumentModel


@dataclass
class Product(DocumentModel):
    """Product listing shown in the storefront.

    ``category`` holds the category *name*, not a reference: nothing checks
    that a category with that name exists.
    """

    name: str
    price: float
    category: str
    description: str
    images: List[str] = field(default_factory=list)  # Ordered image URLs
    on_promotion: bool = False
    original_price: Optional[float] = None  # Struck-through price while on promotion
    created_at: Optional[datetime] = None
    id: Optional[str] = None  # Assigned by the persistence layer

    DOCUMENT_KEYS = {
        "name": "nome",
        "price": "preco",
        "original_price": "precoOriginal",
        "category": "categoria",
        "description": "descricao",
        "images": "imagens",
        "on_promotion": "emPromocao",
        "created_at": "createdAt",
    }

    @property
    def is_complete(self) -> bool:
        """A product needs at least one image before it is listed."""
        return len(self.images) > 0

    @classmethod
    def _decode(cls, name: str, value: Any) -> Any:
        if name == "created_at" and isinstance(value, str):
            return datetime.fromisoformat(value)
        if name in ("price", "original_price") and value is not None:
            return float(value)
        if name == "images":
            return list(value or [])
        return value
