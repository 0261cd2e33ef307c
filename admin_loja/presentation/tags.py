"""Status tags, product badges and price formatting."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from admin_loja.models import Product

# Products created within this window get the "NOVO" badge
NEW_PRODUCT_WINDOW = timedelta(days=7)


def format_price(value: Optional[float]) -> str:
    return f"R$ {value or 0:.2f}"


def yes_no(flag: bool) -> str:
    return "Sim" if flag else "Não"


def status_tag(active: bool, active_label: str = "Ativo", inactive_label: str = "Inativo") -> Dict[str, object]:
    return {"active": active, "label": active_label if active else inactive_label}


def is_new(product: Product, now: Optional[datetime] = None) -> bool:
    if product.created_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    created_at = product.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return now - created_at <= NEW_PRODUCT_WINDOW


def product_badges(product: Product, now: Optional[datetime] = None) -> List[str]:
    """Badges shown next to a product name. Empty when none apply."""
    badges = []
    if is_new(product, now):
        badges.append("NOVO")
    if product.on_promotion:
        badges.append("PROMOÇÃO")
    return badges
