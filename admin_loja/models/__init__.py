"""Data models module."""

from admin_loja.models.banner import PLACEHOLDER_IMAGE, Banner
from admin_loja.models.category import Category
from admin_loja.models.notification import Notification, NotificationKind
from admin_loja.models.product import Product
from admin_loja.models.user import User

__all__ = [
    "Banner",
    "Category",
    "Notification",
    "NotificationKind",
    "PLACEHOLDER_IMAGE",
    "Product",
    "User",
]
