"""API controllers."""

from admin_loja.api.controller.auth_controller import router as auth_router
from admin_loja.api.controller.banners_controller import router as banners_router
from admin_loja.api.controller.categories_controller import router as categories_router
from admin_loja.api.controller.dashboard_controller import router as dashboard_router
from admin_loja.api.controller.description_controller import router as description_router
from admin_loja.api.controller.products_controller import router as products_router
from admin_loja.api.controller.uploads_controller import router as uploads_router

__all__ = [
    "auth_router",
    "banners_router",
    "categories_router",
    "dashboard_router",
    "description_router",
    "products_router",
    "uploads_router",
]
