"""Dashboard with collection counts."""

from fastapi import APIRouter, Depends, Request

from admin_loja.api.dependencies import AppServices, get_services, require_user
from admin_loja.models import User
from admin_loja.presentation import sidebar

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

STATS_ERROR = "Erro ao carregar estatísticas"


@router.get("")
async def dashboard(
    request: Request,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> dict:
    collections = {
        "produtos": ("Produtos", "IoGrid", services.products()),
        "categorias": ("Categorias", "IoList", services.categories()),
        "banners": ("Banners", "IoImage", services.banners()),
    }

    cards = []
    error = None
    for key, (title, icon, collection) in collections.items():
        state = await collection.ensure_loaded()
        if state.error:
            error = STATS_ERROR
        cards.append({"key": key, "title": title, "icon": icon, "value": len(state.items)})

    return {
        "title": "Bem-vindo ao Admin Loja",
        "subtitle": "Aqui você pode gerenciar todos os aspectos da sua loja online",
        "cards": cards,
        "error": error,
        "sidebar": sidebar(request.url.path),
        "user": {"email": user.email},
    }
