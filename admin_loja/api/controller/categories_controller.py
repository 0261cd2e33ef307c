"""Category screens."""

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import JSONResponse

from admin_loja.api.controller.responses import result_response
from admin_loja.api.dependencies import AppServices, UserSession, get_services, get_session, require_user
from admin_loja.models import Category, User
from admin_loja.presentation import Column, build_table, delete_confirmation, icon_options, sidebar

router = APIRouter(prefix="/categorias", tags=["categorias"])

CATEGORY_COLUMNS = [
    Column("icone", "Ícone", lambda c: c.icon),
    Column("nome", "Nome", lambda c: c.name),
    Column("ordem", "Ordem", lambda c: c.order),
    Column("acoes", "Ações", lambda c: {"editar": f"/categorias/{c.id}", "deletar": f"/categorias/{c.id}"}),
]


def category_payload(category: Category) -> dict:
    return {"id": category.id, **category.to_document()}


@router.get("")
async def list_categories(
    request: Request,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> dict:
    state = await services.categories().refresh()
    return {
        "title": "Gerenciar Categorias",
        "summary": f"{len(state.items)} categoria(s) cadastrada(s)",
        "table": build_table(CATEGORY_COLUMNS, state.items, key=lambda c: c.id).to_dict(),
        "error": state.error,
        "sidebar": sidebar(request.url.path),
    }


@router.get("/icones")
async def list_icons(user: User = Depends(require_user)) -> list:
    return icon_options()


@router.get("/novo")
async def new_category_form(request: Request, user: User = Depends(require_user)) -> dict:
    return {
        "title": "Adicionar Nova Categoria",
        "icones": icon_options(),
        "sidebar": sidebar(request.url.path),
    }


@router.post("")
async def create_category(
    nome: str = Form(""),
    icone: str = Form(""),
    ordem: str = Form("0"),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    result = await session.categories.create({"nome": nome, "icone": icone, "ordem": ordem})
    return result_response(result, created=True)


@router.get("/{category_id}")
async def edit_category_form(
    category_id: str,
    request: Request,
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    category, failure = await session.categories.load_for_edit(category_id)
    if category is None:
        return result_response(failure)
    return JSONResponse(
        content={
            "title": "Editar Categoria",
            "categoria": category_payload(category),
            "icones": icon_options(),
            "sidebar": sidebar(request.url.path),
        }
    )


@router.post("/{category_id}")
async def update_category(
    category_id: str,
    nome: str = Form(""),
    icone: str = Form(""),
    ordem: str = Form("0"),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    result = await session.categories.update(category_id, {"nome": nome, "icone": icone, "ordem": ordem})
    return result_response(result)


@router.get("/{category_id}/deletar")
async def confirm_delete(category_id: str, user: User = Depends(require_user)) -> dict:
    return delete_confirmation("categoria", confirm_href=f"/categorias/{category_id}").to_dict()


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    collection = services.categories()
    if not await collection.remove(category_id):
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": collection.state.error})
    state = collection.state
    return JSONResponse(
        content={"table": build_table(CATEGORY_COLUMNS, state.items, key=lambda c: c.id).to_dict()}
    )
