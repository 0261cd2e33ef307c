"""Product screens: list, create, edit, delete, promotion toggle and suggestions."""

import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from admin_loja.api.controller.responses import rejected_files_response, result_response, submission_area
from admin_loja.api.dependencies import (
    PRODUCT_TARGET,
    AppServices,
    UserSession,
    get_services,
    get_session,
    require_user,
)
from admin_loja.models import Product, User
from admin_loja.presentation import (
    Column,
    build_table,
    delete_confirmation,
    format_price,
    product_badges,
    sidebar,
    yes_no,
)
from admin_loja.presentation.uploads import drop_zone, preview_grid
from admin_loja.workflows import NameTooShortError, PriceState, toggle_promotion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/produtos", tags=["produtos"])

PRODUCT_COLUMNS = [
    Column("imagens", "Imagem", lambda p: p.images[0] if p.images else None),
    Column("nome", "Nome", lambda p: p.name),
    Column("categoria", "Categoria", lambda p: p.category),
    Column("preco", "Preço", lambda p: format_price(p.price)),
    Column("emPromocao", "Promoção", lambda p: yes_no(p.on_promotion)),
    Column("acoes", "Ações", lambda p: {"editar": f"/produtos/{p.id}", "deletar": f"/produtos/{p.id}"}),
]


class PromotionToggleRequest(BaseModel):
    """Price fields of the form plus the new value of the promotion switch."""

    preco: Optional[float] = None
    precoOriginal: Optional[float] = None
    emPromocao: bool = False
    novoEmPromocao: bool


class SuggestionRequest(BaseModel):
    nome: str = ""
    categoria: Optional[str] = None


def product_payload(product: Product) -> dict:
    return {
        "id": product.id,
        **product.to_document(),
        "badges": product_badges(product),
        "precoFormatado": format_price(product.price),
    }


def product_data(
    nome: str, preco: str, precoOriginal: Optional[str], categoria: str, descricao: str, emPromocao: bool
) -> dict:
    return {
        "nome": nome,
        "preco": preco,
        "precoOriginal": precoOriginal,
        "categoria": categoria,
        "descricao": descricao,
        "emPromocao": emPromocao,
    }


@router.get("")
async def list_products(
    request: Request,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> dict:
    state = await services.products().refresh()
    return {
        "title": "Gerenciar Produtos",
        "summary": f"{len(state.items)} produto(s) cadastrado(s)",
        "table": build_table(PRODUCT_COLUMNS, state.items, key=lambda p: p.id).to_dict(),
        "error": state.error,
        "sidebar": sidebar(request.url.path),
    }


@router.get("/novo")
async def new_product_form(
    request: Request,
    services: AppServices = Depends(get_services),
    session: UserSession = Depends(get_session),
) -> dict:
    categories = await services.categories().ensure_loaded()
    area = session.staging_area(PRODUCT_TARGET)
    return {
        "title": "Adicionar Novo Produto",
        "categorias": [category.name for category in categories.items],
        "dropZone": drop_zone(area, label="Imagens do produto"),
        "previews": preview_grid(area),
        "sugestao": session.suggester.pending.to_dict() if session.suggester.pending else None,
        "sidebar": sidebar(request.url.path),
    }


@router.post("")
async def create_product(
    nome: str = Form(""),
    preco: str = Form(""),
    precoOriginal: Optional[str] = Form(None),
    categoria: str = Form(""),
    descricao: str = Form(""),
    emPromocao: bool = Form(False),
    imagens: Optional[List[UploadFile]] = File(None),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    """Create a product from the form fields and the staged plus uploaded images."""
    staged = await submission_area(session, PRODUCT_TARGET, None, imagens)
    if staged.rejected:
        return rejected_files_response(staged)

    data = product_data(nome, preco, precoOriginal, categoria, descricao, emPromocao)
    result = await session.products.create(data, staged.area)
    if result.ok:
        session.discard_staging(PRODUCT_TARGET)
    return result_response(result, created=True)


@router.post("/promocao")
async def promotion_toggle(body: PromotionToggleRequest, user: User = Depends(require_user)) -> dict:
    state = toggle_promotion(
        PriceState(price=body.preco, original_price=body.precoOriginal, on_promotion=body.emPromocao),
        body.novoEmPromocao,
    )
    return {"preco": state.price, "precoOriginal": state.original_price, "emPromocao": state.on_promotion}


@router.post("/sugestao-descricao")
async def request_suggestion(body: SuggestionRequest, session: UserSession = Depends(get_session)) -> JSONResponse:
    """Ask for a description; a newer request from the same user supersedes this one."""
    try:
        suggestion = await session.suggester.request(body.nome, body.categoria)
    except NameTooShortError as e:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"error": str(e)})

    if suggestion is None:
        return JSONResponse(content={"sugestao": None, "descartada": True})
    return JSONResponse(content={"sugestao": suggestion.to_dict(), "descartada": False})


@router.get("/sugestao-descricao")
async def pending_suggestion(session: UserSession = Depends(get_session)) -> dict:
    pending = session.suggester.pending
    return {"sugestao": pending.to_dict() if pending else None, "carregando": session.suggester.in_flight}


@router.post("/sugestao-descricao/aceitar")
async def accept_suggestion(session: UserSession = Depends(get_session)) -> JSONResponse:
    description = session.suggester.accept()
    if description is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Nenhuma sugestão pendente"})
    return JSONResponse(content={"descricao": description})


@router.post("/sugestao-descricao/rejeitar", status_code=status.HTTP_204_NO_CONTENT)
async def reject_suggestion(session: UserSession = Depends(get_session)) -> Response:
    session.suggester.reject()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{product_id}")
async def edit_product_form(
    product_id: str,
    request: Request,
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    product, failure = await session.products.load_for_edit(product_id)
    if product is None:
        return result_response(failure)

    area = session.staging_area(PRODUCT_TARGET, product_id)
    return JSONResponse(
        content={
            "title": "Editar Produto",
            "produto": product_payload(product),
            "dropZone": drop_zone(area, label="Adicionar imagens"),
            "previews": preview_grid(area),
            "sidebar": sidebar(request.url.path),
        }
    )


@router.post("/{product_id}")
async def update_product(
    product_id: str,
    nome: str = Form(""),
    preco: str = Form(""),
    precoOriginal: Optional[str] = Form(None),
    categoria: str = Form(""),
    descricao: str = Form(""),
    emPromocao: bool = Form(False),
    manterImagens: Optional[str] = Form(None),
    imagens: Optional[List[UploadFile]] = File(None),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    """Save an edited product.

    ``manterImagens`` is a JSON array of the current image URLs to keep; when
    omitted every current image is kept.
    """
    keep_images = None
    if manterImagens is not None:
        try:
            keep_images = [str(url) for url in json.loads(manterImagens)]
        except (ValueError, TypeError):
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={"fieldErrors": {"manterImagens": "Lista de imagens inválida"}},
            )

    staged = await submission_area(session, PRODUCT_TARGET, product_id, imagens)
    if staged.rejected:
        return rejected_files_response(staged)

    data = product_data(nome, preco, precoOriginal, categoria, descricao, emPromocao)
    result = await session.products.update(product_id, data, keep_images, staged.area)
    if result.ok:
        session.discard_staging(PRODUCT_TARGET, product_id)
    return result_response(result)


@router.get("/{product_id}/deletar")
async def confirm_delete(product_id: str, user: User = Depends(require_user)) -> dict:
    return delete_confirmation("produto", confirm_href=f"/produtos/{product_id}").to_dict()


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    services: AppServices = Depends(get_services),
    user: User = Depends(require_user),
) -> JSONResponse:
    collection = services.products()
    if not await collection.remove(product_id):
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": collection.state.error})

    state = collection.state
    return JSONResponse(
        content={
            "summary": f"{len(state.items)} produto(s) cadastrado(s)",
            "table": build_table(PRODUCT_COLUMNS, state.items, key=lambda p: p.id).to_dict(),
        }
    )

