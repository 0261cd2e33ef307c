"""Banner screens."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from admin_loja.api.controller.responses import rejected_files_response, result_response, submission_area
from admin_loja.api.dependencies import (
    BANNER_TARGET,
    AppServices,
    UserSession,
    get_services,
    get_session,
    require_user,
)
from admin_loja.models import Banner, User
from admin_loja.presentation import Column, build_table, delete_confirmation, sidebar, status_tag
from admin_loja.presentation.uploads import drop_zone, preview_grid

router = APIRouter(prefix="/banners", tags=["banners"])

BANNER_COLUMNS = [
    Column("imagem", "Imagem", lambda b: b.image),
    Column("ordem", "Ordem", lambda b: b.order),
    Column("ativo", "Status", lambda b: status_tag(b.active)),
    Column("acoes", "Ações", lambda b: {"editar": f"/banners/{b.id}", "deletar": f"/banners/{b.id}"}),
]


def banner_payload(banner: Banner) -> dict:
    return {"id": banner.id, **banner.to_document(), "status": status_tag(banner.active)}


@router.get("")
async def list_banners(
    request: Request,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> dict:
    state = await services.banners().refresh()
    return {
        "title": "Gerenciar Banners",
        "summary": f"{len(state.items)} banner(s) cadastrado(s)",
        "table": build_table(BANNER_COLUMNS, state.items, key=lambda b: b.id).to_dict(),
        "error": state.error,
        "sidebar": sidebar(request.url.path),
    }


@router.get("/novo")
async def new_banner_form(request: Request, session: UserSession = Depends(get_session)) -> dict:
    area = session.staging_area(BANNER_TARGET)
    return {
        "title": "Adicionar Novo Banner",
        "dropZone": drop_zone(area, label="Selecione a imagem do banner"),
        "previews": preview_grid(area),
        "sidebar": sidebar(request.url.path),
    }


@router.post("")
async def create_banner(
    ordem: str = Form("0"),
    ativo: bool = Form(True),
    imagem: Optional[List[UploadFile]] = File(None),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    staged = await submission_area(session, BANNER_TARGET, None, imagem)
    if staged.rejected:
        return rejected_files_response(staged)

    result = await session.banners.create({"ordem": ordem, "ativo": ativo}, staged.area)
    if result.ok:
        session.discard_staging(BANNER_TARGET)
    return result_response(result, created=True)


@router.get("/{banner_id}")
async def edit_banner_form(
    banner_id: str,
    request: Request,
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    banner, failure = await session.banners.load_for_edit(banner_id)
    if banner is None:
        return result_response(failure)

    area = session.staging_area(BANNER_TARGET, banner_id)
    return JSONResponse(
        content={
            "title": "Editar Banner",
            "banner": banner_payload(banner),
            "dropZone": drop_zone(area, label="Substituir imagem"),
            "previews": preview_grid(area),
            "sidebar": sidebar(request.url.path),
        }
    )


@router.post("/{banner_id}")
async def update_banner(
    banner_id: str,
    ordem: str = Form("0"),
    ativo: bool = Form(True),
    imagem: Optional[List[UploadFile]] = File(None),
    session: UserSession = Depends(get_session),
) -> JSONResponse:
    staged = await submission_area(session, BANNER_TARGET, banner_id, imagem)
    if staged.rejected:
        return rejected_files_response(staged)

    result = await session.banners.update(banner_id, {"ordem": ordem, "ativo": ativo}, staged.area)
    if result.ok:
        session.discard_staging(BANNER_TARGET, banner_id)
    return result_response(result)


@router.get("/{banner_id}/deletar")
async def confirm_delete(banner_id: str, user: User = Depends(require_user)) -> dict:
    return delete_confirmation("banner", confirm_href=f"/banners/{banner_id}").to_dict()


@router.delete("/{banner_id}")
async def delete_banner(
    banner_id: str,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    collection = services.banners()
    if not await collection.remove(banner_id):
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": collection.state.error})
    state = collection.state
    return JSONResponse(
        content={"table": build_table(BANNER_COLUMNS, state.items, key=lambda b: b.id).to_dict()}
    )
