"""Local image staging with previews, before a form is submitted.

``destino`` picks the screen and ``registro`` the product or banner being
edited; without it the previews belong to the create form.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from admin_loja.api.controller.responses import stage_uploads, staging_payload
from admin_loja.api.dependencies import UserSession, get_session
from admin_loja.workflows import StagingResult, remove_staged
from admin_loja.workflows.staging import clear_staging

router = APIRouter(prefix="/uploads", tags=["uploads"])

Target = Literal["produtos", "banners"]


@router.get("/previews")
async def list_previews(
    destino: Target = "produtos",
    registro: Optional[str] = None,
    session: UserSession = Depends(get_session),
) -> dict:
    return staging_payload(StagingResult(area=session.staging_area(destino, registro)))


@router.post("/previews")
async def add_previews(
    destino: Target = "produtos",
    registro: Optional[str] = None,
    arquivos: List[UploadFile] = File(...),
    session: UserSession = Depends(get_session),
) -> dict:
    """Stage files. Files over the limit are reported in ``rejected``; the rest are kept."""
    return staging_payload(await stage_uploads(session, destino, registro, arquivos))


@router.delete("/previews/{local_id}")
async def remove_preview(
    local_id: str,
    destino: Target = "produtos",
    registro: Optional[str] = None,
    session: UserSession = Depends(get_session),
) -> dict:
    area = remove_staged(session.staging_area(destino, registro), local_id)
    session.set_staging(destino, registro, area)
    return staging_payload(StagingResult(area=area))


@router.delete("/previews")
async def clear_previews(
    destino: Target = "produtos",
    registro: Optional[str] = None,
    session: UserSession = Depends(get_session),
) -> dict:
    area = clear_staging(session.staging_area(destino, registro))
    session.set_staging(destino, registro, area)
    return staging_payload(StagingResult(area=area))
