"""Description generation endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from admin_loja.api.dependencies import AppServices, get_services, require_user
from admin_loja.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["description"])


class GenerateDescriptionRequest(BaseModel):
    nome: Optional[str] = None
    categoria: Optional[str] = None


@router.post("/generate-description")
async def generate_description(
    body: GenerateDescriptionRequest,
    user: User = Depends(require_user),
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    """Return ``{"description", "isDefault"}`` for a product name and category."""
    if not body.nome:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Nome do produto é obrigatório"},
        )

    result = await services.generator.generate(body.nome, body.categoria)
    return JSONResponse(content=result.to_dict())
