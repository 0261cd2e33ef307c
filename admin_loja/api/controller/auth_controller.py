"""Sign-in, sign-out and current-user endpoints."""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from admin_loja.api.dependencies import AppServices, current_user, get_services, require_user
from admin_loja.models import User
from admin_loja.services import TOKEN_COOKIE
from admin_loja.workflows import LoginForm, validate_form

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Email ou senha incorretos. Tente novamente."


def user_payload(user: User) -> dict:
    return {"id": user.id, "email": user.email, "nome": user.name}


@router.get("/login", response_model=None)
async def login_page(request: Request) -> dict | RedirectResponse:
    """Login screen; signed-in users go straight to the dashboard."""
    if current_user(request) is not None:
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    return {"title": "Admin Loja", "fields": ["email", "password"]}


@router.post("/login")
async def login(
    email: str = Form(""),
    password: str = Form(""),
    services: AppServices = Depends(get_services),
) -> JSONResponse:
    form, errors = validate_form(LoginForm, {"email": email, "password": password})
    if form is None:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"fieldErrors": errors}
        )

    token = services.auth.sign_in(form.email, form.password)
    if token is None:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": INVALID_CREDENTIALS})

    user = services.auth.current_user(token)
    response = JSONResponse(content={"user": user_payload(user), "redirectTo": "/dashboard"})
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=services.auth.token_max_age,
        httponly=True,
        samesite="lax",
    )
    return response


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(request: Request, services: AppServices = Depends(get_services)) -> RedirectResponse:
    token = request.cookies.get(TOKEN_COOKIE)
    user = services.auth.current_user(token)
    if user is not None:
        services.end_session(user)
        logger.info(f"Signed out {user.email}")
    services.auth.sign_out(token)

    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(TOKEN_COOKIE)
    return response


@router.get("/me")
async def me(user: User = Depends(require_user)) -> dict:
    return user_payload(user)
