"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from admin_loja import __version__
from admin_loja.api.controller import (
    auth_router,
    banners_router,
    categories_router,
    dashboard_router,
    description_router,
    products_router,
    uploads_router,
)
from admin_loja.api.dependencies import AppServices, NotAuthenticatedError, build_services
from admin_loja.config import get_config

logger = logging.getLogger(__name__)

# Local asset store files are served here in development
MEDIA_ROUTE = "/media"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(services: Optional[AppServices] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: Pre-built collaborators. When omitted they are built from
            the configuration at startup.

    Returns:
        The application. Collaborators are connected in the lifespan.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_services = services
        if app_services is None:
            config = get_config()
            configure_logging(config.logging.level)
            app_services = build_services(config)
            if config.storage.backend == "local":
                app.mount(
                    MEDIA_ROUTE,
                    StaticFiles(directory=config.storage.local_root, check_dir=False),
                    name="media",
                )

        await app_services.connect()
        app.state.services = app_services
        logger.info("Admin Loja started")
        try:
            yield
        finally:
            await app_services.close()
            logger.info("Admin Loja stopped")

    app = FastAPI(
        title="Admin Loja",
        description="Back-office API for products, categories and banners",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotAuthenticatedError)
    async def redirect_to_login(request: Request, exc: NotAuthenticatedError) -> RedirectResponse:
        return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(banners_router)
    app.include_router(uploads_router)
    app.include_router(description_router)

    @app.get("/")
    async def index() -> RedirectResponse:
        return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
