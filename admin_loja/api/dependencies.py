"""Application service container and request dependencies."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import Request

from admin_loja.clients import BlobStorageClient, CosmosDBClient, LocalAssetStore, SqliteDocumentStore
from admin_loja.config import AppConfig, UploadConfig
from admin_loja.models import User
from admin_loja.services import (
    TOKEN_COOKIE,
    AuthService,
    DescriptionGenerator,
    EntityCollection,
    PersistenceGateway,
    banners_collection,
    categories_collection,
    products_collection,
)
from admin_loja.workflows import (
    BannerWorkflow,
    CategoryWorkflow,
    DescriptionSuggester,
    ProductWorkflow,
    StagingArea,
)

logger = logging.getLogger(__name__)

PRODUCT_TARGET = "produtos"
BANNER_TARGET = "banners"


def staging_key(target: str, item_id: Optional[str] = None) -> str:
    """Key of the staging area of one form: the create form or the edit form of ``item_id``."""
    return target if item_id is None else f"{target}/{item_id}"


def empty_staging(target: str, uploads: Optional[UploadConfig] = None) -> StagingArea:
    if target == BANNER_TARGET:
        return StagingArea.for_banners(uploads)
    return StagingArea.for_products(uploads)


class NotAuthenticatedError(Exception):
    """Raised by ``require_user`` when the request has no valid session."""

    pass


@dataclass
class UserSession:
    """Form state kept per signed-in user between requests.

    Each open form has its own staging area, so previews picked for a new
    product never reach the edit form of another one.
    """

    products: ProductWorkflow
    banners: BannerWorkflow
    categories: CategoryWorkflow
    suggester: DescriptionSuggester
    uploads: Optional[UploadConfig] = None
    staging: Dict[str, StagingArea] = field(default_factory=dict)

    def staging_area(self, target: str, item_id: Optional[str] = None) -> StagingArea:
        area = self.staging.get(staging_key(target, item_id))
        return area if area is not None else empty_staging(target, self.uploads)

    def set_staging(self, target: str, item_id: Optional[str], area: StagingArea) -> None:
        self.staging[staging_key(target, item_id)] = area

    def discard_staging(self, target: str, item_id: Optional[str] = None) -> None:
        """Forget the staged files of a form once it has been saved."""
        self.staging.pop(staging_key(target, item_id), None)


@dataclass
class AppServices:
    """Process-wide collaborators, built once at startup."""

    store: object
    assets: object
    gateway: PersistenceGateway
    auth: AuthService
    generator: DescriptionGenerator
    uploads: UploadConfig
    sessions: Dict[str, UserSession] = field(default_factory=dict)

    async def connect(self) -> None:
        await self.store.connect()
        await self.assets.connect()

    async def close(self) -> None:
        await self.assets.close()
        await self.store.close()

    def session(self, user: User) -> UserSession:
        """Return the form state of a user, creating it on first use."""
        session = self.sessions.get(user.id)
        if session is None:
            session = UserSession(
                products=ProductWorkflow(self.gateway),
                banners=BannerWorkflow(self.gateway),
                categories=CategoryWorkflow(self.gateway),
                suggester=DescriptionSuggester(self.generator),
                uploads=self.uploads,
            )
            self.sessions[user.id] = session
        return session

    def end_session(self, user: User) -> None:
        session = self.sessions.pop(user.id, None)
        if session is not None:
            session.suggester.cancel()

    def products(self) -> EntityCollection:
        return products_collection(self.gateway)

    def categories(self) -> EntityCollection:
        return categories_collection(self.gateway)

    def banners(self) -> EntityCollection:
        return banners_collection(self.gateway)


def build_services(config: AppConfig) -> AppServices:
    """
    Construct the collaborators selected by the configuration.

    Args:
        config: Application configuration.

    Returns:
        AppServices, not yet connected.
    """
    if config.database.backend == "cosmosdb":
        store = CosmosDBClient(
            endpoint=config.cosmosdb.endpoint,
            key=config.cosmosdb.key,
            database_name=config.cosmosdb.database_name,
            partition_key_path=config.cosmosdb.partition_key_path,
        )
    else:
        store = SqliteDocumentStore(config.database.sqlite_path)

    if config.storage.backend == "azure_blob":
        assets = BlobStorageClient(
            connection_string=config.storage.connection_string,
            container_name=config.storage.container_name,
        )
    else:
        assets = LocalAssetStore(config.storage.local_root, config.storage.local_base_url)

    logger.info(f"Using {config.database.backend} documents and {config.storage.backend} assets")

    return AppServices(
        store=store,
        assets=assets,
        gateway=PersistenceGateway(store, assets),
        auth=AuthService.from_config(config.auth),
        generator=DescriptionGenerator.from_config(config.openai),
        uploads=config.uploads,
    )


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def current_user(request: Request) -> Optional[User]:
    services = get_services(request)
    return services.auth.current_user(request.cookies.get(TOKEN_COOKIE))


def require_user(request: Request) -> User:
    """Dependency for back-office routes: the signed-in user or a redirect to /login."""
    user = current_user(request)
    if user is None:
        raise NotAuthenticatedError(request.url.path)
    return user


def get_session(request: Request) -> UserSession:
    return get_services(request).session(require_user(request))
