from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette import status

from locallibrary.catalog.services import (
    AuthorService,
    BookInstanceService,
    BookService,
    CatalogService,
    GenreService,
)
from locallibrary.core.config import Settings
from locallibrary.core.db import CatalogStore


def get_store(request: Request) -> CatalogStore:
    """The application's store, created and connected by the app factory."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _timeout(settings: Settings) -> Optional[float]:
    return settings.AGGREGATE_TIMEOUT


def get_catalog_service(
    store: CatalogStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> CatalogService:
    return CatalogService(store, _timeout(settings))


def get_author_service(
    store: CatalogStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> AuthorService:
    return AuthorService(store, _timeout(settings))


def get_genre_service(
    store: CatalogStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> GenreService:
    return GenreService(store, _timeout(settings))


def get_book_service(
    store: CatalogStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> BookService:
    return BookService(store, _timeout(settings))


def get_book_instance_service(
    store: CatalogStore = Depends(get_store), settings: Settings = Depends(get_app_settings)
) -> BookInstanceService:
    return BookInstanceService(store, _timeout(settings))


def render(
    request: Request,
    template: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    """Render a catalog view."""
    templates = request.app.state.templates
    return templates.TemplateResponse(request, template, context or {}, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    """302 redirect, used after every successful write."""
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)
