from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from locallibrary.catalog.api import catalog_router
from locallibrary.core.config import Settings, get_settings
from locallibrary.core.db import CatalogStore
from locallibrary.logging.setup import get_logger, setup_logging
from locallibrary.middlewares import RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store on startup and close it on shutdown."""
    store: CatalogStore = app.state.store
    settings: Settings = app.state.settings

    logger.info(f"{settings.PROJECT_NAME} starting up ({settings.APP_ENV})")
    await store.connect(create_tables=settings.CREATE_TABLES)
    try:
        yield
    finally:
        await store.close()
        logger.info(f"{settings.PROJECT_NAME} shut down")


def register_exception_handlers(app: FastAPI) -> None:
    """Render errors as catalog error pages."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return app.state.templates.TemplateResponse(
            request,
            "error.html",
            {"title": "Error", "status_code": exc.status_code, "message": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Store error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return app.state.templates.TemplateResponse(
            request,
            "error.html",
            {
                "title": "Error",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": "The catalog is temporarily unavailable.",
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_app(
    settings: Optional[Settings] = None, store: Optional[CatalogStore] = None
) -> FastAPI:
    """Create and configure the catalog application.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        store: Store to use; defaults to one built from ``DATABASE_URL``
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(lifespan=lifespan, **settings.fastapi_kwargs)
    app.state.settings = settings
    app.state.store = store or CatalogStore(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    app.state.templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

    if settings.LOG_REQUESTS:
        app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(catalog_router)

    @app.get("/", include_in_schema=False)
    async def read_root():
        return RedirectResponse("/catalog", status_code=status.HTTP_302_FOUND)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring and load balancers."""
        connected = await app.state.store.check_connection()
        return JSONResponse(
            status_code=status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if connected else "unhealthy",
                "database": "connected" if connected else "disconnected",
                "environment": settings.APP_ENV,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    logger.info(f"{settings.PROJECT_NAME} application created")
    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "locallibrary.main:create_app",
        factory=True,
        host=_settings.SERVER_HOST,
        port=_settings.SERVER_PORT,
        reload=_settings.DEBUG,
    )
