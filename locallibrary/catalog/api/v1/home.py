from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_catalog_service, render
from locallibrary.catalog.services import CatalogService

router = APIRouter()


@router.get("", response_class=HTMLResponse)
async def index(request: Request, service: CatalogService = Depends(get_catalog_service)):
    """Home page with record counts."""
    data = await service.get_counts()
    return render(request, "index.html", {"title": "Local Library Home", "data": data})
