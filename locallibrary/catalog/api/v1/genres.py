from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_genre_service, redirect, render
from locallibrary.catalog.schemas import GenreCreate, intake
from locallibrary.catalog.services import GenreService
from locallibrary.core.exceptions import (
    BadRequestException,
    NotFoundException,
    NotImplementedException,
)
from locallibrary.security.input_validation import sanitize_text

router = APIRouter()


@router.get("/genres", response_class=HTMLResponse)
async def genre_list(request: Request, service: GenreService = Depends(get_genre_service)):
    genres = await service.list_genres()
    return render(request, "genre_list.html", {"title": "Genre List", "genre_list": genres})


@router.get("/genre/create", response_class=HTMLResponse)
async def genre_create_get(request: Request):
    return render(request, "genre_form.html", {"title": "Create Genre"})


@router.post("/genre/create", response_class=HTMLResponse)
async def genre_create_post(request: Request, service: GenreService = Depends(get_genre_service)):
    """
    Create a genre, or redirect to the existing genre with the same name.
    """
    result = intake(GenreCreate, await request.form())
    if not result.is_valid:
        return render(
            request,
            "genre_form.html",
            {"title": "Create Genre", "genre": result.candidate, "errors": result.errors},
        )

    genre, _ = await service.create_genre(result.candidate)
    return redirect(genre.url)


@router.get("/genre/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_get(
    request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)
):
    result = await service.get_genre_with_books(genre_id)
    return render(
        request,
        "genre_delete.html",
        {"title": "Delete Genre", "genre": result.parent, "genre_books": result.dependents},
    )


@router.post("/genre/delete", response_class=HTMLResponse)
@router.post("/genre/{genre_id}/delete", response_class=HTMLResponse)
async def genre_delete_post(
    request: Request,
    genre_id: Optional[str] = None,
    service: GenreService = Depends(get_genre_service),
):
    form = await request.form()
    target_id = sanitize_text(form.get("genreid")) or genre_id
    if not target_id:
        raise BadRequestException(detail="Genre id must exist", field="genreid")

    result = await service.delete_genre(target_id)
    if result.blocked:
        return render(
            request,
            "genre_delete.html",
            {"title": "Delete Genre", "genre": result.parent, "genre_books": result.dependents},
        )
    if not result.deleted:
        raise NotFoundException(detail=f"Genre {target_id} not found", code="genre_not_found")
    return redirect("/catalog/genres")


@router.get("/genre/{genre_id}/update")
async def genre_update_get(genre_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: Genre update GET")


@router.post("/genre/{genre_id}/update")
async def genre_update_post(genre_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: Genre update POST")


@router.get("/genre/{genre_id}", response_class=HTMLResponse)
async def genre_detail(
    request: Request, genre_id: str, service: GenreService = Depends(get_genre_service)
):
    result = await service.get_genre_with_books(genre_id)
    return render(
        request,
        "genre_detail.html",
        {"title": "Genre Detail", "genre": result.parent, "genre_books": result.dependents},
    )
