from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_author_service, redirect, render
from locallibrary.catalog.schemas import AuthorCreate, intake
from locallibrary.catalog.services import AuthorService
from locallibrary.core.exceptions import (
    BadRequestException,
    NotFoundException,
    NotImplementedException,
)
from locallibrary.security.input_validation import sanitize_text

router = APIRouter()


@router.get("/authors", response_class=HTMLResponse)
async def author_list(request: Request, service: AuthorService = Depends(get_author_service)):
    """Every author, sorted by family name."""
    authors = await service.list_authors()
    return render(request, "author_list.html", {"title": "Author List", "author_list": authors})


@router.get("/author/create", response_class=HTMLResponse)
async def author_create_get(request: Request):
    return render(request, "author_form.html", {"title": "Create Author"})


@router.post("/author/create", response_class=HTMLResponse)
async def author_create_post(request: Request, service: AuthorService = Depends(get_author_service)):
    """
    Validate the submitted author.

    Invalid input re-renders the form (200) with the values entered and the
    field errors; valid input is saved and redirected to the new author.
    """
    result = intake(AuthorCreate, await request.form())
    if not result.is_valid:
        return render(
            request,
            "author_form.html",
            {"title": "Create Author", "author": result.candidate, "errors": result.errors},
        )

    author = await service.create_author(result.candidate)
    return redirect(author.url)


@router.get("/author/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_get(
    request: Request, author_id: str, service: AuthorService = Depends(get_author_service)
):
    result = await service.get_author_with_books(author_id)
    return render(
        request,
        "author_delete.html",
        {"title": "Delete Author", "author": result.parent, "author_books": result.dependents},
    )


@router.post("/author/delete", response_class=HTMLResponse)
@router.post("/author/{author_id}/delete", response_class=HTMLResponse)
async def author_delete_post(
    request: Request,
    author_id: Optional[str] = None,
    service: AuthorService = Depends(get_author_service),
):
    """Delete an author that has no books; otherwise show what blocks it."""
    form = await request.form()
    target_id = sanitize_text(form.get("authorid")) or author_id
    if not target_id:
        raise BadRequestException(detail="Author id must exist", field="authorid")

    result = await service.delete_author(target_id)
    if result.blocked:
        return render(
            request,
            "author_delete.html",
            {"title": "Delete Author", "author": result.parent, "author_books": result.dependents},
        )
    if not result.deleted:
        raise NotFoundException(detail=f"Author {target_id} not found", code="author_not_found")
    return redirect("/catalog/authors")


@router.get("/author/{author_id}/update")
async def author_update_get(author_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: Author update GET")


@router.post("/author/{author_id}/update")
async def author_update_post(author_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: Author update POST")


@router.get("/author/{author_id}", response_class=HTMLResponse)
async def author_detail(
    request: Request, author_id: str, service: AuthorService = Depends(get_author_service)
):
    """An author and the books they wrote."""
    result = await service.get_author_with_books(author_id)
    return render(
        request,
        "author_detail.html",
        {"title": "Author Detail", "author": result.parent, "author_books": result.dependents},
    )
