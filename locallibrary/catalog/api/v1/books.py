from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_book_service, redirect, render
from locallibrary.catalog.schemas import BookCreate, BookUpdate, FieldError, intake
from locallibrary.catalog.services import BookService
from locallibrary.core.exceptions import BadRequestException, NotFoundException
from locallibrary.security.input_validation import sanitize_text

router = APIRouter()


def _form_context(
    title: str,
    options: Dict[str, Any],
    book: Optional[BookCreate] = None,
    errors: Optional[List[FieldError]] = None,
) -> Dict[str, Any]:
    selected = set(book.genre) if book is not None and book.genre else set()
    return {
        "title": title,
        "authors": options["authors"],
        "genres": options["genres"],
        "selected_genres": selected,
        "book": book,
        "errors": errors or [],
    }


@router.get("/books", response_class=HTMLResponse)
async def book_list(request: Request, service: BookService = Depends(get_book_service)):
    books = await service.list_books()
    return render(request, "book_list.html", {"title": "Book List", "book_list": books})


@router.get("/book/create", response_class=HTMLResponse)
async def book_create_get(request: Request, service: BookService = Depends(get_book_service)):
    options = await service.get_form_options()
    return render(request, "book_form.html", _form_context("Create Book", options))


@router.post("/book/create", response_class=HTMLResponse)
async def book_create_post(request: Request, service: BookService = Depends(get_book_service)):
    result = intake(BookCreate, await request.form())
    if result.is_valid:
        result.errors.extend(await service.check_references(result.candidate))

    if not result.is_valid:
        options = await service.get_form_options()
        return render(
            request,
            "book_form.html",
            _form_context("Create Book", options, result.candidate, result.errors),
        )

    book = await service.create_book(result.candidate)
    return redirect(book.url)


@router.get("/book/{book_id}/delete", response_class=HTMLResponse)
async def book_delete_get(
    request: Request, book_id: str, service: BookService = Depends(get_book_service)
):
    result = await service.get_book_with_instances(book_id, populate=())
    return render(
        request,
        "book_delete.html",
        {"title": "Delete Book", "book": result.parent, "book_instances": result.dependents},
    )


@router.post("/book/delete", response_class=HTMLResponse)
@router.post("/book/{book_id}/delete", response_class=HTMLResponse)
async def book_delete_post(
    request: Request,
    book_id: Optional[str] = None,
    service: BookService = Depends(get_book_service),
):
    """Delete a book that has no copies; otherwise list the copies."""
    form = await request.form()
    target_id = sanitize_text(form.get("id")) or book_id
    if not target_id:
        raise BadRequestException(detail="Book id must exist", field="id")

    result = await service.delete_book(target_id)
    if result.blocked:
        return render(
            request,
            "book_delete.html",
            {"title": "Delete Book", "book": result.parent, "book_instances": result.dependents},
        )
    if not result.deleted:
        raise NotFoundException(detail=f"Book {target_id} not found", code="book_not_found")
    return redirect("/catalog/books")


@router.get("/book/{book_id}/update", response_class=HTMLResponse)
async def book_update_get(
    request: Request, book_id: str, service: BookService = Depends(get_book_service)
):
    results = await service.get_book_for_update(book_id)
    return render(
        request,
        "book_form.html",
        _form_context("Update Book", results, BookUpdate.from_book(results["book"])),
    )


@router.post("/book/{book_id}/update", response_class=HTMLResponse)
async def book_update_post(
    request: Request, book_id: str, service: BookService = Depends(get_book_service)
):
    result = intake(BookUpdate, await request.form())
    if result.is_valid:
        result.errors.extend(await service.check_references(result.candidate))

    if not result.is_valid:
        # 404 for a missing book, even when the submission is invalid
        options = await service.get_book_for_update(book_id)
        return render(
            request,
            "book_form.html",
            _form_context("Update Book", options, result.candidate, result.errors),
        )

    book = await service.update_book(book_id, result.candidate)
    return redirect(book.url)


@router.get("/book/{book_id}", response_class=HTMLResponse)
async def book_detail(
    request: Request, book_id: str, service: BookService = Depends(get_book_service)
):
    """A book with its author, genres and copies."""
    result = await service.get_book_with_instances(book_id)
    return render(
        request,
        "book_detail.html",
        {"title": result.parent.title, "book": result.parent, "book_instances": result.dependents},
    )
