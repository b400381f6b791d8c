from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from locallibrary.catalog.api.deps import get_book_instance_service, redirect, render
from locallibrary.catalog.models import Book, BookInstanceStatus
from locallibrary.catalog.schemas import BookInstanceCreate, FieldError, intake
from locallibrary.catalog.services import BookInstanceService
from locallibrary.core.exceptions import BadRequestException, NotImplementedException
from locallibrary.security.input_validation import sanitize_text

router = APIRouter()


def _form_context(
    books: List[Book],
    instance: Optional[BookInstanceCreate] = None,
    errors: Optional[List[FieldError]] = None,
) -> Dict[str, Any]:
    return {
        "title": "Create BookInstance",
        "book_list": books,
        "statuses": [status.value for status in BookInstanceStatus],
        "bookinstance": instance,
        "errors": errors or [],
    }


@router.get("/bookinstances", response_class=HTMLResponse)
async def bookinstance_list(
    request: Request, service: BookInstanceService = Depends(get_book_instance_service)
):
    instances = await service.list_book_instances()
    return render(
        request,
        "bookinstance_list.html",
        {"title": "Book Instance List", "bookinstance_list": instances},
    )


@router.get("/bookinstance/create", response_class=HTMLResponse)
async def bookinstance_create_get(
    request: Request, service: BookInstanceService = Depends(get_book_instance_service)
):
    books = await service.list_books()
    return render(request, "bookinstance_form.html", _form_context(books))


@router.post("/bookinstance/create", response_class=HTMLResponse)
async def bookinstance_create_post(
    request: Request, service: BookInstanceService = Depends(get_book_instance_service)
):
    result = intake(BookInstanceCreate, await request.form())
    if result.is_valid:
        result.errors.extend(await service.check_references(result.candidate))

    if not result.is_valid:
        books = await service.list_books()
        return render(
            request,
            "bookinstance_form.html",
            _form_context(books, result.candidate, result.errors),
        )

    instance = await service.create_book_instance(result.candidate)
    return redirect(instance.url)


@router.get("/bookinstance/{instance_id}/delete", response_class=HTMLResponse)
async def bookinstance_delete_get(
    request: Request,
    instance_id: str,
    service: BookInstanceService = Depends(get_book_instance_service),
):
    instance = await service.get_book_instance(instance_id)
    return render(
        request,
        "bookinstance_delete.html",
        {"title": "Delete BookInstance", "bookinstance": instance},
    )


@router.post("/bookinstance/delete", response_class=HTMLResponse)
@router.post("/bookinstance/{instance_id}/delete", response_class=HTMLResponse)
async def bookinstance_delete_post(
    request: Request,
    instance_id: Optional[str] = None,
    service: BookInstanceService = Depends(get_book_instance_service),
):
    form = await request.form()
    target_id = sanitize_text(form.get("bookinstanceid")) or instance_id
    if not target_id:
        raise BadRequestException(detail="BookInstance id must exist", field="bookinstanceid")

    await service.delete_book_instance(target_id)
    return redirect("/catalog/bookinstances")


@router.get("/bookinstance/{instance_id}/update")
async def bookinstance_update_get(instance_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: BookInstance update GET")


@router.post("/bookinstance/{instance_id}/update")
async def bookinstance_update_post(instance_id: str):
    raise NotImplementedException(detail="NOT IMPLEMENTED: BookInstance update POST")


@router.get("/bookinstance/{instance_id}", response_class=HTMLResponse)
async def bookinstance_detail(
    request: Request,
    instance_id: str,
    service: BookInstanceService = Depends(get_book_instance_service),
):
    instance = await service.get_book_instance(instance_id)
    return render(
        request,
        "bookinstance_detail.html",
        {"title": "Book Instance Detail", "bookinstance": instance},
    )
