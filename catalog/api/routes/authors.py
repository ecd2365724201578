import uuid
from typing import Annotated, Any
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.status import HTTP_303_SEE_OTHER, HTTP_404_NOT_FOUND

from catalog.core.config import settings
from catalog.core.logging import get_logger
from catalog.core.templates import templates
from catalog.db.session import get_db, get_sessionmaker
from catalog.schemas.author import AUTHOR_FORM_FIELDS, FieldError, validate_author_form
from catalog.services.author_service import AuthorService, AuthorWithBooks, DeleteOutcome

router = APIRouter(prefix="/authors", tags=["authors"])

Db = Annotated[AsyncSession, Depends(get_db)]
Sessions = Annotated[async_sessionmaker[AsyncSession], Depends(get_sessionmaker)]


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=HTTP_303_SEE_OTHER)


def _not_found() -> HTTPException:
    return HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Author not found")


def _render_form(
    request: Request,
    title: str,
    author: Any = None,
    errors: list[FieldError] | None = None,
) -> Response:
    return templates.TemplateResponse(
        request,
        "author_form.html",
        {"title": title, "author": author, "errors": errors or []},
    )


def _render_delete(request: Request, data: AuthorWithBooks) -> Response:
    return templates.TemplateResponse(
        request,
        "author_delete.html",
        {"title": "Delete Author", "data": data},
    )


async def _submitted(request: Request) -> dict[str, str]:
    form = await request.form()
    return {
        name: value
        for name in AUTHOR_FORM_FIELDS
        if isinstance(value := form.get(name), str)
    }


# Display list of all authors
@router.get("", name="author_list")
async def list_authors(request: Request, db: Db) -> Response:
    logger = get_logger(__name__, request)
    logger.info("Listing authors")
    authors = await AuthorService.list_authors(db)
    return templates.TemplateResponse(
        request,
        "authors.html",
        {"title": "All Authors", "data": authors, "page": "authors"},
    )


# Display author create form
@router.get("/create", name="author_create_form")
async def create_author_form(request: Request) -> Response:
    return _render_form(request, "Create Author")


# Handle author create
@router.post("/create", name="author_create")
async def create_author(request: Request, db: Db) -> Response:
    submitted = await _submitted(request)
    data, errors = validate_author_form(submitted)
    if data is None:
        return _render_form(request, "Create Author", submitted, errors)

    author = await AuthorService.create_author(db, data)
    get_logger(__name__, request).info("Author created: %s", author.id)
    return _redirect(author.url)


# Display detail page for an author
@router.get("/{author_id}", name="author_detail")
async def author_detail(
    request: Request, author_id: uuid.UUID, sessions: Sessions
) -> Response:
    data = await AuthorService.get_author_detail(sessions, author_id)
    if data.author is None:
        raise _not_found()
    return templates.TemplateResponse(
        request,
        "author_detail.html",
        {"title": "Author Details", "data": data, "page": "authors"},
    )


# Display author delete form
@router.get("/{author_id}/delete", name="author_delete_form")
async def delete_author_form(
    request: Request, author_id: uuid.UUID, sessions: Sessions
) -> Response:
    data = await AuthorService.get_author_with_books(sessions, author_id)
    if data.author is None:
        return _redirect(settings.authors_path)
    return _render_delete(request, data)


# Handle author delete
@router.post("/{author_id}/delete", name="author_delete")
async def delete_author(
    request: Request, author_id: uuid.UUID, sessions: Sessions
) -> Response:
    logger = get_logger(__name__, request)
    form = await request.form()
    raw_id = form.get("authorid")
    if isinstance(raw_id, str) and raw_id.strip():
        try:
            author_id = uuid.UUID(raw_id.strip())
        except ValueError:
            raise _not_found() from None

    outcome, data = await AuthorService.delete_author(sessions, author_id)
    if outcome is DeleteOutcome.HAS_BOOKS:
        logger.warning(
            "Refusing to delete author %s: %d book(s) still reference it",
            author_id,
            len(data.books_by_author),
        )
        return _render_delete(request, data)
    if outcome is DeleteOutcome.DELETED:
        logger.info("Author deleted: %s", author_id)
    return _redirect(settings.authors_path)


# Display author update form
@router.get("/{author_id}/update", name="author_update_form")
async def update_author_form(
    request: Request, author_id: uuid.UUID, db: Db
) -> Response:
    author = await AuthorService.get_author(db, author_id)
    if author is None:
        return _redirect(settings.authors_path)
    return _render_form(request, "Update Author", author)


# Handle author update
@router.post("/{author_id}/update", name="author_update")
async def update_author(
    request: Request, author_id: uuid.UUID, db: Db
) -> Response:
    submitted = await _submitted(request)
    data, errors = validate_author_form(submitted)
    if data is None:
        return _render_form(request, "Update Author", submitted, errors)

    author = await AuthorService.update_author(db, author_id, data)
    if author is None:
        raise _not_found()
    get_logger(__name__, request).info("Author updated: %s", author.id)
    return _redirect(author.url)
