"""Catalog routes: list/search, add and delete books. All require a session."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from bookcatalog.api.auth import require_session
from bookcatalog.core.database import get_db
from bookcatalog.core.errors import NotFoundError, ValidationError
from bookcatalog.core.templating import render_message, templates
from bookcatalog.schemas.auth import SessionIdentity
from bookcatalog.services.catalog import CatalogStore

router = APIRouter()


def get_catalog(db: Annotated[Session, Depends(get_db)]) -> CatalogStore:
    """Dependency: catalog store bound to this request's DB session."""
    return CatalogStore(db)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    identity: Annotated[SessionIdentity, Depends(require_session)],
    catalog: Annotated[CatalogStore, Depends(get_catalog)],
    search: str | None = None,
) -> HTMLResponse:
    """List books newest first; ``search`` filters by title substring, ignoring case."""
    books = catalog.list_books(search)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": books,
            "username": identity.username,
            "search_query": search or "",
        },
    )


@router.get("/add", response_class=HTMLResponse)
def add_form(
    request: Request,
    _identity: Annotated[SessionIdentity, Depends(require_session)],
) -> HTMLResponse:
    return templates.TemplateResponse(request, "add_book.html", {})


@router.post("/add")
async def add_book(
    request: Request,
    _identity: Annotated[SessionIdentity, Depends(require_session)],
    catalog: Annotated[CatalogStore, Depends(get_catalog)],
) -> Response:
    """Store a book from whatever fields the form sent; ``title`` is required."""
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    try:
        await run_in_threadpool(catalog.add_book, fields)
    except ValidationError as e:
        return render_message(
            request,
            e.message,
            link="/add",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/delete/{book_id}")
def delete_book(
    book_id: str,
    _identity: Annotated[SessionIdentity, Depends(require_session)],
    catalog: Annotated[CatalogStore, Depends(get_catalog)],
) -> RedirectResponse:
    """Delete a book; deleting one that is already gone is not an error."""
    try:
        catalog.delete_book(book_id)
    except NotFoundError:
        pass
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
