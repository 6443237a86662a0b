"""FastAPI application entrypoint. No business logic; only wiring and error handlers."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse, Response
from fastapi.staticfiles import StaticFiles

from bookcatalog.api import router
from bookcatalog.core.config import settings
from bookcatalog.core.database import SessionLocal, check_db_connected
from bookcatalog.core.errors import LoginRequired, StorageError
from bookcatalog.core.templating import STATIC_DIR, render_message

logger = logging.getLogger(__name__)


def _startup_db_check() -> bool:
    db = SessionLocal()
    try:
        return check_db_connected(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check the database once at startup; abort only if DB_REQUIRED_ON_STARTUP is set."""
    if await run_in_threadpool(_startup_db_check):
        logger.info("Connected to database")
    elif settings.DB_REQUIRED_ON_STARTUP:
        logger.error("Database unreachable at startup; aborting (DB_REQUIRED_ON_STARTUP=true)")
        raise RuntimeError("Database unreachable at startup")
    else:
        logger.error("Database unreachable at startup; continuing without it")
    yield


app = FastAPI(
    title="Book Catalog",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> Response:
    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)


# Form posts retry from the page that renders their form; everything else from the catalog.
RETRY_PAGES = {"/signup": "/signup", "/login": "/login", "/add": "/add"}


def retry_link(request: Request) -> str:
    """A GET-able page from which the failed request can be repeated."""
    path = request.url.path
    if request.method == "GET":
        return path
    return RETRY_PAGES.get(path, "/")


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> Response:
    return render_message(
        request,
        exc.message,
        link=retry_link(request),
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(router)


def main() -> None:
    """Run the app with uvicorn on HOST:PORT."""
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    logger.info("Site running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
