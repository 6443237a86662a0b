"""HTML routes and the health endpoint."""

from fastapi import APIRouter

from bookcatalog.api import auth, books, health

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(books.router, tags=["books"])
router.include_router(health.router, prefix="/health", tags=["health"])
