# /app/routers/book_router.py

from ..services.book_service import BookController
from .entity_router import build_entity_router

router = build_entity_router(BookController, singular="book", plural="books")
