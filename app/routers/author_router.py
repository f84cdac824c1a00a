# /app/routers/author_router.py

from ..services.author_service import AuthorController
from .entity_router import build_entity_router

router = build_entity_router(AuthorController, singular="author", plural="authors")
