# /app/routers/genre_router.py

from ..services.genre_service import GenreController
from .entity_router import build_entity_router

router = build_entity_router(GenreController, singular="genre", plural="genres")
