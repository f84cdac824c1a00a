# /app/routers/book_instance_router.py

from ..services.book_instance_service import BookInstanceController
from .entity_router import build_entity_router

router = build_entity_router(BookInstanceController, singular="bookinstance", plural="bookinstances")
