# /app/services/book_instance_service.py

"""
Business logic for book instances (physical copies). Nothing refers to a copy,
so deletion is never blocked.
"""

import asyncio
from typing import Any, Dict, List, Mapping

from app.core.config import CATALOG_PREFIX
from ..models.book_instance_model import STATUS_CHOICES, BookInstanceForm
from ..models.view_model import FieldError
from .catalog_helpers.controller_base import EntityController

MISSING_BOOK_MESSAGE = "Selected book does not exist"


class BookInstanceController(EntityController):
    entity_label = "BookInstance"
    template_prefix = "bookinstance"
    context_key = "bookinstance"
    list_key = "bookinstance_list"
    id_prefix = "inst"
    form_model = BookInstanceForm

    list_title = "Book Instance List"
    detail_title = "Book:"
    create_title = "Create BookInstance"
    update_title = "Update BookInstance"
    delete_title = "Delete BookInstance"

    @property
    def list_url(self) -> str:
        return f"{CATALOG_PREFIX}/bookinstances"

    async def fetch_all(self):
        return await self.db.get_all_book_instances()

    async def fetch_one(self, entity_id: str):
        return await self.db.get_book_instance_by_id(entity_id)

    async def insert(self, record: Dict):
        return await self.db.add_book_instance(record)

    async def replace(self, entity_id: str, record: Dict):
        return await self.db.update_book_instance(entity_id, record)

    async def remove(self, entity_id: str) -> bool:
        return await self.db.delete_book_instance(entity_id)

    async def reference_errors(self, form: BookInstanceForm) -> List[FieldError]:
        if await self.db.get_book_by_id(form.book) is None:
            return [FieldError(field="book", message=MISSING_BOOK_MESSAGE)]
        return []

    def selection_from(self, entity) -> Dict[str, Any]:
        return {"book": entity.book_id}

    async def form_lookups(self, selection: Mapping[str, Any]) -> Dict[str, Any]:
        books = await self.db.get_book_titles()
        return {
            "book_list": books,
            "selected_book": selection.get("book"),
            "status_choices": STATUS_CHOICES,
        }

    async def fetch_for_update(self, entity_id: str):
        instance, books = await asyncio.gather(
            self.db.get_book_instance_by_id(entity_id),
            self.db.get_book_titles(),
        )
        if instance is None:
            return None, {}
        return instance, {
            "book_list": books,
            "selected_book": instance.book_id,
            "status_choices": STATUS_CHOICES,
        }
