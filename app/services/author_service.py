# /app/services/author_service.py

"""
Business logic for authors. An author cannot be deleted while any book still
names them as its author.
"""

import asyncio
from typing import Dict

from app.core.config import CATALOG_PREFIX
from ..models.author_model import AuthorForm
from .catalog_helpers.controller_base import EntityController


class AuthorController(EntityController):
    entity_label = "Author"
    template_prefix = "author"
    context_key = "author"
    list_key = "author_list"
    dependents_key = "author_books"
    id_prefix = "auth"
    form_model = AuthorForm

    list_title = "Author List"
    detail_title = "Author Detail"
    create_title = "Create Author"
    update_title = "Update Author"
    delete_title = "Delete Author"

    @property
    def list_url(self) -> str:
        return f"{CATALOG_PREFIX}/authors"

    async def fetch_all(self):
        return await self.db.get_all_authors()

    async def fetch_one(self, entity_id: str):
        return await self.db.get_author_by_id(entity_id)

    async def fetch_with_dependents(self, entity_id: str):
        author, books = await asyncio.gather(
            self.db.get_author_by_id(entity_id),
            self.db.get_books_by_author(entity_id),
        )
        return author, books

    async def insert(self, record: Dict):
        return await self.db.add_author(record)

    async def replace(self, entity_id: str, record: Dict):
        return await self.db.update_author(entity_id, record)

    async def remove(self, entity_id: str) -> bool:
        return await self.db.delete_author(entity_id)
