# /app/services/genre_service.py

"""
Business logic for genres.

Genre names are unique regardless of letter case. Creating a genre whose name
is already taken (e.g. "fantasy" when "Fantasy" exists) creates nothing and
sends the user to the existing genre instead. Renaming a genre onto a name
another genre already uses is refused with a form error.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping

from app.core.config import CATALOG_PREFIX
from ..models.genre_model import GenreForm
from ..models.view_model import FieldError, RedirectTo
from .catalog_helpers.controller_base import EntityController
from .catalog_helpers.errors import GenreNameTakenError
from .catalog_helpers.validation import new_entity_id

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Genre name already exists"


class GenreController(EntityController):
    entity_label = "Genre"
    template_prefix = "genre"
    context_key = "genre"
    list_key = "list_genres"
    dependents_key = "genre_books"
    id_prefix = "genre"
    form_model = GenreForm

    list_title = "Genre List"
    detail_title = "Genre Detail"
    create_title = "Create Genre"
    update_title = "Update Genre"
    delete_title = "Delete Genre"

    @property
    def list_url(self) -> str:
        return f"{CATALOG_PREFIX}/genres"

    async def fetch_all(self):
        return await self.db.get_all_genres()

    async def fetch_one(self, entity_id: str):
        return await self.db.get_genre_by_id(entity_id)

    async def fetch_with_dependents(self, entity_id: str):
        genre, books = await asyncio.gather(
            self.db.get_genre_by_id(entity_id),
            self.db.get_books_by_genre(entity_id),
        )
        return genre, books

    async def insert(self, record: Dict):
        genre, _ = await self.db.add_genre_if_absent(record)
        return genre

    async def replace(self, entity_id: str, record: Dict):
        return await self.db.update_genre(entity_id, record)

    async def remove(self, entity_id: str) -> bool:
        return await self.db.delete_genre(entity_id)

    async def save_new(self, form: GenreForm, values: Mapping[str, Any]):
        """
        Stores the genre unless its name is already taken, ignoring case.
        Either way the user lands on the genre carrying that name.
        """
        existing = await self.db.get_genre_by_name(form.name)
        if existing:
            logger.warning("Genre %r already exists as %s; not creating a duplicate", form.name, existing.id)
            return RedirectTo(existing.url)

        record = form.to_record()
        record["id"] = new_entity_id(self.id_prefix)
        genre, created = await self.db.add_genre_if_absent(record)
        if created:
            logger.info("Created Genre %s", genre.id)
        else:
            logger.warning("Genre %r was created concurrently as %s", form.name, genre.id)
        return RedirectTo(genre.url)

    async def _refuse_rename(self, entity_id: str, name: str, taken_by: str, values: Mapping[str, Any]):
        logger.warning("Refused to rename Genre %s to %r: name used by %s", entity_id, name, taken_by)
        errors = [FieldError(field="name", message=DUPLICATE_NAME_MESSAGE)]
        return await self.render_form(self.update_title, values, errors, entity_id=entity_id)

    async def save_existing(self, entity_id: str, form: GenreForm, values: Mapping[str, Any]):
        clash = await self.db.get_genre_by_name(form.name)
        if clash is not None and clash.id != entity_id:
            return await self._refuse_rename(entity_id, form.name, clash.id, values)
        try:
            return await super().save_existing(entity_id, form, values)
        except GenreNameTakenError as exc:
            return await self._refuse_rename(entity_id, form.name, exc.taken_by, values)
