# /tests/conftest.py

import asyncio
from datetime import date
from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient

from app.db.database import build_engine, build_session_factory, create_tables
from app.main import app
from app.services.catalog_helpers.validation import new_entity_id
from app.services.database_helpers.catalog_repository_sql import CatalogRepositorySQL
from app.services.database_service import DatabaseService, get_db_service


class CatalogSeeder:
    """
    Writes catalog records straight through the repository, each call in a
    fresh session, so tests can arrange data and read it back without going
    through HTTP.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def call(self, operation):
        with self.session_factory() as session:
            return operation(CatalogRepositorySQL(session))

    def author(self, first_name: str = "Patrick", family_name: str = "Rothfuss", **extra):
        record = {"id": new_entity_id("auth"), "first_name": first_name, "family_name": family_name, **extra}
        return self.call(lambda repo: repo.add_author(record))

    def genre(self, name: str = "Fantasy"):
        genre, _ = self.call(lambda repo: repo.add_genre_if_absent({"id": new_entity_id("genre"), "name": name}))
        return genre

    def book(self, author, title: str = "The Name of the Wind", genres: Iterable = (), **extra):
        record = {
            "id": new_entity_id("book"),
            "title": title,
            "summary": extra.pop("summary", "A young man grows up to be a legendary wizard."),
            "isbn": extra.pop("isbn", "9780756404741"),
            "author_id": author.id,
            "genre_ids": [genre.id for genre in genres],
        }
        return self.call(lambda repo: repo.add_book(record))

    def instance(self, book, status: str = "Available", imprint: str = "Gollancz, 2011", due_back: Optional[date] = None):
        record = {
            "id": new_entity_id("inst"),
            "book_id": book.id,
            "imprint": imprint,
            "status": status,
            "due_back": due_back,
        }
        return self.call(lambda repo: repo.add_book_instance(record))


@pytest.fixture
def session_factory(tmp_path):
    """
    Creates a NEW, CLEAN SQLite database file for EACH test function and
    returns a session factory bound to it.
    """
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog_test.db'}")
    create_tables(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_service(session_factory):
    return DatabaseService(session_factory)


@pytest.fixture
def seed(session_factory):
    return CatalogSeeder(session_factory)


@pytest.fixture
def run():
    """Runs a coroutine to completion; services are async."""
    return asyncio.run


@pytest.fixture
def client(db_service):
    """
    A TestClient whose requests hit the per-test database. Redirects are not
    followed so tests can assert on the 302 and its Location header.
    """
    app.dependency_overrides[get_db_service] = lambda: db_service
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()
