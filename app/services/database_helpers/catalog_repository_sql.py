# /app/services/database_helpers/catalog_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Author, Genre,
Book and BookInstance tables. It is the direct interface to the database for
the catalog.

Relationships that a page needs are loaded eagerly here ("populated"), because
the session is closed before the results are rendered. Anything a caller
wants to read afterwards must be loaded by the query that fetched it.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, load_only, selectinload

from app.db.models.catalog_models import Author, Book, BookInstance, Genre, genre_name_key
from app.services.catalog_helpers.errors import GenreNameTakenError


class CatalogRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Author Methods ---

    def get_all_authors(self) -> List[Author]:
        """Retrieves every author, ordered by family name."""
        return self.db.query(Author).order_by(Author.family_name.asc()).all()

    def get_author_by_id(self, author_id: str) -> Optional[Author]:
        return self.db.query(Author).filter(Author.id == author_id).first()

    def count_authors(self) -> int:
        return self.db.query(func.count(Author.id)).scalar()

    def add_author(self, record: Dict) -> Author:
        new_author = Author(**record)
        self.db.add(new_author)
        self.db.commit()
        return new_author

    def update_author(self, author_id: str, data: Dict) -> Optional[Author]:
        db_author = self.get_author_by_id(author_id)
        if db_author:
            for key, value in data.items():
                setattr(db_author, key, value)
            self.db.commit()
        return db_author

    def delete_author(self, author_id: str) -> bool:
        db_author = self.get_author_by_id(author_id)
        if db_author:
            self.db.delete(db_author)
            self.db.commit()
            return True
        return False

    # --- Genre Methods ---

    def get_all_genres(self) -> List[Genre]:
        """Retrieves every genre, ordered by name."""
        return self.db.query(Genre).order_by(Genre.name.asc()).all()

    def get_genre_by_id(self, genre_id: str) -> Optional[Genre]:
        return self.db.query(Genre).filter(Genre.id == genre_id).first()

    def get_genre_by_name(self, name: str) -> Optional[Genre]:
        """Finds a genre whose name matches `name`, ignoring letter case."""
        return self.db.query(Genre).filter(Genre.name_key == genre_name_key(name)).first()

    def count_genres(self) -> int:
        return self.db.query(func.count(Genre.id)).scalar()

    def add_genre_if_absent(self, record: Dict) -> Tuple[Genre, bool]:
        """
        Inserts a genre unless one with the same case-insensitive name exists.

        Returns the stored genre and whether it was created by this call. The
        unique constraint on `name_key` settles concurrent inserts of the same
        name: the loser rolls back and gets the winner's row.
        """
        existing = self.get_genre_by_name(record["name"])
        if existing:
            return existing, False

        new_genre = Genre(**record)
        self.db.add(new_genre)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.get_genre_by_name(record["name"])
            if existing is None:
                raise
            return existing, False
        return new_genre, True

    def update_genre(self, genre_id: str, data: Dict) -> Optional[Genre]:
        """
        Renames a genre. Raises GenreNameTakenError when another genre took the
        name in the meantime; the unique constraint on `name_key` decides.
        """
        db_genre = self.get_genre_by_id(genre_id)
        if db_genre:
            for key, value in data.items():
                setattr(db_genre, key, value)
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                clash = self.get_genre_by_name(data.get("name", ""))
                if clash is None or clash.id == genre_id:
                    raise
                raise GenreNameTakenError(data["name"], clash.id) from exc
        return db_genre

    def delete_genre(self, genre_id: str) -> bool:
        db_genre = self.get_genre_by_id(genre_id)
        if db_genre:
            self.db.delete(db_genre)
            self.db.commit()
            return True
        return False

    # --- Book Methods ---

    def get_all_books(self) -> List[Book]:
        """
        Retrieves every book projected to (title, author), ordered by title,
        with the author record populated.
        """
        return (
            self.db.query(Book)
            .options(load_only(Book.title, Book.author_id), joinedload(Book.author))
            .order_by(Book.title.asc())
            .all()
        )

    def get_book_titles(self) -> List[Book]:
        """Retrieves every book projected to its title, ordered by title."""
        return self.db.query(Book).options(load_only(Book.title)).order_by(Book.title.asc()).all()

    def get_book_by_id(self, book_id: str) -> Optional[Book]:
        """Fetches a single book with its author and genres populated."""
        return (
            self.db.query(Book)
            .options(joinedload(Book.author), selectinload(Book.genres))
            .filter(Book.id == book_id)
            .first()
        )

    def get_books_by_author(self, author_id: str) -> List[Book]:
        """Retrieves the books written by an author, projected to (title, summary)."""
        return (
            self.db.query(Book)
            .options(load_only(Book.title, Book.summary))
            .filter(Book.author_id == author_id)
            .order_by(Book.title.asc())
            .all()
        )

    def get_books_by_genre(self, genre_id: str) -> List[Book]:
        """Retrieves the books tagged with a genre, projected to (title, summary)."""
        return (
            self.db.query(Book)
            .options(load_only(Book.title, Book.summary))
            .filter(Book.genres.any(Genre.id == genre_id))
            .order_by(Book.title.asc())
            .all()
        )

    def count_books(self) -> int:
        return self.db.query(func.count(Book.id)).scalar()

    def _genres_by_ids(self, genre_ids: List[str]) -> List[Genre]:
        if not genre_ids:
            return []
        return self.db.query(Genre).filter(Genre.id.in_(genre_ids)).all()

    def add_book(self, record: Dict) -> Book:
        """
        Creates a new Book record.
        The `genre_ids` entry of the record is resolved into Genre rows.
        """
        data = dict(record)
        genre_ids = data.pop("genre_ids", [])
        new_book = Book(**data)
        new_book.genres = self._genres_by_ids(genre_ids)
        self.db.add(new_book)
        self.db.commit()
        return new_book

    def update_book(self, book_id: str, data: Dict) -> Optional[Book]:
        """
        Replaces every mutable field of a book, including its genre set.
        The book keeps its id. Returns None when no such book exists.
        """
        db_book = self.get_book_by_id(book_id)
        if db_book:
            values = dict(data)
            genre_ids = values.pop("genre_ids", [])
            for key, value in values.items():
                setattr(db_book, key, value)
            db_book.genres = self._genres_by_ids(genre_ids)
            self.db.commit()
        return db_book

    def delete_book(self, book_id: str) -> bool:
        db_book = self.db.query(Book).filter(Book.id == book_id).first()
        if db_book:
            self.db.delete(db_book)
            self.db.commit()
            return True
        return False

    # --- BookInstance Methods ---

    def get_all_book_instances(self) -> List[BookInstance]:
        """Retrieves every copy, in storage order, with its book populated."""
        return self.db.query(BookInstance).options(joinedload(BookInstance.book)).all()

    def get_book_instance_by_id(self, instance_id: str) -> Optional[BookInstance]:
        return (
            self.db.query(BookInstance)
            .options(joinedload(BookInstance.book))
            .filter(BookInstance.id == instance_id)
            .first()
        )

    def get_book_instances_by_book(self, book_id: str) -> List[BookInstance]:
        return self.db.query(BookInstance).filter(BookInstance.book_id == book_id).all()

    def count_book_instances(self, status: Optional[str] = None) -> int:
        query = self.db.query(func.count(BookInstance.id))
        if status is not None:
            query = query.filter(BookInstance.status == status)
        return query.scalar()

    def add_book_instance(self, record: Dict) -> BookInstance:
        new_instance = BookInstance(**record)
        self.db.add(new_instance)
        self.db.commit()
        return new_instance

    def update_book_instance(self, instance_id: str, data: Dict) -> Optional[BookInstance]:
        db_instance = self.db.query(BookInstance).filter(BookInstance.id == instance_id).first()
        if db_instance:
            for key, value in data.items():
                setattr(db_instance, key, value)
            self.db.commit()
        return db_instance

    def delete_book_instance(self, instance_id: str) -> bool:
        db_instance = self.db.query(BookInstance).filter(BookInstance.id == instance_id).first()
        if db_instance:
            self.db.delete(db_instance)
            self.db.commit()
            return True
        return False
