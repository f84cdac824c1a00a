# /app/db/base_class.py

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """
    The declarative base that every catalog model inherits from.

    Table names are derived automatically by lower-casing and pluralising the
    class name (`BookInstance` -> `bookinstances`). A model can still set
    `__tablename__` explicitly to override this.
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"
