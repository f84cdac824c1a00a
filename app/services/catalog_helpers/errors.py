# /app/services/catalog_helpers/errors.py


class EntityNotFoundError(Exception):
    """
    Raised when a page is requested for a catalog record that does not exist.
    The application turns it into a 404 error page.
    """

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class GenreNameTakenError(Exception):
    """Raised when a genre update collides with another genre's name."""

    def __init__(self, name: str, taken_by: str):
        self.name = name
        self.taken_by = taken_by
        super().__init__(f"Genre name {name!r} is used by {taken_by}")
