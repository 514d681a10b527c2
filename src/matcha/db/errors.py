"""Errors raised by the data-access layer itself.

Failures raised by the database driver are not wrapped; they reach the caller
unchanged.
"""


class RepositoryError(Exception):
    """Base class for errors raised before a query reaches the database."""


class InvalidIdentifierError(RepositoryError, ValueError):
    """A table, column or sort field is not a known or safe SQL identifier."""

    def __init__(self, identifier: str, table: str | None = None) -> None:
        self.identifier = identifier
        self.table = table
        where = f" for table {table}" if table else ""
        super().__init__(f"Invalid identifier {identifier!r}{where}")


class InvalidRelationshipError(RepositoryError, ValueError):
    """A junction table/column pair is not on the relationship allow-list."""

    def __init__(self, user_table: str, item_column: str) -> None:
        self.user_table = user_table
        self.item_column = item_column
        super().__init__(
            f"Relationship {user_table}.{item_column} is not allowed"
        )
