"""Database module for the matcha API."""

from .base import Repository
from .connection import init_db, close_db, get_executor, get_pool, transaction, check_health
from .errors import InvalidIdentifierError, InvalidRelationshipError, RepositoryError
from .executor import AsyncpgExecutor, QueryExecutor, QueryResult
from .query import EntityConfig

__all__ = [
    "init_db",
    "close_db",
    "get_executor",
    "get_pool",
    "transaction",
    "check_health",
    "Repository",
    "EntityConfig",
    "AsyncpgExecutor",
    "QueryExecutor",
    "QueryResult",
    "RepositoryError",
    "InvalidIdentifierError",
    "InvalidRelationshipError",
]
