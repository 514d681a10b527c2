"""Generic table-bound repository.

A ``Repository`` is configured by an ``EntityConfig`` and an injected
``QueryExecutor``; domain repositories compose one rather than subclassing it.
"""

from collections.abc import Mapping
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel

from ..core.logging import get_logger
from ..core.pagination import DEFAULT_ORDER, calculate_pagination, create_paginated_response
from ..models.common import PaginatedResponse, PaginationRequest
from .errors import InvalidRelationshipError
from .executor import QueryExecutor, QueryResult
from .query import (
    Condition,
    EntityConfig,
    build_advanced_where,
    build_insert,
    build_limit_offset,
    build_order_by,
    build_update,
    build_where,
    check_identifier,
)

logger = get_logger(__name__)

T = TypeVar("T")

# (junction table, item column) pairs that relationship helpers may touch
RELATIONSHIP_ALLOW_LIST: frozenset[tuple[str, str]] = frozenset({
    ("user_hashtags", "hashtag_id"),
})


def _check_relationship(user_table: str, item_column: str) -> None:
    if (user_table, item_column) not in RELATIONSHIP_ALLOW_LIST:
        logger.warning("relationship_rejected", user_table=user_table, item_column=item_column)
        raise InvalidRelationshipError(user_table, item_column)


class Repository(Generic[T]):
    """CRUD, search and pagination over a single table."""

    def __init__(
        self,
        executor: QueryExecutor,
        config: EntityConfig,
        model: type[BaseModel] | None = None,
    ) -> None:
        self.executor = executor
        self.config = config
        self.model = model

    @property
    def table(self) -> str:
        return self.config.table_name

    def to_entity(self, row: Mapping[str, Any]) -> T:
        """Map a result row to the configured model (or leave it as a dict)."""
        if self.model is None:
            return dict(row)  # type: ignore[return-value]
        return self.model(**row)  # type: ignore[return-value]

    def to_entities(self, rows: Sequence[Mapping[str, Any]]) -> list[T]:
        return [self.to_entity(row) for row in rows]

    async def query(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """Execute raw SQL through the repository's executor."""
        return await self.executor.execute(sql, list(params))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_by_id(self, entity_id: Any) -> T | None:
        """Find an entity by primary key."""
        result = await self.query(
            f"SELECT * FROM {self.table} WHERE {self.config.primary_key} = $1",
            [entity_id],
        )
        row = result.first()
        return self.to_entity(row) if row else None

    async def find_all(self, limit: int | None = None, offset: int | None = None) -> list[T]:
        """Find all entities with optional limit and offset."""
        suffix = build_limit_offset(limit, offset, start=1)
        result = await self.query(f"SELECT * FROM {self.table}{suffix.sql}", suffix.params)
        return self.to_entities(result.rows)

    async def find_by(
        self,
        criteria: Mapping[str, Any],
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[T]:
        """Find entities whose columns equal the given criteria."""
        if not criteria:
            return await self.find_all(limit, offset)

        where = build_where(self.config, criteria)
        suffix = build_limit_offset(limit, offset, start=len(where.params) + 1)
        result = await self.query(
            f"SELECT * FROM {self.table} WHERE {where.sql}{suffix.sql}",
            [*where.params, *suffix.params],
        )
        return self.to_entities(result.rows)

    async def find_one_by(self, criteria: Mapping[str, Any]) -> T | None:
        """Find the first entity matching the criteria."""
        results = await self.find_by(criteria, limit=1)
        return results[0] if results else None

    async def exists(self, criteria: Mapping[str, Any]) -> bool:
        """Check whether any entity matches the criteria."""
        return await self.find_one_by(criteria) is not None

    async def count(self, criteria: Mapping[str, Any] | None = None) -> int:
        """Count entities, optionally restricted to the criteria."""
        sql = f"SELECT COUNT(*) AS count FROM {self.table}"
        params: list[Any] = []
        if criteria:
            where = build_where(self.config, criteria)
            sql += f" WHERE {where.sql}"
            params = where.params
        result = await self.query(sql, params)
        return int(result.rows[0]["count"])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, entity: Mapping[str, Any]) -> T:
        """Insert an entity, ignoring auto-managed columns, and return the stored row."""
        insert = build_insert(self.config, entity)
        result = await self.query(insert.sql, insert.params)
        row = result.rows[0]
        logger.info("entity_created", table=self.table, entity_id=str(row.get(self.config.primary_key)))
        return self.to_entity(row)

    async def update(self, entity_id: Any, patch: Mapping[str, Any]) -> T | None:
        """Update an entity by primary key.

        An empty patch (after auto-managed columns are dropped) issues no
        UPDATE and returns the current row.
        """
        update = build_update(self.config, entity_id, patch)
        if update is None:
            return await self.find_by_id(entity_id)

        result = await self.query(update.sql, update.params)
        row = result.first()
        if row:
            logger.info("entity_updated", table=self.table, entity_id=str(entity_id))
        return self.to_entity(row) if row else None

    async def delete(self, entity_id: Any) -> bool:
        """Delete an entity by primary key."""
        result = await self.query(
            f"DELETE FROM {self.table} WHERE {self.config.primary_key} = $1",
            [entity_id],
        )
        deleted = result.row_count > 0
        if deleted:
            logger.info("entity_deleted", table=self.table, entity_id=str(entity_id))
        return deleted

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(
        self,
        criteria: Mapping[str, Any],
        *,
        limit: int | None = None,
        offset: int | None = None,
        text_fields: Sequence[str] | None = None,
        order_by: str | None = None,
        order_direction: str = "ASC",
    ) -> list[T]:
        """Search using ILIKE for text fields and equality for everything else."""
        if not criteria:
            return await self.find_all(limit, offset)

        if text_fields is None:
            text_fields = tuple(self.config.default_text_fields)
        where = build_where(self.config, criteria, text_fields=text_fields)
        order = build_order_by(self.config, order_by, order_direction)
        suffix = build_limit_offset(limit, offset, start=len(where.params) + 1)
        result = await self.query(
            f"SELECT * FROM {self.table} WHERE {where.sql}{order}{suffix.sql}",
            [*where.params, *suffix.params],
        )
        return self.to_entities(result.rows)

    async def advanced_search(
        self,
        criteria: Mapping[str, Condition | Mapping[str, Any]],
        *,
        limit: int | None = None,
        offset: int | None = None,
        order_by: str | None = None,
        order_direction: str = "ASC",
        logical_operator: str = "AND",
    ) -> list[T]:
        """Search where each criterion carries its own comparison operator."""
        if not criteria:
            return await self.find_all(limit, offset)

        where = build_advanced_where(self.config, criteria, logical_operator=logical_operator)
        order = build_order_by(self.config, order_by, order_direction)
        suffix = build_limit_offset(limit, offset, start=len(where.params) + 1)
        result = await self.query(
            f"SELECT * FROM {self.table} WHERE {where.sql}{order}{suffix.sql}",
            [*where.params, *suffix.params],
        )
        return self.to_entities(result.rows)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def _resolve_order(self, pagination: PaginationRequest) -> str:
        if pagination.sort:
            return build_order_by(self.config, pagination.sort, pagination.order or DEFAULT_ORDER)
        if self.config.default_order_by:
            return build_order_by(
                self.config,
                self.config.default_order_by,
                pagination.order or self.config.default_order_direction,
            )
        return ""

    async def find_all_paginated(
        self,
        pagination: PaginationRequest,
        base_url: str,
        query_params: Mapping[str, Any] | None = None,
    ) -> PaginatedResponse[T]:
        """Page through the whole table.

        The count query is unfiltered; tables with implicit scoping (such as
        soft deletes) need ``search_paginated`` instead.

        Links carry ``query_params`` when given, else the pagination fields
        of the request.
        """
        params = calculate_pagination(pagination)
        order = self._resolve_order(pagination)

        count_result = await self.query(f"SELECT COUNT(*) AS total FROM {self.table}")
        total_items = int(count_result.rows[0]["total"])

        result = await self.query(
            f"SELECT * FROM {self.table}{order} LIMIT $1 OFFSET $2",
            [params.limit, params.offset],
        )
        return create_paginated_response(
            self.to_entities(result.rows),
            total_items,
            params.page,
            params.limit,
            base_url,
            pagination.to_query_params() if query_params is None else query_params,
        )

    async def search_paginated(
        self,
        criteria: Mapping[str, Any],
        pagination: PaginationRequest,
        base_url: str,
        *,
        text_fields: Sequence[str] | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> PaginatedResponse[T]:
        """Page through rows matching the search criteria.

        Links carry ``query_params`` when given. Otherwise they carry the
        pagination fields of the request followed by the criteria, which only
        round-trips when criteria keys are also the endpoint's query parameters.
        """
        if not criteria:
            return await self.find_all_paginated(pagination, base_url, query_params)

        params = calculate_pagination(pagination)
        if text_fields is None:
            text_fields = tuple(self.config.default_text_fields)
        where = build_where(self.config, criteria, text_fields=text_fields)
        order = self._resolve_order(pagination)

        count_result = await self.query(
            f"SELECT COUNT(*) AS total FROM {self.table} WHERE {where.sql}",
            where.params,
        )
        total_items = int(count_result.rows[0]["total"])

        limit_idx = len(where.params) + 1
        result = await self.query(
            f"SELECT * FROM {self.table} WHERE {where.sql}{order} "
            f"LIMIT ${limit_idx} OFFSET ${limit_idx + 1}",
            [*where.params, params.limit, params.offset],
        )

        if query_params is None:
            link_params: dict[str, Any] = pagination.to_query_params()
            link_params.update({key: value for key, value in criteria.items() if key not in link_params})
            query_params = link_params
        return create_paginated_response(
            self.to_entities(result.rows),
            total_items,
            params.page,
            params.limit,
            base_url,
            query_params,
        )

    # ------------------------------------------------------------------
    # Many-to-many relationships
    # ------------------------------------------------------------------

    async def find_by_user_id(
        self,
        user_id: Any,
        junction_table: str,
        junction_column: str = "hashtag_id",
    ) -> list[T]:
        """Find entities linked to a user through a junction table."""
        check_identifier(junction_table)
        check_identifier(junction_column)
        result = await self.query(
            f"SELECT t.* FROM {self.table} t "
            f"JOIN {junction_table} j ON t.{self.config.primary_key} = j.{junction_column} "
            f"WHERE j.user_id = $1",
            [user_id],
        )
        return self.to_entities(result.rows)

    async def add_user_relationship(
        self,
        user_id: Any,
        item_id: Any,
        user_table: str,
        item_column: str,
    ) -> dict[str, Any]:
        """Link a user to an item; linking twice returns the existing link."""
        _check_relationship(user_table, item_column)
        result = await self.query(
            f"INSERT INTO {user_table} (user_id, {item_column}) VALUES ($1, $2) "
            f"ON CONFLICT DO NOTHING RETURNING *",
            [user_id, item_id],
        )
        row = result.first()
        if row is None:
            existing = await self.query(
                f"SELECT * FROM {user_table} WHERE user_id = $1 AND {item_column} = $2",
                [user_id, item_id],
            )
            row = existing.first()
        else:
            logger.info("relationship_added", table=user_table, user_id=str(user_id), item_id=str(item_id))
        return row or {}

    async def remove_user_relationship(
        self,
        user_id: Any,
        item_id: Any,
        user_table: str,
        item_column: str,
    ) -> bool:
        """Unlink a user from an item."""
        _check_relationship(user_table, item_column)
        result = await self.query(
            f"DELETE FROM {user_table} WHERE user_id = $1 AND {item_column} = $2",
            [user_id, item_id],
        )
        removed = result.row_count > 0
        if removed:
            logger.info("relationship_removed", table=user_table, user_id=str(user_id), item_id=str(item_id))
        return removed
