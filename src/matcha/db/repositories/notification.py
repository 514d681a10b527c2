"""Notification repository."""

from uuid import UUID

from ...core.pagination import calculate_pagination, create_paginated_response
from ...models.common import PaginatedResponse, PaginationRequest
from ...models.notification import Notification
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig

NOTIFICATIONS = EntityConfig(
    table_name="notifications",
    columns=frozenset({
        "id", "user_id", "actor_id", "type", "read_at", "delivered_at",
        "status", "metadata", "created_at",
    }),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)

SORTABLE_COLUMNS = ("created_at", "read_at", "type")

_COLUMNS = "id, user_id, actor_id, type, read_at, delivered_at, status, metadata, created_at"


class NotificationRepository:
    """Repository for a user's notifications."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[Notification] = Repository(executor, NOTIFICATIONS, Notification)

    async def get_page(
        self,
        user_id: UUID | str,
        pagination: PaginationRequest,
        base_url: str,
        *,
        unread_only: bool = False,
    ) -> PaginatedResponse[Notification]:
        """Page through a user's notifications.

        Unknown sort fields fall back to ``created_at``; ties are broken by id
        so pages stay stable.
        """
        params = calculate_pagination(pagination)
        sort_column = pagination.sort if pagination.sort in SORTABLE_COLUMNS else "created_at"
        direction = "ASC" if pagination.order == "asc" else "DESC"
        where_sql = "WHERE user_id = $1" + (" AND read_at IS NULL" if unread_only else "")

        count_result = await self.rows.query(
            f"SELECT COUNT(*) AS total FROM notifications {where_sql}",
            [user_id],
        )
        total = int(count_result.rows[0]["total"])

        result = await self.rows.query(
            f"""
            SELECT {_COLUMNS}
            FROM notifications
            {where_sql}
            ORDER BY {sort_column} {direction}, id {direction}
            LIMIT $2 OFFSET $3
            """,
            [user_id, params.limit, params.offset],
        )
        return create_paginated_response(
            self.rows.to_entities(result.rows),
            total,
            params.page,
            params.limit,
            base_url,
            pagination.to_query_params(),
        )

    async def count_unread(self, user_id: UUID | str) -> int:
        result = await self.rows.query(
            "SELECT COUNT(*) AS unread FROM notifications WHERE user_id = $1 AND read_at IS NULL",
            [user_id],
        )
        return int(result.rows[0]["unread"])

    async def mark_read(self, user_id: UUID | str, notification_id: UUID | str) -> bool:
        """Mark one notification read; False if missing or already read."""
        result = await self.rows.query(
            """
            UPDATE notifications SET read_at = NOW()
            WHERE id = $1 AND user_id = $2 AND read_at IS NULL
            RETURNING id, read_at
            """,
            [notification_id, user_id],
        )
        return result.row_count > 0

    async def mark_all_read(self, user_id: UUID | str) -> int:
        result = await self.rows.query(
            "UPDATE notifications SET read_at = NOW() WHERE user_id = $1 AND read_at IS NULL",
            [user_id],
        )
        return result.row_count
