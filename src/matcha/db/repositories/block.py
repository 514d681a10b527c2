"""Block repository."""

from uuid import UUID

from ...core.logging import get_logger
from ...models.interaction import BlockStatus, BlockWithUser, UserBlock
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig
from ._rows import user_summary

logger = get_logger(__name__)

BLOCKS = EntityConfig(
    table_name="user_blocks",
    columns=frozenset({"id", "blocker_id", "blocked_id", "created_at"}),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)


class BlockRepository:
    """Repository for block operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[UserBlock] = Repository(executor, BLOCKS, UserBlock)

    async def create_block(self, blocker_id: UUID | str, blocked_id: UUID | str) -> UserBlock:
        """Block a user; blocking twice returns the existing block."""
        result = await self.rows.query(
            """
            INSERT INTO user_blocks (blocker_id, blocked_id)
            VALUES ($1, $2)
            ON CONFLICT (blocker_id, blocked_id) DO NOTHING
            RETURNING *
            """,
            [blocker_id, blocked_id],
        )
        row = result.first()
        if row is None:
            existing = await self.find_block(blocker_id, blocked_id)
            if existing is None:
                raise LookupError(f"Block {blocker_id} -> {blocked_id} vanished after conflict")
            return existing

        logger.info("user_blocked", blocker_id=str(blocker_id), blocked_id=str(blocked_id))
        return UserBlock(**row)

    async def remove_block(self, blocker_id: UUID | str, blocked_id: UUID | str) -> bool:
        """Unblock a user."""
        result = await self.rows.query(
            "DELETE FROM user_blocks WHERE blocker_id = $1 AND blocked_id = $2",
            [blocker_id, blocked_id],
        )
        removed = result.row_count > 0
        if removed:
            logger.info("user_unblocked", blocker_id=str(blocker_id), blocked_id=str(blocked_id))
        return removed

    async def find_block(self, blocker_id: UUID | str, blocked_id: UUID | str) -> UserBlock | None:
        return await self.rows.find_one_by({"blocker_id": blocker_id, "blocked_id": blocked_id})

    async def is_user_blocked(self, blocker_id: UUID | str, blocked_id: UUID | str) -> bool:
        return await self.rows.exists({"blocker_id": blocker_id, "blocked_id": blocked_id})

    async def is_blocked_between_users(self, user1_id: UUID | str, user2_id: UUID | str) -> BlockStatus:
        """Block state in both directions between two users."""
        result = await self.rows.query(
            """
            SELECT
                EXISTS(SELECT 1 FROM user_blocks WHERE blocker_id = $1 AND blocked_id = $2)
                    AS user1_blocked_user2,
                EXISTS(SELECT 1 FROM user_blocks WHERE blocker_id = $2 AND blocked_id = $1)
                    AS user2_blocked_user1
            """,
            [user1_id, user2_id],
        )
        row = result.first() or {}
        return BlockStatus(
            user1_blocked_user2=bool(row.get("user1_blocked_user2")),
            user2_blocked_user1=bool(row.get("user2_blocked_user1")),
        )

    async def get_blocked_users(
        self, blocker_id: UUID | str, limit: int = 50, offset: int = 0
    ) -> list[BlockWithUser]:
        """Users blocked by a user, with their profiles."""
        result = await self.rows.query(
            """
            SELECT ub.*,
                   u.username, u.first_name, u.last_name, u.bio,
                   u.fame_rating, u.last_seen, u.online_status
            FROM user_blocks ub
            JOIN users u ON ub.blocked_id = u.id
            WHERE ub.blocker_id = $1
            ORDER BY ub.created_at DESC
            LIMIT $2 OFFSET $3
            """,
            [blocker_id, limit, offset],
        )
        return [
            BlockWithUser(
                id=row["id"],
                blocker_id=row["blocker_id"],
                blocked_id=row["blocked_id"],
                created_at=row["created_at"],
                blocked_user=user_summary(row, "blocked_id"),
            )
            for row in result.rows
        ]

    async def get_blocked_count(self, blocker_id: UUID | str) -> int:
        return await self.rows.count({"blocker_id": blocker_id})

    async def get_blocked_user_ids(self, user_id: UUID | str) -> set[UUID]:
        """Ids of every user blocked by, or blocking, the given user."""
        result = await self.rows.query(
            """
            SELECT blocked_id AS other_id FROM user_blocks WHERE blocker_id = $1
            UNION
            SELECT blocker_id AS other_id FROM user_blocks WHERE blocked_id = $1
            """,
            [user_id],
        )
        return {row["other_id"] for row in result.rows}
