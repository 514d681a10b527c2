"""Like repository."""

from typing import Any
from uuid import UUID

from ...core.logging import get_logger
from ...models.interaction import LikeCreate, LikeStats, LikeWithUser, UserLike
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig
from ._rows import user_summary

logger = get_logger(__name__)

LIKES = EntityConfig(
    table_name="user_likes",
    columns=frozenset({"id", "liker_id", "liked_id", "is_like", "created_at"}),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)

_LIKE_WITH_USER_SQL = """
    SELECT ul.*,
           u.id AS user_id, u.username, u.first_name, u.last_name, u.bio,
           u.fame_rating, u.last_seen, u.online_status
    FROM user_likes ul
    JOIN users u ON ul.{join_column} = u.id
    WHERE ul.{filter_column} = $1 AND ul.is_like = true
    ORDER BY ul.created_at DESC
    LIMIT $2 OFFSET $3
"""


def _like_with_user(row: dict[str, Any]) -> LikeWithUser:
    return LikeWithUser(
        id=row["id"],
        liker_id=row["liker_id"],
        liked_id=row["liked_id"],
        is_like=row["is_like"],
        created_at=row["created_at"],
        user=user_summary(row, "user_id"),
    )


class LikeRepository:
    """Repository for like operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[UserLike] = Repository(executor, LIKES, UserLike)

    async def create_or_update_like(self, data: LikeCreate) -> UserLike:
        """Insert a like, or flip an existing one between like and dislike."""
        result = await self.rows.query(
            """
            INSERT INTO user_likes (liker_id, liked_id, is_like)
            VALUES ($1, $2, $3)
            ON CONFLICT (liker_id, liked_id)
            DO UPDATE SET is_like = EXCLUDED.is_like, created_at = CURRENT_TIMESTAMP
            RETURNING *
            """,
            [data.liker_id, data.liked_id, data.is_like],
        )
        like = UserLike(**result.rows[0])
        logger.info("like_saved", liker_id=str(data.liker_id), liked_id=str(data.liked_id), is_like=data.is_like)
        return like

    async def remove_like(self, liker_id: UUID | str, liked_id: UUID | str) -> bool:
        """Remove a like or dislike."""
        result = await self.rows.query(
            "DELETE FROM user_likes WHERE liker_id = $1 AND liked_id = $2",
            [liker_id, liked_id],
        )
        return result.row_count > 0

    async def get_like_between_users(self, liker_id: UUID | str, liked_id: UUID | str) -> UserLike | None:
        return await self.rows.find_one_by({"liker_id": liker_id, "liked_id": liked_id})

    async def check_mutual_like(self, user1_id: UUID | str, user2_id: UUID | str) -> bool:
        """True when both users have liked each other."""
        result = await self.rows.query(
            """
            SELECT COUNT(*) AS count FROM user_likes
            WHERE ((liker_id = $1 AND liked_id = $2) OR (liker_id = $2 AND liked_id = $1))
              AND is_like = true
            """,
            [user1_id, user2_id],
        )
        return int(result.rows[0]["count"]) == 2

    async def get_users_who_liked_user(
        self, user_id: UUID | str, limit: int = 50, offset: int = 0
    ) -> list[LikeWithUser]:
        """Likes received by a user, with the liker's profile."""
        result = await self.rows.query(
            _LIKE_WITH_USER_SQL.format(join_column="liker_id", filter_column="liked_id"),
            [user_id, limit, offset],
        )
        return [_like_with_user(row) for row in result.rows]

    async def get_users_liked_by_user(
        self, user_id: UUID | str, limit: int = 50, offset: int = 0
    ) -> list[LikeWithUser]:
        """Likes given by a user, with the liked user's profile."""
        result = await self.rows.query(
            _LIKE_WITH_USER_SQL.format(join_column="liked_id", filter_column="liker_id"),
            [user_id, limit, offset],
        )
        return [_like_with_user(row) for row in result.rows]

    async def get_like_stats(self, user_id: UUID | str) -> LikeStats:
        """Likes, dislikes and last-24h likes received by a user."""
        result = await self.rows.query(
            """
            SELECT
                COUNT(*) FILTER (WHERE is_like = true) AS total_likes,
                COUNT(*) FILTER (WHERE is_like = false) AS total_dislikes,
                COUNT(*) FILTER (
                    WHERE is_like = true AND created_at > NOW() - INTERVAL '24 hours'
                ) AS recent_likes
            FROM user_likes
            WHERE liked_id = $1
            """,
            [user_id],
        )
        row = result.first() or {}
        return LikeStats(
            total_likes=int(row.get("total_likes") or 0),
            total_dislikes=int(row.get("total_dislikes") or 0),
            recent_likes=int(row.get("recent_likes") or 0),
        )

    async def update_user_like_count(self, user_id: UUID | str) -> None:
        """Recompute the denormalized likes_received_count on users."""
        await self.rows.query(
            """
            UPDATE users
            SET likes_received_count = (
                SELECT COUNT(*) FROM user_likes WHERE liked_id = $1 AND is_like = true
            )
            WHERE id = $1
            """,
            [user_id],
        )

    async def check_like_rate_limit(self, user_id: UUID | str, max_likes_per_hour: int = 50) -> bool:
        """True while the user is under the hourly like budget."""
        result = await self.rows.query(
            """
            SELECT COUNT(*) AS count FROM user_likes
            WHERE liker_id = $1 AND created_at > NOW() - INTERVAL '1 hour'
            """,
            [user_id],
        )
        return int(result.rows[0]["count"]) < max_likes_per_hour
