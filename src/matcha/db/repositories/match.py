"""Match repository."""

from uuid import UUID

from ...core.logging import get_logger
from ...models.interaction import Match, MatchWithUser
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig
from ._rows import user_summary

logger = get_logger(__name__)

MATCHES = EntityConfig(
    table_name="matches",
    columns=frozenset({"id", "user1_id", "user2_id", "created_at"}),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)


def ordered_pair(user1_id: UUID | str, user2_id: UUID | str) -> tuple[str, str]:
    """Order a user pair so each pair maps to exactly one row."""
    first, second = sorted((str(user1_id), str(user2_id)))
    return first, second


class MatchRepository:
    """Repository for match operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[Match] = Repository(executor, MATCHES, Match)

    async def create_match(self, user1_id: UUID | str, user2_id: UUID | str) -> Match:
        """Create a match, or return the existing one for this pair."""
        first, second = ordered_pair(user1_id, user2_id)
        result = await self.rows.query(
            """
            INSERT INTO matches (user1_id, user2_id)
            VALUES ($1, $2)
            ON CONFLICT (user1_id, user2_id) DO NOTHING
            RETURNING *
            """,
            [first, second],
        )
        row = result.first()
        if row is None:
            existing = await self.find_match(first, second)
            if existing is None:
                raise LookupError(f"Match between {first} and {second} vanished after conflict")
            return existing

        logger.info("match_created", match_id=str(row["id"]), user1_id=first, user2_id=second)
        return Match(**row)

    async def find_match(self, user1_id: UUID | str, user2_id: UUID | str) -> Match | None:
        first, second = ordered_pair(user1_id, user2_id)
        return await self.rows.find_one_by({"user1_id": first, "user2_id": second})

    async def remove_match(self, user1_id: UUID | str, user2_id: UUID | str) -> bool:
        """Remove the match between two users (unmatch)."""
        first, second = ordered_pair(user1_id, user2_id)
        result = await self.rows.query(
            "DELETE FROM matches WHERE user1_id = $1 AND user2_id = $2",
            [first, second],
        )
        removed = result.row_count > 0
        if removed:
            logger.info("match_removed", user1_id=first, user2_id=second)
        return removed

    async def are_users_matched(self, user1_id: UUID | str, user2_id: UUID | str) -> bool:
        return await self.find_match(user1_id, user2_id) is not None

    async def get_user_match_count(self, user_id: UUID | str) -> int:
        result = await self.rows.query(
            "SELECT COUNT(*) AS count FROM matches WHERE user1_id = $1 OR user2_id = $1",
            [user_id],
        )
        return int(result.rows[0]["count"])

    async def get_user_matches(
        self, user_id: UUID | str, limit: int = 50, offset: int = 0
    ) -> list[MatchWithUser]:
        """Matches of a user, each with the other participant's profile."""
        result = await self.rows.query(
            """
            SELECT m.*,
                   u.id AS matched_user_id, u.username, u.first_name, u.last_name,
                   u.bio, u.fame_rating, u.last_seen, u.online_status
            FROM matches m
            JOIN users u
              ON u.id = CASE WHEN m.user1_id = $1 THEN m.user2_id ELSE m.user1_id END
            WHERE m.user1_id = $1 OR m.user2_id = $1
            ORDER BY m.created_at DESC
            LIMIT $2 OFFSET $3
            """,
            [user_id, limit, offset],
        )
        return [
            MatchWithUser(
                id=row["id"],
                user1_id=row["user1_id"],
                user2_id=row["user2_id"],
                created_at=row["created_at"],
                matched_user=user_summary(row, "matched_user_id"),
            )
            for row in result.rows
        ]

    async def update_user_match_count(self, user_id: UUID | str) -> None:
        """Recompute the denormalized matches_count on users."""
        await self.rows.query(
            """
            UPDATE users
            SET matches_count = (
                SELECT COUNT(*) FROM matches WHERE user1_id = $1 OR user2_id = $1
            )
            WHERE id = $1
            """,
            [user_id],
        )
