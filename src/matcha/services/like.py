"""Like service for business logic."""

from uuid import UUID

from ..core.config import settings
from ..core.logging import get_logger
from ..db import QueryExecutor, get_executor
from ..db.repositories import LikeRepository, MatchRepository
from ..models.interaction import LikeCreate, LikeResult, LikeStats, LikeWithUser

logger = get_logger(__name__)


class LikeService:
    """Service for likes and the matches they produce.

    ``like_user`` runs its statements one after another on the given executor.
    Pass an executor from ``transaction()`` to make the whole sequence atomic.
    """

    def __init__(self, executor: QueryExecutor | None = None) -> None:
        executor = executor or get_executor()
        self.likes = LikeRepository(executor)
        self.matches = MatchRepository(executor)

    async def like_user(self, liker_id: UUID, liked_id: UUID, is_like: bool = True) -> LikeResult:
        """Like or dislike a user, creating a match on a mutual like."""
        if liker_id == liked_id:
            raise ValueError("Users cannot like themselves")

        if not await self.likes.check_like_rate_limit(liker_id, settings.max_likes_per_hour):
            logger.warning("like_rate_limited", liker_id=str(liker_id))
            raise ValueError("Rate limit exceeded. Please try again later.")

        like = await self.likes.create_or_update_like(
            LikeCreate(liker_id=liker_id, liked_id=liked_id, is_like=is_like)
        )
        await self.likes.update_user_like_count(liked_id)

        if not is_like or not await self.likes.check_mutual_like(liker_id, liked_id):
            return LikeResult(like=like)

        match = await self.matches.create_match(liker_id, liked_id)
        await self.matches.update_user_match_count(liker_id)
        await self.matches.update_user_match_count(liked_id)
        return LikeResult(like=like, is_match=True, match_id=match.id)

    async def unlike_user(self, liker_id: UUID, liked_id: UUID) -> bool:
        """Remove a like. Existing matches are kept."""
        removed = await self.likes.remove_like(liker_id, liked_id)
        if removed:
            await self.likes.update_user_like_count(liked_id)
        return removed

    async def get_likes_received(
        self, user_id: UUID, limit: int = 50, offset: int = 0
    ) -> list[LikeWithUser]:
        return await self.likes.get_users_who_liked_user(user_id, limit, offset)

    async def get_likes_given(
        self, user_id: UUID, limit: int = 50, offset: int = 0
    ) -> list[LikeWithUser]:
        return await self.likes.get_users_liked_by_user(user_id, limit, offset)

    async def get_like_stats(self, user_id: UUID) -> LikeStats:
        return await self.likes.get_like_stats(user_id)
