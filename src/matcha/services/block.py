"""Block service for business logic."""

from uuid import UUID

from ..core.logging import get_logger
from ..db import QueryExecutor, get_executor
from ..db.repositories import BlockRepository, LikeRepository, MatchRepository
from ..models.interaction import BlockResult, BlockWithUser

logger = get_logger(__name__)


class BlockService:
    """Service for blocking users."""

    def __init__(self, executor: QueryExecutor | None = None) -> None:
        executor = executor or get_executor()
        self.blocks = BlockRepository(executor)
        self.likes = LikeRepository(executor)
        self.matches = MatchRepository(executor)

    async def block_user(self, blocker_id: UUID, blocked_id: UUID) -> BlockResult:
        """Block a user and tear down any likes and match between the two."""
        if blocker_id == blocked_id:
            raise ValueError("Users cannot block themselves")

        block = await self.blocks.create_block(blocker_id, blocked_id)

        match_removed = await self.matches.remove_match(blocker_id, blocked_id)
        removed_given = await self.likes.remove_like(blocker_id, blocked_id)
        removed_received = await self.likes.remove_like(blocked_id, blocker_id)

        if removed_given:
            await self.likes.update_user_like_count(blocked_id)
        if removed_received:
            await self.likes.update_user_like_count(blocker_id)
        if match_removed:
            await self.matches.update_user_match_count(blocker_id)
            await self.matches.update_user_match_count(blocked_id)

        return BlockResult(
            block=block,
            match_removed=match_removed,
            likes_removed=removed_given or removed_received,
        )

    async def unblock_user(self, blocker_id: UUID, blocked_id: UUID) -> bool:
        return await self.blocks.remove_block(blocker_id, blocked_id)

    async def can_interact(self, user1_id: UUID, user2_id: UUID) -> bool:
        """False when either user has blocked the other."""
        status = await self.blocks.is_blocked_between_users(user1_id, user2_id)
        return not status.any_block

    async def get_blocked_users(
        self, blocker_id: UUID, limit: int = 50, offset: int = 0
    ) -> list[BlockWithUser]:
        return await self.blocks.get_blocked_users(blocker_id, limit, offset)
