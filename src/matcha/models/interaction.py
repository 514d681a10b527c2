"""Like, match and block models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from .user import UserSummary


class UserLike(BaseModel):
    """A like (or dislike) from one user to another."""

    id: UUID
    liker_id: UUID
    liked_id: UUID
    is_like: bool
    created_at: datetime


class LikeCreate(BaseModel):
    """Model for liking or disliking a user."""

    liker_id: UUID
    liked_id: UUID
    is_like: bool = True


class LikeWithUser(UserLike):
    """Like joined with the other user's profile summary."""

    user: UserSummary


class LikeStats(BaseModel):
    """Like counters for a user."""

    total_likes: int = 0
    total_dislikes: int = 0
    recent_likes: int = 0


class LikeResult(BaseModel):
    """Outcome of liking a user."""

    like: UserLike
    is_match: bool = False
    match_id: UUID | None = None


class Match(BaseModel):
    """A mutual like between two users, stored with the smaller id first."""

    id: UUID
    user1_id: UUID
    user2_id: UUID
    created_at: datetime


class MatchWithUser(Match):
    """Match joined with the other participant's profile summary."""

    matched_user: UserSummary


class UserBlock(BaseModel):
    """A block from one user to another."""

    id: UUID
    blocker_id: UUID
    blocked_id: UUID
    created_at: datetime


class BlockWithUser(UserBlock):
    """Block joined with the blocked user's profile summary."""

    blocked_user: UserSummary


class BlockStatus(BaseModel):
    """Block state between two users in both directions."""

    user1_blocked_user2: bool = False
    user2_blocked_user1: bool = False

    @property
    def any_block(self) -> bool:
        return self.user1_blocked_user2 or self.user2_blocked_user1


class BlockResult(BaseModel):
    """Outcome of blocking a user."""

    block: UserBlock
    match_removed: bool = False
    likes_removed: bool = False
