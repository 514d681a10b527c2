"""Matcha data models."""

from .common import (
    APIResponse,
    ErrorResponse,
    PaginatedResponse,
    PaginationLinks,
    PaginationMeta,
    PaginationParams,
    PaginationRequest,
)
from .user import (
    Gender,
    SexualOrientation,
    User,
    UserCreate,
    UserPublic,
    UserSearchCriteria,
    UserSummary,
    UserUpdate,
)
from .interaction import (
    BlockResult,
    BlockStatus,
    BlockWithUser,
    LikeCreate,
    LikeResult,
    LikeStats,
    LikeWithUser,
    Match,
    MatchWithUser,
    UserBlock,
    UserLike,
)
from .hashtag import Hashtag, UserHashtag
from .chat import (
    ChatMessage,
    ChatMessageCreate,
    ChatParticipant,
    ChatRoom,
    ChatRoomWithParticipants,
    MessageType,
)
from .identity import (
    AuthProvider,
    ProviderType,
    UserIdentity,
    UserIdentityCreate,
    UserIdentityWithProvider,
)
from .notification import Notification
from .photo import ImageMimeType, Photo, PhotoCreate, PhotoUpdate

__all__ = [
    # Common
    "APIResponse",
    "ErrorResponse",
    "PaginatedResponse",
    "PaginationLinks",
    "PaginationMeta",
    "PaginationParams",
    "PaginationRequest",
    # User
    "Gender",
    "SexualOrientation",
    "User",
    "UserCreate",
    "UserPublic",
    "UserSearchCriteria",
    "UserSummary",
    "UserUpdate",
    # Likes, matches, blocks
    "BlockResult",
    "BlockStatus",
    "BlockWithUser",
    "LikeCreate",
    "LikeResult",
    "LikeStats",
    "LikeWithUser",
    "Match",
    "MatchWithUser",
    "UserBlock",
    "UserLike",
    # Hashtags
    "Hashtag",
    "UserHashtag",
    # Chat
    "ChatMessage",
    "ChatMessageCreate",
    "ChatParticipant",
    "ChatRoom",
    "ChatRoomWithParticipants",
    "MessageType",
    # Identities
    "AuthProvider",
    "ProviderType",
    "UserIdentity",
    "UserIdentityCreate",
    "UserIdentityWithProvider",
    # Notifications
    "Notification",
    # Photos
    "ImageMimeType",
    "Photo",
    "PhotoCreate",
    "PhotoUpdate",
]
