"""Domain repositories."""

from .block import BlockRepository
from .chat import ChatMessageRepository, ChatRoomRepository
from .hashtag import HashtagRepository
from .identity import AuthProviderRepository, UserIdentityRepository
from .like import LikeRepository
from .match import MatchRepository
from .notification import NotificationRepository
from .photo import PhotoRepository
from .user import UserRepository

__all__ = [
    "AuthProviderRepository",
    "BlockRepository",
    "ChatMessageRepository",
    "ChatRoomRepository",
    "HashtagRepository",
    "LikeRepository",
    "MatchRepository",
    "NotificationRepository",
    "PhotoRepository",
    "UserIdentityRepository",
    "UserRepository",
]
