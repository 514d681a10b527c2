"""Business logic services."""

from .block import BlockService
from .chat import ChatService
from .hashtag import HashtagService
from .like import LikeService

__all__ = [
    "BlockService",
    "ChatService",
    "HashtagService",
    "LikeService",
]
