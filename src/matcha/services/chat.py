"""Chat service for business logic."""

from uuid import UUID

from ..core.logging import get_logger
from ..db import QueryExecutor, get_executor
from ..db.repositories import ChatMessageRepository, ChatRoomRepository
from ..models.chat import ChatMessage, ChatMessageCreate, ChatRoom, ChatRoomWithParticipants
from ..models.common import PaginatedResponse, PaginationRequest

logger = get_logger(__name__)


class ChatService:
    """Service for chat rooms and messages, enforcing room membership."""

    def __init__(self, executor: QueryExecutor | None = None) -> None:
        executor = executor or get_executor()
        self.rooms = ChatRoomRepository(executor)
        self.messages = ChatMessageRepository(executor)

    async def get_user_chat_rooms(self, user_id: UUID) -> list[ChatRoomWithParticipants]:
        return await self.rooms.find_for_user(user_id)

    async def get_chat_room(self, room_id: UUID, user_id: UUID) -> ChatRoom | None:
        """Get a room the user takes part in.

        Returns None when the room does not exist and raises PermissionError
        when the user is not one of its participants.
        """
        room = await self.rooms.find_by_id(room_id)
        if room is None:
            return None
        if not room.has_participant(user_id):
            logger.warning("chat_room_access_denied", room_id=str(room_id), user_id=str(user_id))
            raise PermissionError("Access denied")
        return room

    async def create_chat_room(self, user1_id: UUID, user2_id: UUID) -> ChatRoom:
        if user1_id == user2_id:
            raise ValueError("Cannot open a chat room with yourself")
        existing = await self.rooms.find_by_user_ids(user1_id, user2_id)
        if existing is not None:
            return existing
        return await self.rooms.create_chat_room(user1_id, user2_id)

    async def get_chat_messages(
        self,
        room_id: UUID,
        user_id: UUID,
        pagination: PaginationRequest,
        base_url: str,
    ) -> PaginatedResponse[ChatMessage] | None:
        if await self.get_chat_room(room_id, user_id) is None:
            return None
        return await self.messages.get_by_chat_id(room_id, pagination, base_url)

    async def send_message(
        self, room_id: UUID, sender_id: UUID, data: ChatMessageCreate
    ) -> ChatMessage | None:
        if await self.get_chat_room(room_id, sender_id) is None:
            return None
        message = await self.messages.create_message(room_id, sender_id, data)
        logger.info("chat_message_sent", room_id=str(room_id), message_id=str(message.id))
        return message

    async def mark_messages_read(self, room_id: UUID, user_id: UUID) -> int | None:
        if await self.get_chat_room(room_id, user_id) is None:
            return None
        return await self.messages.mark_read(room_id, user_id)

    async def delete_chat_room(self, room_id: UUID, user_id: UUID) -> bool:
        if await self.get_chat_room(room_id, user_id) is None:
            return False
        return await self.rooms.delete_chat_room(room_id)
