"""Chat room and chat message models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class MessageType(str, Enum):
    """Chat message content types."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class ChatRoom(BaseModel):
    """A one-to-one chat room, stored with the smaller user id first."""

    id: UUID
    user1_id: UUID
    user2_id: UUID
    created_at: datetime

    def has_participant(self, user_id: UUID) -> bool:
        return user_id in (self.user1_id, self.user2_id)


class ChatParticipant(BaseModel):
    """Participant shown in a chat room listing."""

    id: UUID
    username: str | None = None
    first_name: str | None = None
    photo_url: str


class ChatRoomWithParticipants(ChatRoom):
    """Chat room enriched with both participants and their primary photos."""

    user1: ChatParticipant
    user2: ChatParticipant
    last_message_at: datetime | None = None


class ChatMessageCreate(BaseModel):
    """Model for sending a message."""

    message_type: MessageType = MessageType.TEXT
    content: str | None = Field(None, max_length=5000)
    media_filename: str | None = None
    media_file_path: str | None = None
    media_file_size: int | None = Field(None, ge=0)
    media_mime_type: str | None = None
    media_duration: int | None = Field(None, ge=0)
    thumbnail_path: str | None = None

    @model_validator(mode="after")
    def check_content(self) -> "ChatMessageCreate":
        """Text messages need content; media messages need a matching MIME type."""
        if self.message_type is MessageType.TEXT:
            if not self.content:
                raise ValueError("Text messages require content")
        elif not (self.media_mime_type or "").startswith(f"{self.message_type.value}/"):
            raise ValueError(f"Invalid MIME type for {self.message_type.value} message")
        return self


class ChatMessage(BaseModel):
    """A stored chat message."""

    id: UUID
    chat_room_id: UUID
    sender_id: UUID
    message_type: MessageType = MessageType.TEXT
    content: str | None = None
    media_filename: str | None = None
    media_file_path: str | None = None
    media_file_size: int | None = None
    media_mime_type: str | None = None
    media_duration: int | None = None
    thumbnail_path: str | None = None
    read_at: datetime | None = None
    created_at: datetime
