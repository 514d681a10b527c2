"""Chat room and chat message repositories."""

from typing import Any
from uuid import UUID

from ...core.logging import get_logger
from ...models.chat import (
    ChatMessage,
    ChatMessageCreate,
    ChatParticipant,
    ChatRoom,
    ChatRoomWithParticipants,
)
from ...models.common import PaginatedResponse, PaginationRequest
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig
from .match import ordered_pair

logger = get_logger(__name__)

PLACEHOLDER_PHOTO_URL = "/images/placeholder-avatar.png"

CHAT_ROOMS = EntityConfig(
    table_name="chat_rooms",
    columns=frozenset({"id", "user1_id", "user2_id", "created_at"}),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)

CHAT_MESSAGES = EntityConfig(
    table_name="chat_messages",
    columns=frozenset({
        "id", "chat_room_id", "sender_id", "message_type", "content",
        "media_filename", "media_file_path", "media_file_size",
        "media_mime_type", "media_duration", "thumbnail_path", "read_at",
        "created_at",
    }),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_text_fields=frozenset({"content"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)


def _participant(row: dict[str, Any], prefix: str) -> ChatParticipant:
    return ChatParticipant(
        id=row[f"{prefix}_id"],
        username=row.get(f"{prefix}_username"),
        first_name=row.get(f"{prefix}_first_name"),
        photo_url=row.get(f"{prefix}_photo_url") or PLACEHOLDER_PHOTO_URL,
    )


class ChatRoomRepository:
    """Repository for chat room operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[ChatRoom] = Repository(executor, CHAT_ROOMS, ChatRoom)

    async def find_by_id(self, room_id: UUID | str) -> ChatRoom | None:
        return await self.rows.find_by_id(room_id)

    async def user_is_in_room(self, user_id: UUID | str, room_id: UUID | str) -> bool:
        result = await self.rows.query(
            "SELECT 1 FROM chat_rooms WHERE id = $1 AND (user1_id = $2 OR user2_id = $2) LIMIT 1",
            [room_id, user_id],
        )
        return result.row_count > 0

    async def find_for_user(self, user_id: UUID | str) -> list[ChatRoomWithParticipants]:
        """Rooms a user takes part in, with each participant's primary photo."""
        result = await self.rows.query(
            """
            SELECT cr.*,
                   u1.username AS user1_username, u1.first_name AS user1_first_name,
                   p1.file_path AS user1_photo_url,
                   u2.username AS user2_username, u2.first_name AS user2_first_name,
                   p2.file_path AS user2_photo_url,
                   lm.created_at AS last_message_at
            FROM chat_rooms cr
            JOIN users u1 ON u1.id = cr.user1_id
            JOIN users u2 ON u2.id = cr.user2_id
            LEFT JOIN LATERAL (
                SELECT file_path FROM user_photos
                WHERE user_id = cr.user1_id
                ORDER BY is_primary DESC, display_order ASC
                LIMIT 1
            ) p1 ON true
            LEFT JOIN LATERAL (
                SELECT file_path FROM user_photos
                WHERE user_id = cr.user2_id
                ORDER BY is_primary DESC, display_order ASC
                LIMIT 1
            ) p2 ON true
            LEFT JOIN LATERAL (
                SELECT created_at FROM chat_messages
                WHERE chat_room_id = cr.id
                ORDER BY created_at DESC
                LIMIT 1
            ) lm ON true
            WHERE cr.user1_id = $1 OR cr.user2_id = $1
            ORDER BY COALESCE(lm.created_at, cr.created_at) DESC
            """,
            [user_id],
        )
        return [
            ChatRoomWithParticipants(
                id=row["id"],
                user1_id=row["user1_id"],
                user2_id=row["user2_id"],
                created_at=row["created_at"],
                user1=_participant(row, "user1"),
                user2=_participant(row, "user2"),
                last_message_at=row.get("last_message_at"),
            )
            for row in result.rows
        ]

    async def find_by_user_ids(self, user1_id: UUID | str, user2_id: UUID | str) -> ChatRoom | None:
        first, second = ordered_pair(user1_id, user2_id)
        return await self.rows.find_one_by({"user1_id": first, "user2_id": second})

    async def create_chat_room(self, user1_id: UUID | str, user2_id: UUID | str) -> ChatRoom:
        """Create the room for a pair, or return the existing one."""
        first, second = ordered_pair(user1_id, user2_id)
        result = await self.rows.query(
            """
            INSERT INTO chat_rooms (user1_id, user2_id)
            VALUES ($1, $2)
            ON CONFLICT DO NOTHING
            RETURNING *
            """,
            [first, second],
        )
        row = result.first()
        if row is None:
            existing = await self.find_by_user_ids(first, second)
            if existing is None:
                raise LookupError(f"Chat room for {first} and {second} vanished after conflict")
            return existing

        logger.info("chat_room_created", room_id=str(row["id"]))
        return ChatRoom(**row)

    async def delete_chat_room(self, room_id: UUID | str) -> bool:
        return await self.rows.delete(room_id)


class ChatMessageRepository:
    """Repository for chat message operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[ChatMessage] = Repository(executor, CHAT_MESSAGES, ChatMessage)

    async def get_by_chat_id(
        self,
        room_id: UUID | str,
        pagination: PaginationRequest,
        base_url: str,
    ) -> PaginatedResponse[ChatMessage]:
        """Messages of a room, newest first unless the caller sorts otherwise."""
        return await self.rows.search_paginated(
            {"chat_room_id": room_id},
            pagination,
            base_url,
            query_params=pagination.to_query_params(),
        )

    async def create_message(
        self, room_id: UUID | str, sender_id: UUID | str, data: ChatMessageCreate
    ) -> ChatMessage:
        payload = data.model_dump(mode="json", exclude_none=True)
        payload.update(chat_room_id=room_id, sender_id=sender_id)
        return await self.rows.create(payload)

    async def mark_read(self, room_id: UUID | str, reader_id: UUID | str) -> int:
        """Mark every message the reader received in a room as read."""
        result = await self.rows.query(
            """
            UPDATE chat_messages SET read_at = NOW()
            WHERE chat_room_id = $1 AND sender_id != $2 AND read_at IS NULL
            """,
            [room_id, reader_id],
        )
        return result.row_count
