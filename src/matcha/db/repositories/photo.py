"""Photo repository."""

from typing import Any
from uuid import UUID

from ...core.logging import get_logger
from ...models.photo import Photo, PhotoCreate, PhotoUpdate
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig

logger = get_logger(__name__)

USER_PHOTOS = EntityConfig(
    table_name="user_photos",
    columns=frozenset({
        "id", "user_id", "filename", "original_filename", "file_path",
        "file_size", "mime_type", "is_primary", "display_order", "created_at",
    }),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_text_fields=frozenset({"filename", "original_filename"}),
    default_order_by="display_order",
    default_order_direction="ASC",
    updated_at_column=None,
)

# Public field name -> user_photos column
_UPDATE_COLUMNS = {
    "filename": "filename",
    "original_filename": "original_filename",
    "display_order": "display_order",
    "is_main": "is_primary",
}


class PhotoRepository:
    """Repository for user photo metadata."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[Photo] = Repository(executor, USER_PHOTOS, Photo)

    async def find_by_user_id(self, user_id: UUID | str) -> list[Photo]:
        """A user's photos, primary photo first, then in display order."""
        result = await self.rows.query(
            """
            SELECT * FROM user_photos
            WHERE user_id = $1
            ORDER BY is_primary DESC, display_order ASC, created_at ASC
            """,
            [user_id],
        )
        return self.rows.to_entities(result.rows)

    async def find_by_id_and_user(self, photo_id: UUID | str, user_id: UUID | str) -> Photo | None:
        return await self.rows.find_one_by({"id": photo_id, "user_id": user_id})

    async def count_by_user_id(self, user_id: UUID | str) -> int:
        return await self.rows.count({"user_id": user_id})

    async def create_photo(self, user_id: UUID | str, data: PhotoCreate) -> Photo:
        """Record a stored photo at the end of the user's display order."""
        result = await self.rows.query(
            """
            INSERT INTO user_photos (
                user_id, filename, original_filename, file_path,
                file_size, mime_type, display_order
            )
            SELECT $1, $2, $3, $4, $5, $6, COALESCE(MAX(display_order), -1) + 1
            FROM user_photos WHERE user_id = $1
            RETURNING *
            """,
            [
                user_id,
                data.filename,
                data.original_filename,
                data.file_path,
                data.file_size,
                data.mime_type,
            ],
        )
        photo = Photo(**result.rows[0])
        logger.info("photo_created", photo_id=str(photo.id), user_id=str(user_id))
        return photo

    async def delete_by_id_and_user(self, photo_id: UUID | str, user_id: UUID | str) -> bool:
        result = await self.rows.query(
            "DELETE FROM user_photos WHERE id = $1 AND user_id = $2",
            [photo_id, user_id],
        )
        deleted = result.row_count > 0
        if deleted:
            logger.info("photo_deleted", photo_id=str(photo_id), user_id=str(user_id))
        return deleted

    async def set_as_main(self, photo_id: UUID | str, user_id: UUID | str) -> bool:
        """Make a photo the user's primary photo, clearing the previous one.

        Both changes happen in one statement. Nothing changes when the photo
        does not belong to the user.
        """
        result = await self.rows.query(
            """
            UPDATE user_photos
            SET is_primary = (id = $1)
            WHERE user_id = $2
              AND (is_primary = true OR id = $1)
              AND EXISTS (SELECT 1 FROM user_photos WHERE id = $1 AND user_id = $2)
            RETURNING id, is_primary
            """,
            [photo_id, user_id],
        )
        updated = any(row["is_primary"] for row in result.rows)
        if updated:
            logger.info("photo_set_as_main", photo_id=str(photo_id), user_id=str(user_id))
        return updated

    async def update_photo(
        self, photo_id: UUID | str, user_id: UUID | str, data: PhotoUpdate
    ) -> Photo | None:
        """Update photo metadata that was explicitly set."""
        fields = data.model_dump(exclude_unset=True)
        set_clauses: list[str] = []
        params: list[Any] = []
        param_idx = 1

        for key, value in fields.items():
            set_clauses.append(f"{_UPDATE_COLUMNS[key]} = ${param_idx}")
            params.append(value)
            param_idx += 1

        if not set_clauses:
            return await self.find_by_id_and_user(photo_id, user_id)

        params.extend([photo_id, user_id])
        result = await self.rows.query(
            f"""
            UPDATE user_photos
            SET {', '.join(set_clauses)}
            WHERE id = ${param_idx} AND user_id = ${param_idx + 1}
            RETURNING *
            """,
            params,
        )
        row = result.first()
        return Photo(**row) if row else None
