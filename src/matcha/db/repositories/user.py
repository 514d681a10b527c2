"""User repository."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from ...models.common import PaginatedResponse, PaginationRequest
from ...models.user import User, UserCreate, UserPublic, UserSearchCriteria, UserUpdate
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig

USERS = EntityConfig(
    table_name="users",
    columns=frozenset({
        "id", "username", "email", "password", "first_name", "last_name", "age",
        "bio", "gender", "sexual_orientation", "location", "location_manual",
        "activated", "profile_complete", "fame_rating", "last_seen",
        "online_status", "email_verification_token", "email_verified_at",
        "password_reset_token", "password_reset_expires_at",
        "likes_received_count", "matches_count", "created_at", "updated_at",
    }),
    auto_managed_columns=frozenset({
        "id", "created_at", "updated_at", "likes_received_count",
        "matches_count", "photos", "hashtags",
    }),
    default_text_fields=frozenset({"username", "first_name", "last_name"}),
    default_order_by="created_at",
    default_order_direction="DESC",
)


class UserRepository:
    """Repository for user operations."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[User] = Repository(executor, USERS, User)

    async def find_by_id(self, user_id: UUID | str) -> User | None:
        return await self.rows.find_by_id(user_id)

    async def list_public(
        self, pagination: PaginationRequest, base_url: str
    ) -> PaginatedResponse[UserPublic]:
        """Page through users, exposing only their public fields."""
        page = await self.rows.find_all_paginated(pagination, base_url)
        return PaginatedResponse[UserPublic](
            data=[UserPublic.model_validate(user.model_dump()) for user in page.data],
            meta=page.meta,
            links=page.links,
        )

    async def find_by_email(self, email: str) -> User | None:
        """Find a user by email."""
        return await self.rows.find_one_by({"email": email})

    async def find_by_username(self, username: str) -> User | None:
        """Find a user by username."""
        return await self.rows.find_one_by({"username": username})

    async def find_by_email_or_username(self, email_or_username: str) -> User | None:
        """Find a user whose email or username equals the given value."""
        result = await self.rows.query(
            "SELECT * FROM users WHERE email = $1 OR username = $1 LIMIT 1",
            [email_or_username],
        )
        row = result.first()
        return User(**row) if row else None

    async def create_user(self, data: UserCreate) -> User:
        """Create a new, not yet activated user."""
        payload: dict[str, Any] = data.model_dump(mode="json")
        payload.update(
            activated=False,
            profile_complete=False,
            fame_rating=0.0,
            online_status=False,
            last_seen=datetime.now(timezone.utc),
        )
        return await self.rows.create(payload)

    async def update_profile(self, user_id: UUID | str, data: UserUpdate) -> User | None:
        """Update profile fields that were explicitly set."""
        return await self.rows.update(user_id, data.model_dump(mode="json", exclude_unset=True))

    async def activate_user(self, user_id: UUID | str) -> User | None:
        """Mark the account as activated and the email as verified."""
        return await self.rows.update(
            user_id,
            {"activated": True, "email_verified_at": datetime.now(timezone.utc)},
        )

    async def update_online_status(self, user_id: UUID | str, is_online: bool) -> User | None:
        """Record presence and refresh last_seen."""
        return await self.rows.update(
            user_id,
            {"online_status": is_online, "last_seen": datetime.now(timezone.utc)},
        )

    async def search_users(self, criteria: UserSearchCriteria) -> list[User]:
        """Find activated users by age, gender, orientation and distance."""
        where_clauses = ["activated = true"]
        params: list[Any] = []
        param_idx = 1

        if criteria.age_min is not None:
            where_clauses.append(f"age >= ${param_idx}")
            params.append(criteria.age_min)
            param_idx += 1

        if criteria.age_max is not None:
            where_clauses.append(f"age <= ${param_idx}")
            params.append(criteria.age_max)
            param_idx += 1

        if criteria.gender:
            where_clauses.append(f"gender = ${param_idx}")
            params.append(criteria.gender.value)
            param_idx += 1

        if criteria.sexual_orientation:
            where_clauses.append(f"sexual_orientation = ${param_idx}")
            params.append(criteria.sexual_orientation.value)
            param_idx += 1

        if criteria.latitude is not None and criteria.longitude is not None:
            where_clauses.append(
                "ST_DWithin(location::geography, "
                f"ST_SetSRID(ST_MakePoint(${param_idx}, ${param_idx + 1}), 4326)::geography, "
                f"${param_idx + 2} * 1000)"
            )
            params.extend([criteria.longitude, criteria.latitude, criteria.radius_km])
            param_idx += 3

        query = f"SELECT * FROM users WHERE {' AND '.join(where_clauses)} ORDER BY created_at DESC"

        if criteria.limit:
            query += f" LIMIT ${param_idx}"
            params.append(criteria.limit)
            param_idx += 1

        if criteria.offset:
            query += f" OFFSET ${param_idx}"
            params.append(criteria.offset)

        result = await self.rows.query(query, params)
        return self.rows.to_entities(result.rows)
