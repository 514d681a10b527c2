"""External identity and auth provider repositories."""

from uuid import UUID

from ...models.identity import (
    AuthProvider,
    UserIdentity,
    UserIdentityCreate,
    UserIdentityWithProvider,
)
from ..base import Repository
from ..executor import QueryExecutor
from ..query import EntityConfig

USER_IDENTITIES = EntityConfig(
    table_name="user_identities",
    columns=frozenset({
        "id", "user_id", "provider_id", "provider_user_id", "email", "profile", "created_at",
    }),
    auto_managed_columns=frozenset({"id", "created_at"}),
    default_text_fields=frozenset({"email", "provider_user_id"}),
    default_order_by="created_at",
    default_order_direction="DESC",
    updated_at_column=None,
)

AUTH_PROVIDERS = EntityConfig(
    table_name="auth_providers",
    columns=frozenset({
        "id", "key", "name", "type", "enabled", "config", "created_at", "updated_at",
    }),
    default_text_fields=frozenset({"key", "name"}),
    default_order_by="id",
    default_order_direction="ASC",
)


class UserIdentityRepository:
    """Repository for identities linked from external providers."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[UserIdentity] = Repository(executor, USER_IDENTITIES, UserIdentity)

    async def upsert_identity(self, data: UserIdentityCreate) -> UserIdentity:
        """Link a provider account to a user, relinking it if already known."""
        result = await self.rows.query(
            """
            INSERT INTO user_identities (user_id, provider_id, provider_user_id, email, profile)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT (provider_id, provider_user_id)
            DO UPDATE SET user_id = EXCLUDED.user_id,
                          email = EXCLUDED.email,
                          profile = EXCLUDED.profile
            RETURNING *
            """,
            [data.user_id, data.provider_id, data.provider_user_id, data.email, data.profile],
        )
        return UserIdentity(**result.rows[0])

    async def list_for_user(self, user_id: UUID | str) -> list[UserIdentityWithProvider]:
        result = await self.rows.query(
            """
            SELECT ui.*, ap.key AS provider_key, ap.name AS provider_name
            FROM user_identities ui
            JOIN auth_providers ap ON ap.id = ui.provider_id
            WHERE ui.user_id = $1
            ORDER BY ui.created_at DESC
            """,
            [user_id],
        )
        return [UserIdentityWithProvider(**row) for row in result.rows]


class AuthProviderRepository:
    """Repository for configured auth providers."""

    def __init__(self, executor: QueryExecutor) -> None:
        self.rows: Repository[AuthProvider] = Repository(executor, AUTH_PROVIDERS, AuthProvider)

    async def find_by_key(self, key: str) -> AuthProvider | None:
        return await self.rows.find_one_by({"key": key})

    async def list_enabled(self) -> list[AuthProvider]:
        return await self.rows.search({"enabled": True}, order_by="id")
