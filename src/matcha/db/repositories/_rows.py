"""Row helpers shared by repositories that join user profiles."""

from typing import Any

from ...models.user import UserSummary


def user_summary(row: dict[str, Any], id_key: str) -> UserSummary:
    """Build a profile summary from the joined ``users`` columns of a row."""
    return UserSummary(
        id=row[id_key],
        username=row["username"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        bio=row.get("bio"),
        fame_rating=row.get("fame_rating") or 0.0,
        last_seen=row.get("last_seen"),
        online_status=bool(row.get("online_status")),
    )
