"""Tests for the asyncpg executor and pool accessors."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from matcha.db import connection
from matcha.db.executor import AsyncpgExecutor, _affected_rows


@pytest.mark.parametrize(
    ("status", "fallback", "expected"),
    [("DELETE 3", 0, 3), ("INSERT 0 1", 0, 1), ("UPDATE 0", 5, 0), ("CREATE TABLE", 2, 2), (None, 4, 4)],
)
def test_affected_rows(status, fallback, expected):
    assert _affected_rows(status, fallback) == expected


def make_connection(records, status):
    stmt = MagicMock()
    stmt.fetch = AsyncMock(return_value=records)
    stmt.get_statusmsg = MagicMock(return_value=status)
    conn = MagicMock()
    conn.prepare = AsyncMock(return_value=stmt)
    return conn, stmt


@pytest.mark.asyncio
class TestAsyncpgExecutor:
    """Tests for statement execution on a single connection."""

    async def test_rows_become_dicts(self):
        conn, stmt = make_connection([{"id": 1, "name": "jazz"}], "SELECT 1")

        result = await AsyncpgExecutor(conn).execute("SELECT * FROM hashtags WHERE id = $1", [1])

        assert result.rows == [{"id": 1, "name": "jazz"}]
        assert result.row_count == 1
        conn.prepare.assert_awaited_once_with("SELECT * FROM hashtags WHERE id = $1")
        stmt.fetch.assert_awaited_once_with(1)

    async def test_row_count_from_status(self):
        conn, _ = make_connection([], "DELETE 3")

        result = await AsyncpgExecutor(conn).execute("DELETE FROM user_likes WHERE liker_id = $1", ["u"])

        assert result.rows == []
        assert result.row_count == 3


class TestPool:
    """Tests for pool accessors before initialization."""

    def test_get_pool_requires_init(self, monkeypatch):
        monkeypatch.setattr(connection, "_pool", None)

        with pytest.raises(RuntimeError, match="not initialized"):
            connection.get_pool()

    def test_get_executor_requires_init(self, monkeypatch):
        monkeypatch.setattr(connection, "_pool", None)

        with pytest.raises(RuntimeError):
            connection.get_executor()

    @pytest.mark.asyncio
    async def test_check_health_without_pool(self, monkeypatch):
        monkeypatch.setattr(connection, "_pool", None)

        assert await connection.check_health() is False
