"""Query execution boundary used by every repository."""

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

import asyncpg

from ..core.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class QueryResult:
    """Rows returned by a statement plus the number of rows it affected."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None


class QueryExecutor(Protocol):
    """Anything that can run a parameterized statement."""

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult: ...


def _affected_rows(status: str | None, fallback: int) -> int:
    """Parse the affected row count out of a status tag such as ``DELETE 3``."""
    if not status:
        return fallback
    tail = status.rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else fallback


class AsyncpgExecutor:
    """Executor backed by an asyncpg pool or a single connection.

    With a pool, a connection is acquired for the duration of each statement
    only. With a connection (for example inside ``transaction()``), every
    statement runs on that connection.
    """

    def __init__(self, target: asyncpg.Pool | asyncpg.Connection) -> None:
        self.target = target

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        logger.debug("executing_query", sql=" ".join(sql.split()), param_count=len(params))
        if isinstance(self.target, asyncpg.Pool):
            async with self.target.acquire() as conn:
                return await self._run(conn, sql, params)
        return await self._run(self.target, sql, params)

    @staticmethod
    async def _run(conn: asyncpg.Connection, sql: str, params: Sequence[Any]) -> QueryResult:
        stmt = await conn.prepare(sql)
        records = await stmt.fetch(*params)
        rows = [dict(record) for record in records]
        return QueryResult(rows=rows, row_count=_affected_rows(stmt.get_statusmsg(), len(rows)))
