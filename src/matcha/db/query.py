"""SQL fragment builders shared by the generic repository.

Values are always bound as positional ``$n`` parameters. Identifiers (table,
column and sort names) cannot be bound, so they are checked against the
entity's declared columns, or against a strict identifier pattern when no
columns are declared, before they are interpolated.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from .errors import InvalidIdentifierError

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

OrderDirection = Literal["ASC", "DESC"]
LogicalOperator = Literal["AND", "OR"]

DEFAULT_AUTO_MANAGED = frozenset({"id", "created_at", "updated_at"})


def check_identifier(name: str, table: str | None = None) -> str:
    """Return ``name`` if it is a plain SQL identifier, else raise."""
    if not isinstance(name, str) or not IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(str(name), table)
    return name


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """Per-table metadata driving query generation.

    Attributes:
        table_name: Table the repository is bound to.
        primary_key: Identifying column, never written by ``update``.
        columns: Known schema. When empty, any plain identifier is accepted.
        auto_managed_columns: Columns dropped from every create/update payload.
        default_text_fields: Columns matched with ILIKE by ``search``.
        default_order_by: Sort column used when the caller supplies none.
        default_order_direction: Direction paired with ``default_order_by``.
        updated_at_column: Column refreshed on update, ``None`` if the table has none.
    """

    table_name: str
    primary_key: str = "id"
    columns: frozenset[str] = frozenset()
    auto_managed_columns: frozenset[str] = DEFAULT_AUTO_MANAGED
    default_text_fields: frozenset[str] = frozenset()
    default_order_by: str | None = None
    default_order_direction: OrderDirection = "ASC"
    updated_at_column: str | None = "updated_at"

    def __post_init__(self) -> None:
        check_identifier(self.table_name)
        for name in (self.primary_key, self.default_order_by, self.updated_at_column):
            if name is not None:
                self.check_column(name)
        # auto-managed names are only ever excluded, never interpolated
        for name in self.default_text_fields:
            self.check_column(name)

    def check_column(self, name: str) -> str:
        """Validate a column name before it is interpolated into SQL."""
        if self.columns:
            if name not in self.columns:
                raise InvalidIdentifierError(str(name), self.table_name)
            return name
        return check_identifier(name, self.table_name)

    def writable(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Drop auto-managed columns and the primary key from a write payload."""
        excluded = self.auto_managed_columns | {self.primary_key}
        return {
            self.check_column(key): value
            for key, value in payload.items()
            if key not in excluded
        }

    @staticmethod
    def order_direction(value: str | None, default: OrderDirection = "ASC") -> OrderDirection:
        """Normalize a caller-supplied direction to ASC or DESC."""
        if value is None:
            return default
        normalized = value.upper()
        if normalized not in ("ASC", "DESC"):
            raise ValueError(f"Invalid order direction: {value}")
        return normalized  # type: ignore[return-value]


class Operator(str, Enum):
    """Comparison operators supported by advanced search."""
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    ILIKE = "ilike"
    IN = "in"


_SQL_OPERATORS = {
    Operator.EQ: "=",
    Operator.NE: "!=",
    Operator.GT: ">",
    Operator.GTE: ">=",
    Operator.LT: "<",
    Operator.LTE: "<=",
    Operator.LIKE: "LIKE",
    Operator.ILIKE: "ILIKE",
}


@dataclass(frozen=True, slots=True)
class Condition:
    """A value paired with the operator used to compare against it."""

    value: Any
    operator: Operator = Operator.EQ

    @classmethod
    def coerce(cls, raw: "Condition | Mapping[str, Any]") -> "Condition":
        if isinstance(raw, Condition):
            return raw
        return cls(value=raw["value"], operator=Operator(raw.get("operator") or Operator.EQ))


@dataclass(slots=True)
class Clause:
    """A SQL fragment plus the values bound to its placeholders."""

    sql: str = ""
    params: list[Any] = field(default_factory=list)


def _wildcard(value: Any) -> str:
    return f"%{value}%"


def build_where(
    config: EntityConfig,
    criteria: Mapping[str, Any],
    *,
    text_fields: Iterable[str] = (),
    start: int = 1,
) -> Clause:
    """Build an ANDed equality clause, using ILIKE for string values of text fields."""
    text_fields = set(text_fields)
    conditions: list[str] = []
    params: list[Any] = []
    for key, value in criteria.items():
        column = config.check_column(key)
        placeholder = f"${start + len(params)}"
        if key in text_fields and isinstance(value, str):
            conditions.append(f"{column} ILIKE {placeholder}")
            params.append(_wildcard(value))
        else:
            conditions.append(f"{column} = {placeholder}")
            params.append(value)
    return Clause(" AND ".join(conditions), params)


def build_advanced_where(
    config: EntityConfig,
    criteria: Mapping[str, "Condition | Mapping[str, Any]"],
    *,
    logical_operator: str = "AND",
    start: int = 1,
) -> Clause:
    """Build a clause where every entry carries its own comparison operator."""
    joiner = logical_operator.upper()
    if joiner not in ("AND", "OR"):
        raise ValueError(f"Invalid logical operator: {logical_operator}")

    conditions: list[str] = []
    params: list[Any] = []
    for key, raw in criteria.items():
        column = config.check_column(key)
        condition = Condition.coerce(raw)
        placeholder = f"${start + len(params)}"
        if condition.operator is Operator.IN:
            if not isinstance(condition.value, (list, tuple, set, frozenset)):
                raise ValueError(f"IN condition on {key} needs a list of values")
            conditions.append(f"{column} = ANY({placeholder})")
            params.append(list(condition.value))
        elif condition.operator in (Operator.LIKE, Operator.ILIKE):
            conditions.append(f"{column} {_SQL_OPERATORS[condition.operator]} {placeholder}")
            params.append(_wildcard(condition.value))
        else:
            conditions.append(f"{column} {_SQL_OPERATORS[condition.operator]} {placeholder}")
            params.append(condition.value)
    return Clause(f" {joiner} ".join(conditions), params)


def build_insert(config: EntityConfig, payload: Mapping[str, Any]) -> Clause:
    """Build ``INSERT ... RETURNING *`` from the writable part of ``payload``."""
    data = config.writable(payload)
    if not data:
        return Clause(f"INSERT INTO {config.table_name} DEFAULT VALUES RETURNING *", [])
    columns = ", ".join(data)
    placeholders = ", ".join(f"${i}" for i in range(1, len(data) + 1))
    return Clause(
        f"INSERT INTO {config.table_name} ({columns}) VALUES ({placeholders}) RETURNING *",
        list(data.values()),
    )


def build_update(config: EntityConfig, entity_id: Any, patch: Mapping[str, Any]) -> Clause | None:
    """Build ``UPDATE ... RETURNING *`` with the id bound as ``$1``.

    Returns ``None`` when nothing writable remains in ``patch``.
    """
    data = config.writable(patch)
    if not data:
        return None
    assignments = [f"{column} = ${i}" for i, column in enumerate(data, start=2)]
    if config.updated_at_column:
        assignments.append(f"{config.updated_at_column} = NOW()")
    return Clause(
        f"UPDATE {config.table_name} SET {', '.join(assignments)} "
        f"WHERE {config.primary_key} = $1 RETURNING *",
        [entity_id, *data.values()],
    )


def build_order_by(config: EntityConfig, order_by: str | None, direction: str | None) -> str:
    """Return an ``ORDER BY`` suffix, or an empty string when no field is given."""
    if not order_by:
        return ""
    column = config.check_column(order_by)
    return f" ORDER BY {column} {EntityConfig.order_direction(direction)}"


def build_limit_offset(limit: int | None, offset: int | None, start: int) -> Clause:
    """Return optional ``LIMIT``/``OFFSET`` suffixes using the next free placeholders."""
    sql = ""
    params: list[Any] = []
    if limit is not None:
        params.append(limit)
        sql += f" LIMIT ${start + len(params) - 1}"
    if offset is not None:
        params.append(offset)
        sql += f" OFFSET ${start + len(params) - 1}"
    return Clause(sql, params)
