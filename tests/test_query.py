"""Tests for SQL fragment builders and identifier validation."""

import pytest

from matcha.db.errors import InvalidIdentifierError
from matcha.db.query import (
    Condition,
    EntityConfig,
    Operator,
    build_advanced_where,
    build_insert,
    build_limit_offset,
    build_order_by,
    build_update,
    build_where,
    check_identifier,
)

PROFILES = EntityConfig(
    table_name="profiles",
    columns=frozenset({"id", "username", "bio", "age", "created_at", "updated_at"}),
    default_text_fields=frozenset({"username", "bio"}),
    default_order_by="created_at",
    default_order_direction="DESC",
)

SCHEMALESS = EntityConfig(table_name="events")


class TestIdentifiers:
    """Tests for identifier checks."""

    def test_plain_identifier_passes(self):
        assert check_identifier("user_hashtags") == "user_hashtags"

    @pytest.mark.parametrize("name", ["1abc", "name; DROP TABLE users", "a-b", "", "id)"])
    def test_unsafe_identifier_rejected(self, name):
        with pytest.raises(InvalidIdentifierError):
            check_identifier(name)

    def test_unknown_column_rejected_when_schema_declared(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            PROFILES.check_column("password")
        assert exc_info.value.table == "profiles"

    def test_schemaless_config_accepts_plain_identifiers(self):
        assert SCHEMALESS.check_column("anything_goes") == "anything_goes"
        with pytest.raises(InvalidIdentifierError):
            SCHEMALESS.check_column("x OR 1=1")

    def test_invalid_config_fails_at_construction(self):
        with pytest.raises(InvalidIdentifierError):
            EntityConfig(table_name="users", columns=frozenset({"id"}), default_order_by="age")

    def test_identifier_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            check_identifier("bad name")


class TestBuildWhere:
    """Tests for equality/ILIKE clauses."""

    def test_text_field_uses_ilike(self):
        clause = build_where(PROFILES, {"username": "ali", "age": 30}, text_fields=["username"])
        assert clause.sql == "username ILIKE $1 AND age = $2"
        assert clause.params == ["%ali%", 30]

    def test_non_string_value_on_text_field_uses_equality(self):
        clause = build_where(PROFILES, {"bio": None}, text_fields=["bio"])
        assert clause.sql == "bio = $1"

    def test_placeholders_start_at_offset(self):
        clause = build_where(PROFILES, {"age": 30}, start=3)
        assert clause.sql == "age = $3"

    def test_unknown_column_rejected(self):
        with pytest.raises(InvalidIdentifierError):
            build_where(PROFILES, {"email": "x"})


class TestBuildAdvancedWhere:
    """Tests for operator-bearing clauses."""

    def test_operators_and_or_joiner(self):
        clause = build_advanced_where(
            PROFILES,
            {
                "age": Condition(18, Operator.GTE),
                "username": {"value": "bo", "operator": "ilike"},
                "id": {"value": (1, 2), "operator": "in"},
            },
            logical_operator="or",
        )
        assert clause.sql == "age >= $1 OR username ILIKE $2 OR id = ANY($3)"
        assert clause.params == [18, "%bo%", [1, 2]]

    def test_missing_operator_defaults_to_equality(self):
        clause = build_advanced_where(PROFILES, {"age": {"value": 21}})
        assert clause.sql == "age = $1"

    def test_invalid_joiner_rejected(self):
        with pytest.raises(ValueError):
            build_advanced_where(PROFILES, {"age": {"value": 1}}, logical_operator="XOR")

    @pytest.mark.parametrize("value", ["bob", 7, None])
    def test_in_requires_a_collection(self, value):
        with pytest.raises(ValueError, match="IN condition on username"):
            build_advanced_where(PROFILES, {"username": Condition(value, Operator.IN)})

    def test_in_accepts_a_set(self):
        clause = build_advanced_where(PROFILES, {"age": {"value": {30}, "operator": "in"}})
        assert clause.sql == "age = ANY($1)"
        assert clause.params == [[30]]


class TestBuildInsertUpdate:
    """Tests for write statements."""

    def test_insert_skips_auto_managed_columns(self):
        clause = build_insert(PROFILES, {"id": 7, "created_at": "now", "username": "ann"})
        assert clause.sql == "INSERT INTO profiles (username) VALUES ($1) RETURNING *"
        assert clause.params == ["ann"]

    def test_insert_with_nothing_writable_uses_defaults(self):
        clause = build_insert(PROFILES, {"id": 7})
        assert clause.sql == "INSERT INTO profiles DEFAULT VALUES RETURNING *"

    def test_update_binds_id_first_and_refreshes_updated_at(self):
        clause = build_update(PROFILES, 5, {"bio": "hi", "age": 40, "updated_at": "x"})
        assert clause.sql == (
            "UPDATE profiles SET bio = $2, age = $3, updated_at = NOW() WHERE id = $1 RETURNING *"
        )
        assert clause.params == [5, "hi", 40]

    def test_update_without_updated_at_column(self):
        config = EntityConfig(table_name="tags", columns=frozenset({"id", "name"}), updated_at_column=None)
        clause = build_update(config, 1, {"name": "x"})
        assert "NOW()" not in clause.sql

    def test_update_with_nothing_writable_returns_none(self):
        assert build_update(PROFILES, 5, {"id": 9, "created_at": "x"}) is None


class TestOrderAndLimit:
    """Tests for ORDER BY and LIMIT/OFFSET suffixes."""

    def test_order_by(self):
        assert build_order_by(PROFILES, "age", "asc") == " ORDER BY age ASC"

    def test_no_order_field(self):
        assert build_order_by(PROFILES, None, "DESC") == ""

    def test_order_by_unknown_column_rejected(self):
        with pytest.raises(InvalidIdentifierError):
            build_order_by(PROFILES, "age; DELETE FROM profiles", "ASC")

    def test_invalid_direction_rejected(self):
        with pytest.raises(ValueError):
            build_order_by(PROFILES, "age", "sideways")

    def test_limit_offset_placeholders(self):
        clause = build_limit_offset(10, 20, start=3)
        assert clause.sql == " LIMIT $3 OFFSET $4"
        assert clause.params == [10, 20]

    def test_offset_only(self):
        clause = build_limit_offset(None, 5, start=1)
        assert clause.sql == " OFFSET $1"
