"""Partial Update Builder — only supplied optional fields become SET clauses.

Invariants:
    - None and "" are "not supplied"; 0 and False are supplied
    - required fields always present
    - WHERE criteria mandatory
"""

import pytest

from app.core.partial_update import build_partial_update, is_supplied, select_values
from app.models.user import User


@pytest.mark.parametrize("value,expected", [
    (None, False),
    ("", False),
    ("0812345678", True),
    (0, True),
    (False, True),
    (" ", True),
])
def test_is_supplied(value, expected):
    assert is_supplied(value) is expected


def test_select_values_drops_unsupplied_optionals():
    values = select_values(
        {"name": "A", "email": "a@x.com"},
        {"number": None, "age": 0, "gender": "", "picture": "/uploads/x.png"},
    )
    assert values == {
        "name": "A", "email": "a@x.com", "age": 0, "picture": "/uploads/x.png",
    }


def test_required_values_written_even_when_blank():
    assert select_values({"description": ""}, {}) == {"description": ""}


def test_build_partial_update_sets_only_supplied_columns():
    stmt = build_partial_update(
        User, User.id == 5,
        required={"name": "A", "email": "a@x.com"},
        optional={"number": None, "age": 30},
    )
    compiled = stmt.compile()
    sql = str(compiled)

    assert sql.startswith("UPDATE users SET")
    assert "number" not in sql
    assert "age" in sql
    assert "WHERE users.id" in sql
    assert compiled.params["name"] == "A"
    assert compiled.params["age"] == 30


def test_build_partial_update_keeps_all_criteria():
    stmt = build_partial_update(
        User, User.id == 5, User.email == "a@x.com", required={"name": "A"},
    )
    sql = str(stmt.compile())
    assert "users.id" in sql and "users.email" in sql.split("WHERE", 1)[1]


def test_build_partial_update_requires_criteria():
    with pytest.raises(ValueError):
        build_partial_update(User, required={"name": "A"})


def test_build_partial_update_requires_values():
    with pytest.raises(ValueError):
        build_partial_update(User, User.id == 1, optional={"number": None})
