"""Partial Update Builder — declarative SET-clause selection for PATCH-like writes.

Invariants:
    - `required` fields are always written, even when falsy
    - `optional` fields are written only when supplied (not None, not empty string)
    - Output is a single parameterized UPDATE; no string concatenation of SQL
    - An empty WHERE is refused: every partial update is scoped

Design Decisions:
    - Returns a SQLAlchemy Update rather than executing it: pure function, the
      route owns the session and the single execute() call
    - 0 is a supplied value (age=0 is written), unlike a truthiness check
"""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Update, update
from sqlalchemy.sql.expression import ColumnElement


def is_supplied(value: Any) -> bool:
    """A form/body value counts as supplied unless absent or blank."""
    if value is None:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def select_values(
    required: Mapping[str, Any], optional: Mapping[str, Any],
) -> dict[str, Any]:
    """Merge required values with the optional values that were supplied."""
    values = dict(required)
    values.update({k: v for k, v in optional.items() if is_supplied(v)})
    return values


def build_partial_update(
    model: Any,
    *criteria: ColumnElement[bool],
    required: Mapping[str, Any] | None = None,
    optional: Mapping[str, Any] | None = None,
) -> Update:
    """Build `UPDATE model SET <required + supplied optional> WHERE <criteria>`."""
    if not criteria:
        raise ValueError("partial update requires at least one WHERE criterion")
    values = select_values(required or {}, optional or {})
    if not values:
        raise ValueError("partial update has no values to set")
    return update(model).where(*criteria).values(**values)
