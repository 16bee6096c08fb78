"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int; the caller id is never a bare int past the auth gate
    - Identity is immutable once decoded from a token

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Identity as frozen dataclass: passed explicitly into handlers, never stored on the request
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Authenticated Caller ────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Verified caller decoded from a bearer token."""
    id: UserId
    email: str

    def to_claims(self) -> dict:
        return {"id": int(self.id), "email": self.email}
