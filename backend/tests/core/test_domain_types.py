"""Domain Types — verifies identity wrappers and the Identity value object.

Tests:
    - UserId is a transparent int
    - Identity is immutable and serializes to token claims
"""

import dataclasses

import pytest

from app.core.domain_types import Identity, UserId


def test_user_id_wraps_int():
    assert UserId(7) == 7


def test_identity_is_frozen():
    identity = Identity(id=UserId(1), email="a@x.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.email = "b@x.com"


def test_identity_to_claims():
    assert Identity(id=UserId(3), email="a@x.com").to_claims() == {
        "id": 3, "email": "a@x.com",
    }
