"""Shared helpers for route tests — account bootstrap and auth headers."""

from httpx import AsyncClient


async def register_and_login(
    client: AsyncClient, email: str, password: str = "p", name: str = "A", **extra,
) -> str:
    """Create an account through the API and return a bearer token."""
    res = await client.post(
        "/register",
        json={"email": email, "password": password, "name": name, **extra},
    )
    assert res.status_code == 201, res.text
    res = await client.post("/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
