"""Posts & Shirts — owner-scoped CRUD and the public listing.

Invariants:
    - Create → 201 {postId}; list shows only the caller's posts
    - Update/delete of another user's post is a no-op (row unchanged)
    - Update without a new image keeps the old one
    - /shirts lists every user's posts without a token
"""

from sqlalchemy import select

from app.models.post import Post
from tests.api.helpers import bearer


async def _create(client, token, name="Tee", description="Cotton", files=None):
    res = await client.post(
        "/posts",
        data={"namepost": name, "description": description},
        files=files,
        headers=bearer(token),
    )
    assert res.status_code == 201, res.text
    return res.json()["postId"]


async def test_create_post_returns_post_id(client, alice_token):
    res = await client.post(
        "/posts",
        data={"namepost": "Tee", "description": "Cotton"},
        headers=bearer(alice_token),
    )
    assert res.status_code == 201
    assert isinstance(res.json()["postId"], int)


async def test_create_post_with_image(client, alice_token, upload_root):
    post_id = await _create(
        client, alice_token, files={"image": ("tee.jpg", b"jpeg", "image/jpeg")},
    )
    posts = (await client.get("/posts", headers=bearer(alice_token))).json()

    assert posts[0]["id"] == post_id
    assert posts[0]["image"].startswith("/uploads/")
    assert (upload_root / posts[0]["image"].rsplit("/", 1)[1]).exists()


async def test_create_post_missing_description_is_400(client, alice_token):
    res = await client.post(
        "/posts", data={"namepost": "Tee"}, headers=bearer(alice_token),
    )
    assert res.status_code == 400


async def test_list_posts_only_returns_own(client, alice_token, bob_token):
    await _create(client, alice_token, name="Alice tee")
    await _create(client, bob_token, name="Bob tee")

    posts = (await client.get("/posts", headers=bearer(alice_token))).json()

    assert [p["namepost"] for p in posts] == ["Alice tee"]


async def test_update_own_post(client, alice_token):
    post_id = await _create(client, alice_token)

    res = await client.put(
        f"/posts/{post_id}",
        data={"namepost": "New", "description": "Linen"},
        headers=bearer(alice_token),
    )

    assert res.status_code == 200
    post = (await client.get("/posts", headers=bearer(alice_token))).json()[0]
    assert (post["namepost"], post["description"]) == ("New", "Linen")


async def test_update_without_image_keeps_existing_image(client, alice_token):
    post_id = await _create(
        client, alice_token, files={"image": ("tee.jpg", b"jpeg", "image/jpeg")},
    )
    before = (await client.get("/posts", headers=bearer(alice_token))).json()[0]["image"]

    await client.put(
        f"/posts/{post_id}",
        data={"namepost": "New", "description": "Linen"},
        headers=bearer(alice_token),
    )

    after = (await client.get("/posts", headers=bearer(alice_token))).json()[0]["image"]
    assert after == before


async def test_update_other_users_post_has_no_effect(
    client, test_db, alice_token, bob_token,
):
    post_id = await _create(client, alice_token, name="Mine")

    res = await client.put(
        f"/posts/{post_id}",
        data={"namepost": "Hijacked", "description": "x"},
        headers=bearer(bob_token),
    )

    assert res.status_code == 200
    title = await test_db.scalar(select(Post.title).where(Post.id == post_id))
    assert title == "Mine"


async def test_update_missing_fields_is_400(client, alice_token):
    post_id = await _create(client, alice_token)
    res = await client.put(
        f"/posts/{post_id}", data={"namepost": "New"}, headers=bearer(alice_token),
    )
    assert res.status_code == 400


async def test_delete_own_post(client, test_db, alice_token):
    post_id = await _create(client, alice_token)

    res = await client.delete(f"/posts/{post_id}", headers=bearer(alice_token))

    assert res.status_code == 204
    assert await test_db.scalar(select(Post.id).where(Post.id == post_id)) is None


async def test_delete_other_users_post_has_no_effect(
    client, test_db, alice_token, bob_token,
):
    post_id = await _create(client, alice_token)

    res = await client.delete(f"/posts/{post_id}", headers=bearer(bob_token))

    assert res.status_code == 204
    assert await test_db.scalar(select(Post.id).where(Post.id == post_id)) == post_id


async def test_shirts_lists_everyone_without_token(client, alice_token, bob_token):
    await _create(client, alice_token, name="Alice tee")
    await _create(client, bob_token, name="Bob tee")

    res = await client.get("/shirts")

    assert res.status_code == 200
    assert sorted(p["namepost"] for p in res.json()) == ["Alice tee", "Bob tee"]
    assert set(res.json()[0]) == {"id", "namepost", "description", "image", "user_id"}
