"""Tests for pet post endpoints."""

import asyncio
import logging
from io import BytesIO
from typing import Any, cast
from uuid import uuid4

import pytest
from httpx import AsyncClient
from PIL import Image
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Comment, Like, PetPost, SavedPost


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def make_user_payload(prefix: str) -> dict[str, str]:
    suffix = uuid4().hex[:8]
    return {
        "username": f"{prefix}_{suffix}",
        "email": f"{prefix}_{suffix}@example.com",
        "password": "Sup3rSecret!",
    }


def make_image_bytes(size: tuple[int, int] = (1200, 800)) -> bytes:
    image = Image.new("RGB", size, color=(0, 200, 100))
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def make_post_form(**overrides: str) -> dict[str, str]:
    form = {
        "title": "Rex",
        "description": "Good boy",
        "petType": "Dog",
        "breed": "Labrador Retriever",
    }
    form.update(overrides)
    return form


async def signup(async_client: AsyncClient, prefix: str) -> tuple[dict, dict[str, str]]:
    response = await async_client.post("/api/auth/signup", json=make_user_payload(prefix))
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


async def create_post(
    async_client: AsyncClient,
    headers: dict[str, str],
    **overrides: str,
) -> dict:
    response = await async_client.post(
        "/api/pet-posts", data=make_post_form(**overrides), headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_signup_then_create_post_populates_author(async_client: AsyncClient):
    signup_response = await async_client.post(
        "/api/auth/signup",
        json={"username": "alice", "email": "a@x.com", "password": "secret"},
    )
    assert signup_response.status_code == 201
    token = signup_response.json()["token"]

    response = await async_client.post(
        "/api/pet-posts",
        data={
            "title": "Rex",
            "description": "Good boy",
            "petType": "Dog",
            "breed": "Labrador Retriever",
        },
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 201
    created = response.json()
    assert created["title"] == "Rex"
    assert created["petType"] == "Dog"
    assert created["breed"] == "Labrador Retriever"
    assert created["author"] == {
        "id": signup_response.json()["user"]["id"],
        "username": "alice",
    }
    assert created["likes"] == []
    assert created["comments"] == []
    assert created["imageUrl"] is None
    assert created["createdAt"]
    assert created["updatedAt"]


@pytest.mark.asyncio
async def test_create_post_requires_authentication(async_client: AsyncClient):
    response = await async_client.post("/api/pet-posts", data=make_post_form())

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_create_post_rejects_missing_fields(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(breed="   "),
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please fill in all required fields."


@pytest.mark.asyncio
async def test_create_post_rejects_unknown_pet_type(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(petType="Hamster"),
        headers=headers,
    )

    assert response.status_code == 400
    assert "petType must be one of" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_post_rejects_too_long_title(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(title="x" * 201),
        headers=headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_post_with_image_uploads_normalized_jpeg(
    async_client: AsyncClient,
    blob_store,
):
    user, headers = await signup(async_client, "author")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("rex.png", make_image_bytes((3000, 1000)), "image/png")},
        headers=headers,
    )

    assert response.status_code == 201
    image_url = response.json()["imageUrl"]
    assert image_url.startswith(f"/uploads/posts/{user['id']}/")
    assert image_url.endswith(".jpg")

    object_key = image_url.removeprefix("/uploads/")
    assert blob_store.content_types[object_key] == "image/jpeg"
    with Image.open(BytesIO(blob_store.objects[object_key])) as stored:
        assert stored.format == "JPEG"
        assert max(stored.size) == 2048


@pytest.mark.asyncio
async def test_create_post_rejects_non_image_upload(
    async_client: AsyncClient,
    db_session: AsyncSession,
    blob_store,
):
    _, headers = await signup(async_client, "author")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("notes.txt", b"definitely not an image", "text/plain")},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed"
    assert blob_store.objects == {}
    count = await db_session.execute(select(func.count()).select_from(PetPost))
    assert count.scalar_one() == 0


@pytest.mark.asyncio
async def test_create_post_rejects_image_with_excessive_pixel_count(
    async_client: AsyncClient,
    db_session: AsyncSession,
    blob_store,
):
    _, headers = await signup(async_client, "author")
    buffer = BytesIO()
    Image.new("1", (20000, 10000)).save(buffer, format="PNG")

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("huge.png", buffer.getvalue(), "image/png")},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed"
    assert blob_store.objects == {}
    count = await db_session.execute(select(func.count()).select_from(PetPost))
    assert count.scalar_one() == 0


@pytest.mark.asyncio
async def test_create_post_rejects_oversized_image(
    async_client: AsyncClient,
    app,
    blob_store,
):
    _, headers = await signup(async_client, "author")
    app.state.upload_max_bytes = 1024

    response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("big.png", b"\x00" * 4096, "image/png")},
        headers=headers,
    )

    assert response.status_code == 413
    assert blob_store.objects == {}


@pytest.mark.asyncio
async def test_get_post_is_public_and_missing_post_is_404(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    response = await async_client.get(f"/api/pet-posts/{created['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    missing = await async_client.get("/api/pet-posts/999999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Post not found"


@pytest.mark.asyncio
async def test_list_posts_newest_first_with_pet_type_filter(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    dog = await create_post(async_client, headers, title="Rex")
    cat = await create_post(
        async_client, headers, title="Tom", petType="Cat", breed="Siamese"
    )
    bird = await create_post(
        async_client, headers, title="Tweety", petType="Bird", breed="Canary"
    )

    everything = await async_client.get("/api/pet-posts")
    assert everything.status_code == 200
    assert [post["id"] for post in everything.json()] == [bird["id"], cat["id"], dog["id"]]

    explicit_all = await async_client.get("/api/pet-posts", params={"petType": "all"})
    assert [post["id"] for post in explicit_all.json()] == [bird["id"], cat["id"], dog["id"]]

    cats = await async_client.get("/api/pet-posts", params={"petType": "Cat"})
    assert cats.status_code == 200
    assert [post["id"] for post in cats.json()] == [cat["id"]]
    assert all(post["petType"] == "Cat" for post in cats.json())

    unknown = await async_client.get("/api/pet-posts", params={"petType": "Fish"})
    assert unknown.status_code == 400


@pytest.mark.asyncio
async def test_pet_type_filter_ignores_case(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    await create_post(async_client, headers, title="Rex")
    cat = await create_post(async_client, headers, petType="cat", breed="Siamese")
    assert cat["petType"] == "Cat"

    response = await async_client.get("/api/pet-posts", params={"petType": "cAT"})

    assert response.status_code == 200
    assert [post["id"] for post in response.json()] == [cat["id"]]


@pytest.mark.asyncio
async def test_list_by_breed_matches_case_insensitively(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    lab = await create_post(async_client, headers, breed="Labrador Retriever")
    await create_post(async_client, headers, breed="Poodle")

    response = await async_client.get("/api/pet-posts/breed/labrador retriever")

    assert response.status_code == 200
    assert [post["id"] for post in response.json()] == [lab["id"]]


@pytest.mark.asyncio
async def test_suggested_breeds_catalog(async_client: AsyncClient):
    everything = await async_client.get("/api/pet-posts/breeds")
    assert everything.status_code == 200
    assert set(everything.json()) == {"Dog", "Cat", "Bird", "Other"}
    assert "Labrador Retriever" in everything.json()["Dog"]

    cats = await async_client.get("/api/pet-posts/breeds", params={"petType": "Cat"})
    assert list(cats.json()) == ["Cat"]

    unknown = await async_client.get("/api/pet-posts/breeds", params={"petType": "Fish"})
    assert unknown.status_code == 400


@pytest.mark.asyncio
async def test_list_by_author_requires_auth_and_filters(async_client: AsyncClient):
    alice, alice_headers = await signup(async_client, "alice")
    _, bob_headers = await signup(async_client, "bob")
    alice_post = await create_post(async_client, alice_headers)
    await create_post(async_client, bob_headers, title="Buddy")

    unauthenticated = await async_client.get(f"/api/pet-posts/user/{alice['id']}")
    assert unauthenticated.status_code == 401

    response = await async_client.get(
        f"/api/pet-posts/user/{alice['id']}", headers=bob_headers
    )
    assert response.status_code == 200
    assert [post["id"] for post in response.json()] == [alice_post["id"]]


@pytest.mark.asyncio
async def test_toggle_like_round_trip(async_client: AsyncClient):
    author, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    liked = await async_client.post(f"/api/pet-posts/{created['id']}/like", headers=headers)
    assert liked.status_code == 200
    assert liked.json()["likes"] == [author["id"]]

    unliked = await async_client.post(f"/api/pet-posts/{created['id']}/like", headers=headers)
    assert unliked.status_code == 200
    assert unliked.json()["likes"] == []


@pytest.mark.asyncio
async def test_toggle_like_missing_post_returns_404(async_client: AsyncClient):
    _, headers = await signup(async_client, "liker")

    response = await async_client.post("/api/pet-posts/424242/like", headers=headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_likes_from_different_users_are_both_recorded(
    async_client: AsyncClient,
    db_session: AsyncSession,
):
    _, author_headers = await signup(async_client, "author")
    created = await create_post(async_client, author_headers)
    likers = [await signup(async_client, f"liker{index}") for index in range(4)]

    responses = await asyncio.gather(
        *(
            async_client.post(f"/api/pet-posts/{created['id']}/like", headers=headers)
            for _, headers in likers
        )
    )

    assert all(response.status_code == 200 for response in responses)
    final = await async_client.get(f"/api/pet-posts/{created['id']}")
    assert sorted(final.json()["likes"]) == sorted(user["id"] for user, _ in likers)

    count = await db_session.execute(
        select(func.count()).select_from(Like).where(_eq(Like.post_id, created["id"]))
    )
    assert count.scalar_one() == len(likers)


@pytest.mark.asyncio
async def test_concurrent_likes_from_same_user_stay_deduplicated(
    async_client: AsyncClient,
):
    _, author_headers = await signup(async_client, "author")
    created = await create_post(async_client, author_headers)
    liker, liker_headers = await signup(async_client, "liker")

    responses = await asyncio.gather(
        *(
            async_client.post(f"/api/pet-posts/{created['id']}/like", headers=liker_headers)
            for _ in range(3)
        )
    )

    assert all(response.status_code == 200 for response in responses)
    final_likes = (await async_client.get(f"/api/pet-posts/{created['id']}")).json()["likes"]
    assert final_likes in ([], [liker["id"]])


@pytest.mark.asyncio
async def test_like_refreshes_updated_at(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    liked = await async_client.post(f"/api/pet-posts/{created['id']}/like", headers=headers)

    assert liked.json()["updatedAt"] >= created["updatedAt"]


@pytest.mark.asyncio
async def test_comments_are_appended_in_order_with_populated_author(
    async_client: AsyncClient,
):
    _, author_headers = await signup(async_client, "author")
    commenter, commenter_headers = await signup(async_client, "commenter")
    created = await create_post(async_client, author_headers)

    first = await async_client.post(
        f"/api/pet-posts/{created['id']}/comments",
        json={"text": "  What a good boy!  "},
        headers=commenter_headers,
    )
    assert first.status_code == 200
    second = await async_client.post(
        f"/api/pet-posts/{created['id']}/comments",
        json={"text": "Agreed"},
        headers=author_headers,
    )
    assert second.status_code == 200

    comments = second.json()["comments"]
    assert [comment["text"] for comment in comments] == ["What a good boy!", "Agreed"]
    assert comments[0]["author"] == {
        "id": commenter["id"],
        "username": commenter["username"],
    }
    assert comments[0]["createdAt"]
    assert first.json()["comments"][0] == comments[0]


@pytest.mark.asyncio
async def test_comment_validation(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    empty = await async_client.post(
        f"/api/pet-posts/{created['id']}/comments",
        json={"text": "   "},
        headers=headers,
    )
    assert empty.status_code == 400

    too_long = await async_client.post(
        f"/api/pet-posts/{created['id']}/comments",
        json={"text": "x" * 501},
        headers=headers,
    )
    assert too_long.status_code == 400

    missing_post = await async_client.post(
        "/api/pet-posts/999999/comments",
        json={"text": "hello"},
        headers=headers,
    )
    assert missing_post.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_comments_are_all_kept(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    responses = await asyncio.gather(
        *(
            async_client.post(
                f"/api/pet-posts/{created['id']}/comments",
                json={"text": f"comment {index}"},
                headers=headers,
            )
            for index in range(5)
        )
    )

    assert all(response.status_code == 200 for response in responses)
    final = (await async_client.get(f"/api/pet-posts/{created['id']}")).json()
    assert sorted(comment["text"] for comment in final["comments"]) == [
        f"comment {index}" for index in range(5)
    ]


@pytest.mark.asyncio
async def test_only_author_can_edit_post(async_client: AsyncClient):
    _, author_headers = await signup(async_client, "author")
    _, other_headers = await signup(async_client, "intruder")
    created = await create_post(async_client, author_headers)

    forbidden = await async_client.put(
        f"/api/pet-posts/{created['id']}",
        data={"title": "Hijacked"},
        headers=other_headers,
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"] == "Not authorized to modify this post"

    unchanged = await async_client.get(f"/api/pet-posts/{created['id']}")
    assert unchanged.json()["title"] == "Rex"


@pytest.mark.asyncio
async def test_edit_post_partial_update_keeps_other_fields(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)
    await async_client.post(f"/api/pet-posts/{created['id']}/like", headers=headers)

    response = await async_client.put(
        f"/api/pet-posts/{created['id']}",
        data={"title": "Rex the Brave", "breed": "  "},
        headers=headers,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Rex the Brave"
    assert updated["breed"] == "Labrador Retriever"
    assert updated["description"] == "Good boy"
    assert updated["petType"] == "Dog"
    assert updated["author"] == created["author"]
    assert len(updated["likes"]) == 1
    assert updated["updatedAt"] >= created["updatedAt"]


@pytest.mark.asyncio
async def test_edit_post_rejects_invalid_pet_type(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)

    response = await async_client.put(
        f"/api/pet-posts/{created['id']}",
        data={"petType": "Dragon"},
        headers=headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_edit_missing_post_returns_404(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")

    response = await async_client.put(
        "/api/pet-posts/999999", data={"title": "Nothing"}, headers=headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_edit_post_image_replaces_and_deletes_previous_blob(
    async_client: AsyncClient,
    blob_store,
):
    _, headers = await signup(async_client, "author")
    created_response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("rex.png", make_image_bytes(), "image/png")},
        headers=headers,
    )
    created = created_response.json()
    previous_key = created["imageUrl"].removeprefix("/uploads/")

    response = await async_client.put(
        f"/api/pet-posts/{created['id']}",
        files={"image": ("rex2.png", make_image_bytes((640, 480)), "image/png")},
        headers=headers,
    )

    assert response.status_code == 200
    new_url = response.json()["imageUrl"]
    assert new_url != created["imageUrl"]
    assert new_url.removeprefix("/uploads/") in blob_store.objects
    assert blob_store.deleted == [previous_key]
    assert previous_key not in blob_store.objects


@pytest.mark.asyncio
async def test_delete_post_by_author_cascades(
    async_client: AsyncClient,
    db_session: AsyncSession,
    blob_store,
):
    _, author_headers = await signup(async_client, "author")
    _, fan_headers = await signup(async_client, "fan")
    created_response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("rex.png", make_image_bytes(), "image/png")},
        headers=author_headers,
    )
    created = created_response.json()
    post_id = created["id"]
    await async_client.post(f"/api/pet-posts/{post_id}/like", headers=fan_headers)
    await async_client.post(
        f"/api/pet-posts/{post_id}/comments", json={"text": "Cute"}, headers=fan_headers
    )
    saved = await async_client.post(f"/api/pet-posts/{post_id}/save", headers=fan_headers)
    assert saved.json() == {"saved": True}

    response = await async_client.delete(f"/api/pet-posts/{post_id}", headers=author_headers)

    assert response.status_code == 200
    assert response.json() == {"detail": "Post deleted successfully"}
    assert (await async_client.get(f"/api/pet-posts/{post_id}")).status_code == 404
    assert blob_store.deleted == [created["imageUrl"].removeprefix("/uploads/")]

    for model in (Like, Comment, SavedPost):
        count = await db_session.execute(
            select(func.count()).select_from(model).where(_eq(model.post_id, post_id))
        )
        assert count.scalar_one() == 0

    me = await async_client.get("/api/auth/me", headers=fan_headers)
    assert me.json()["savedPosts"] == []
    fan_saved = await async_client.get("/api/pet-posts/saved", headers=fan_headers)
    assert fan_saved.json() == []


@pytest.mark.asyncio
async def test_forbidden_delete_leaves_post_retrievable(async_client: AsyncClient):
    _, author_headers = await signup(async_client, "author")
    _, other_headers = await signup(async_client, "intruder")
    created = await create_post(async_client, author_headers)

    response = await async_client.delete(
        f"/api/pet-posts/{created['id']}", headers=other_headers
    )

    assert response.status_code == 403
    still_there = await async_client.get(f"/api/pet-posts/{created['id']}")
    assert still_there.status_code == 200
    assert still_there.json()["title"] == created["title"]


@pytest.mark.asyncio
async def test_delete_missing_post_returns_404(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")

    response = await async_client.delete("/api/pet-posts/999999", headers=headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_succeeds_when_blob_cleanup_fails(
    async_client: AsyncClient,
    blob_store,
    caplog: pytest.LogCaptureFixture,
):
    _, headers = await signup(async_client, "author")
    created_response = await async_client.post(
        "/api/pet-posts",
        data=make_post_form(),
        files={"image": ("rex.png", make_image_bytes(), "image/png")},
        headers=headers,
    )
    post_id = created_response.json()["id"]
    blob_store.fail_deletes = True

    with caplog.at_level(logging.WARNING, logger="services.pet_posts"):
        response = await async_client.delete(f"/api/pet-posts/{post_id}", headers=headers)

    assert response.status_code == 200
    assert (await async_client.get(f"/api/pet-posts/{post_id}")).status_code == 404
    assert any(
        record.getMessage() == "Failed to delete post image" for record in caplog.records
    )


@pytest.mark.asyncio
async def test_toggle_save_round_trip_and_saved_listing(async_client: AsyncClient):
    _, author_headers = await signup(async_client, "author")
    _, reader_headers = await signup(async_client, "reader")
    first = await create_post(async_client, author_headers, title="First")
    second = await create_post(async_client, author_headers, title="Second")

    saved_second = await async_client.post(
        f"/api/pet-posts/{second['id']}/save", headers=reader_headers
    )
    saved_first = await async_client.post(
        f"/api/pet-posts/{first['id']}/save", headers=reader_headers
    )
    assert saved_second.json() == {"saved": True}
    assert saved_first.json() == {"saved": True}

    listing = await async_client.get("/api/pet-posts/saved", headers=reader_headers)
    assert listing.status_code == 200
    assert [post["id"] for post in listing.json()] == [second["id"], first["id"]]

    me = await async_client.get("/api/auth/me", headers=reader_headers)
    assert me.json()["savedPosts"] == [second["id"], first["id"]]

    toggled_off = await async_client.post(
        f"/api/pet-posts/{second['id']}/save", headers=reader_headers
    )
    assert toggled_off.json() == {"saved": False}
    listing = await async_client.get("/api/pet-posts/saved", headers=reader_headers)
    assert [post["id"] for post in listing.json()] == [first["id"]]


@pytest.mark.asyncio
async def test_toggle_save_missing_post_returns_404(async_client: AsyncClient):
    _, headers = await signup(async_client, "reader")

    response = await async_client.post("/api/pet-posts/999999/save", headers=headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_saves_by_same_user_stay_deduplicated(
    async_client: AsyncClient,
    db_session: AsyncSession,
):
    _, author_headers = await signup(async_client, "author")
    reader, reader_headers = await signup(async_client, "reader")
    created = await create_post(async_client, author_headers)

    responses = await asyncio.gather(
        *(
            async_client.post(f"/api/pet-posts/{created['id']}/save", headers=reader_headers)
            for _ in range(3)
        )
    )

    assert all(response.status_code == 200 for response in responses)
    count = await db_session.execute(
        select(func.count())
        .select_from(SavedPost)
        .where(_eq(SavedPost.user_id, reader["id"]))
    )
    assert count.scalar_one() in (0, 1)


@pytest.mark.asyncio
async def test_unsave_requires_saved_post(async_client: AsyncClient):
    _, author_headers = await signup(async_client, "author")
    _, reader_headers = await signup(async_client, "reader")
    created = await create_post(async_client, author_headers)

    not_saved = await async_client.delete(
        f"/api/pet-posts/unsave/{created['id']}", headers=reader_headers
    )
    assert not_saved.status_code == 404
    assert not_saved.json()["detail"] == "Post not found in saved list"

    await async_client.post(f"/api/pet-posts/{created['id']}/save", headers=reader_headers)
    unsaved = await async_client.delete(
        f"/api/pet-posts/unsave/{created['id']}", headers=reader_headers
    )
    assert unsaved.status_code == 200
    assert unsaved.json() == {"detail": "Post unsaved successfully"}

    again = await async_client.delete(
        f"/api/pet-posts/unsave/{created['id']}", headers=reader_headers
    )
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_interaction_endpoints_require_authentication(async_client: AsyncClient):
    _, headers = await signup(async_client, "author")
    created = await create_post(async_client, headers)
    post_id = created["id"]

    requests = [
        async_client.post(f"/api/pet-posts/{post_id}/like"),
        async_client.post(f"/api/pet-posts/{post_id}/comments", json={"text": "hi"}),
        async_client.post(f"/api/pet-posts/{post_id}/save"),
        async_client.delete(f"/api/pet-posts/unsave/{post_id}"),
        async_client.put(f"/api/pet-posts/{post_id}", data={"title": "x"}),
        async_client.delete(f"/api/pet-posts/{post_id}"),
        async_client.get("/api/pet-posts/saved"),
    ]
    for request in requests:
        response = await request
        assert response.status_code == 401
