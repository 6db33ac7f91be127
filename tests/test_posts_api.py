# ============================================================================
# FILE: tests/test_posts_api.py
# ============================================================================
import math
import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from social_api.services.post_service import PostService


@pytest.fixture()
def create_post(client, auth_headers):
    def _create(token, title="T", content="C"):
        return client.post("/posts", json={"title": title, "content": content}, headers=auth_headers(token))
    return _create


def test_create_post_sets_author(alice, create_post):
    response = create_post(alice["token"])

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "T"
    assert body["content"] == "C"
    assert body["authorId"] == alice["user"]["id"]
    assert {"id", "createdAt", "updatedAt"} <= set(body)


def test_create_post_requires_token(client):
    response = client.post("/posts", json={"title": "T", "content": "C"})

    assert response.status_code == 401
    assert response.json()["error"] == "Токен отсутствует"


@pytest.mark.parametrize("payload", [{"content": "C"}, {"title": "T"}, {"title": "", "content": "C"}])
def test_create_post_requires_title_and_content(client, alice, auth_headers, payload):
    response = client.post("/posts", json=payload, headers=auth_headers(alice["token"]))

    assert response.status_code == 400
    assert response.json()["error"] == "Заголовок и содержимое поста обязательны"


def test_create_post_rejects_long_title(alice, create_post):
    response = create_post(alice["token"], title="x" * 201)
    assert response.status_code == 400


def test_list_posts_paginates_newest_first(client, alice, create_post):
    titles = [f"Post {i}" for i in range(5)]
    for title in titles:
        assert create_post(alice["token"], title=title).status_code == 201
    newest_first = list(reversed(titles))
    limit = 2

    for page in (1, 2, 3):
        response = client.get("/posts", params={"page": page, "limit": limit})
        assert response.status_code == 200
        body = response.json()
        assert [post["title"] for post in body["data"]] == newest_first[(page - 1) * limit:page * limit]
        assert body["meta"] == {
            "total": 5,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(5 / limit),
        }


def test_list_posts_page_out_of_range_is_empty(client, alice, create_post):
    create_post(alice["token"])

    response = client.get("/posts", params={"page": 7, "limit": 10})

    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["meta"]["totalPages"] == 1


def test_list_posts_defaults_for_missing_or_bad_params(client):
    for params in ({}, {"page": "abc", "limit": "xyz"}, {"page": "0", "limit": "-3"}):
        body = client.get("/posts", params=params).json()
        assert body["data"] == []
        assert body["meta"] == {"total": 0, "page": 1, "limit": 20, "totalPages": 0}


def test_get_post_by_id(client, alice, create_post):
    post_id = create_post(alice["token"], title="Find me").json()["id"]

    response = client.get(f"/posts/{post_id}")

    assert response.status_code == 200
    assert response.json()["id"] == post_id
    assert response.json()["title"] == "Find me"


def test_get_missing_post(client):
    response = client.get(f"/posts/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"] == "Пост не найден"


def test_author_updates_post(client, alice, create_post, auth_headers):
    post_id = create_post(alice["token"]).json()["id"]

    response = client.put(
        f"/posts/{post_id}",
        json={"title": "New title", "content": "New content"},
        headers=auth_headers(alice["token"]),
    )

    assert response.status_code == 200
    assert response.json()["title"] == "New title"
    assert response.json()["content"] == "New content"


def test_update_with_empty_values_keeps_fields(client, alice, create_post, auth_headers):
    post_id = create_post(alice["token"], title="Keep", content="Original").json()["id"]

    response = client.put(
        f"/posts/{post_id}",
        json={"title": "", "content": "Changed"},
        headers=auth_headers(alice["token"]),
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Keep"
    assert response.json()["content"] == "Changed"


def test_other_user_cannot_update_or_delete(client, alice, bob, create_post, auth_headers):
    post_id = create_post(alice["token"]).json()["id"]

    update = client.put(f"/posts/{post_id}", json={"title": "Hacked"}, headers=auth_headers(bob["token"]))
    delete = client.delete(f"/posts/{post_id}", headers=auth_headers(bob["token"]))

    assert update.status_code == 403
    assert delete.status_code == 403
    assert update.json()["error"] == "Доступ запрещен"
    assert client.get(f"/posts/{post_id}").json()["title"] == "T"


def test_mutations_require_valid_token(client, alice, create_post):
    post_id = create_post(alice["token"]).json()["id"]

    assert client.put(f"/posts/{post_id}", json={"title": "X"}).status_code == 401
    assert client.delete(f"/posts/{post_id}").status_code == 401
    bad = {"Authorization": "Bearer broken.token.value"}
    assert client.put(f"/posts/{post_id}", json={"title": "X"}, headers=bad).status_code == 401
    assert client.delete(f"/posts/{post_id}", headers=bad).status_code == 401


def test_missing_post_is_404_for_any_caller(client, alice, bob, auth_headers):
    missing = uuid.uuid4()
    for user in (alice, bob):
        headers = auth_headers(user["token"])
        assert client.put(f"/posts/{missing}", json={"title": "X"}, headers=headers).status_code == 404
        assert client.delete(f"/posts/{missing}", headers=headers).status_code == 404


def test_author_deletes_post(client, alice, create_post, auth_headers):
    post_id = create_post(alice["token"]).json()["id"]

    response = client.delete(f"/posts/{post_id}", headers=auth_headers(alice["token"]))

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/posts/{post_id}").status_code == 404


def test_alice_and_bob_scenario(client, register, login, auth_headers):
    register("alice", email="alice@x.com", password="secret1")
    alice_login = login("alice", password="secret1").json()
    created = client.post(
        "/posts",
        json={"title": "T", "content": "C"},
        headers=auth_headers(alice_login["token"]),
    )
    assert created.status_code == 201
    assert created.json()["authorId"] == alice_login["user"]["id"]

    register("bob", password="secret2")
    bob_login = login("bob", password="secret2").json()
    response = client.put(
        f"/posts/{created.json()['id']}",
        json={"title": "Mine now"},
        headers=auth_headers(bob_login["token"]),
    )
    assert response.status_code == 403


@pytest.mark.parametrize(
    "params",
    [
        {"page": "1000000000000000000", "limit": "20"},
        {"page": "1", "limit": "100000000000000000000"},
        {"page": "99999999999999999999999", "limit": "99999999999999999999999"},
    ],
)
def test_list_posts_with_huge_page_or_limit(client, alice, create_post, params):
    create_post(alice["token"])

    response = client.get("/posts", params=params)

    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["total"] == 1
    if body["meta"]["page"] == 1:
        assert len(body["data"]) == 1
    else:
        assert body["data"] == []


def test_update_missing_post_with_long_title_is_404(client, alice, auth_headers):
    response = client.put(
        f"/posts/{uuid.uuid4()}",
        json={"title": "x" * 201},
        headers=auth_headers(alice["token"]),
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Пост не найден"


def test_update_own_post_with_long_title_is_400(client, alice, create_post, auth_headers):
    post_id = create_post(alice["token"]).json()["id"]

    response = client.put(
        f"/posts/{post_id}",
        json={"title": "x" * 201},
        headers=auth_headers(alice["token"]),
    )

    assert response.status_code == 400
    assert client.get(f"/posts/{post_id}").json()["title"] == "T"


def test_store_failure_returns_generic_500(client, monkeypatch):
    def broken_list_page(self, page, limit):
        raise SQLAlchemyError("connection refused by db-host:3306")

    monkeypatch.setattr(PostService, "list_page", broken_list_page)

    response = client.get("/posts")

    assert response.status_code == 500
    assert response.json() == {"error": "Внутренняя ошибка сервера"}
