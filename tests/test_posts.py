import pytest
from datetime import datetime, timedelta, UTC
from blog.models.post import Post

@pytest.fixture
def tag_ids(authenticated_client):
    ids = []
    for name in ["python", "fastapi"]:
        response = authenticated_client.post("/api/tags", json={"name": name})
        ids.append(response.json()["id"])
    return ids

class TestPostCreation:
    def test_create_post(self, authenticated_client, test_post_data):
        """测试创建文章"""
        response = authenticated_client.post("/api/posts", json=test_post_data)
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == test_post_data["title"]
        assert data["body"] == test_post_data["body"]
        assert "id" in data
        assert "created_at" in data
        assert data["tag_ids"] == []
        assert data["comments_count"] == 0

        me = authenticated_client.get("/api/users/me").json()
        assert data["user_id"] == me["id"]

    def test_create_post_with_tags(self, authenticated_client, test_post_data, tag_ids):
        response = authenticated_client.post("/api/posts", json={**test_post_data, "tag_ids": tag_ids})
        assert response.status_code == 201
        assert sorted(response.json()["tag_ids"]) == sorted(tag_ids)

    def test_create_post_with_duplicate_tag_ids(self, authenticated_client, test_post_data, tag_ids):
        response = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": [tag_ids[0], tag_ids[0]]}
        )
        assert response.status_code == 201
        assert response.json()["tag_ids"] == [tag_ids[0]]

    def test_create_post_with_unknown_tag(self, authenticated_client, test_post_data):
        response = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": ["missing"]}
        )
        assert response.status_code == 404
        assert authenticated_client.get("/api/posts").json() == []

    def test_create_post_unauthorized(self, client, test_post_data):
        """测试未认证用户创建文章"""
        response = client.post("/api/posts", json=test_post_data)
        assert response.status_code == 401

    @pytest.mark.parametrize("field", ["title", "body"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_field_is_rejected(self, authenticated_client, test_post_data, field, value):
        """空白标题或正文返回 422 且不保存"""
        response = authenticated_client.post("/api/posts", json={**test_post_data, field: value})
        assert response.status_code == 422
        data = response.json()
        assert data["errors"] == {field: ["can't be blank"]}
        assert data["detail"] == f"Validation failed: {field.capitalize()} can't be blank"
        assert authenticated_client.get("/api/posts").json() == []

    def test_missing_field_is_rejected(self, authenticated_client):
        response = authenticated_client.post("/api/posts", json={"title": "Only a title"})
        assert response.status_code == 422

class TestPostRetrieval:
    def test_get_post(self, client, authenticated_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        response = client.get(f"/api/posts/{post_id}")
        assert response.status_code == 200
        assert response.json()["title"] == test_post_data["title"]

    def test_get_missing_post(self, client):
        response = client.get("/api/posts/nonexistent")
        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found"

    def test_list_posts(self, client, authenticated_client, other_client, test_post_data):
        """测试获取文章列表"""
        mine = authenticated_client.post("/api/posts", json=test_post_data).json()
        theirs = other_client.post("/api/posts", json={"title": "Other", "body": "Post"}).json()

        response = client.get("/api/posts")
        assert response.status_code == 200
        assert {p["id"] for p in response.json()} == {mine["id"], theirs["id"]}

        response = client.get("/api/posts", params={"user_id": theirs["user_id"]})
        assert [p["id"] for p in response.json()] == [theirs["id"]]

    def test_list_posts_newest_first(self, client, authenticated_client, session):
        """文章列表按创建时间倒序"""
        ids = [
            authenticated_client.post("/api/posts", json={"title": title, "body": "x"}).json()["id"]
            for title in ["first", "second", "third"]
        ]
        # push "second" back a day so the order differs from insertion order
        now = datetime.now(UTC)
        for post_id, age in zip(ids, [timedelta(hours=1), timedelta(days=1), timedelta(0)]):
            session.get(Post, post_id).created_at = now - age
        session.commit()

        response = client.get("/api/posts")
        assert [p["title"] for p in response.json()] == ["third", "first", "second"]

    def test_list_posts_by_tag(self, client, authenticated_client, test_post_data, tag_ids):
        tagged = authenticated_client.post("/api/posts", json={**test_post_data, "tag_ids": [tag_ids[0]]}).json()
        authenticated_client.post("/api/posts", json=test_post_data)

        response = client.get("/api/posts", params={"tag_id": tag_ids[0]})
        assert [p["id"] for p in response.json()] == [tagged["id"]]

        response = client.get("/api/posts", params={"tag_id": tag_ids[1]})
        assert response.json() == []

    def test_comments_count(self, client, authenticated_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        authenticated_client.post(f"/api/posts/{post_id}/comments", json={"body": "Nice"})
        assert client.get(f"/api/posts/{post_id}").json()["comments_count"] == 1

class TestPostSearch:
    def test_search(self, client, authenticated_client):
        authenticated_client.post("/api/posts", json={"title": "FastAPI tips", "body": "Dependencies"})
        authenticated_client.post("/api/posts", json={"title": "Gardening", "body": "Tomatoes"})

        response = client.get("/api/posts/search", params={"q": "fastapi"})
        assert response.status_code == 200
        assert [p["title"] for p in response.json()] == ["FastAPI tips"]

        response = client.get("/api/posts/search", params={"q": "tomatoes dependencies"})
        assert response.json() == []

    def test_search_sees_updates(self, client, authenticated_client):
        post_id = authenticated_client.post(
            "/api/posts", json={"title": "Original heading", "body": "Content"}
        ).json()["id"]
        authenticated_client.put(f"/api/posts/{post_id}", json={"title": "Renamed entry"})

        assert [p["id"] for p in client.get("/api/posts/search", params={"q": "renamed"}).json()] == [post_id]
        assert client.get("/api/posts/search", params={"q": "original"}).json() == []

    def test_search_requires_query(self, client):
        assert client.get("/api/posts/search").status_code == 422
        assert client.get("/api/posts/search", params={"q": ""}).status_code == 422

class TestPostUpdate:
    def test_update_post(self, authenticated_client, test_post_data, tag_ids):
        post_id = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": tag_ids}
        ).json()["id"]

        response = authenticated_client.put(f"/api/posts/{post_id}", json={
            "body": "Updated body",
            "tag_ids": [tag_ids[1]]
        })
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == test_post_data["title"]
        assert data["body"] == "Updated body"
        assert data["tag_ids"] == [tag_ids[1]]

    def test_update_without_tag_ids_keeps_tags(self, authenticated_client, test_post_data, tag_ids):
        post_id = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": tag_ids}
        ).json()["id"]
        response = authenticated_client.put(f"/api/posts/{post_id}", json={"title": "New"})
        assert sorted(response.json()["tag_ids"]) == sorted(tag_ids)

    def test_update_with_empty_tag_ids_clears_tags(self, authenticated_client, test_post_data, tag_ids):
        post_id = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": tag_ids}
        ).json()["id"]
        response = authenticated_client.put(f"/api/posts/{post_id}", json={"tag_ids": []})
        assert response.json()["tag_ids"] == []

    def test_update_to_blank_title(self, authenticated_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        response = authenticated_client.put(f"/api/posts/{post_id}", json={"title": " "})
        assert response.status_code == 422
        assert response.json()["errors"] == {"title": ["can't be blank"]}

        assert authenticated_client.get(f"/api/posts/{post_id}").json()["title"] == test_post_data["title"]

    def test_update_others_post(self, authenticated_client, other_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        response = other_client.put(f"/api/posts/{post_id}", json={"title": "Hijacked"})
        assert response.status_code == 403

    def test_update_missing_post(self, authenticated_client):
        response = authenticated_client.put("/api/posts/nonexistent", json={"title": "x"})
        assert response.status_code == 404

class TestPostDeletion:
    def test_delete_post(self, client, authenticated_client, test_post_data, tag_ids):
        post_id = authenticated_client.post(
            "/api/posts", json={**test_post_data, "tag_ids": tag_ids}
        ).json()["id"]

        response = authenticated_client.delete(f"/api/posts/{post_id}")
        assert response.status_code == 204
        assert client.get(f"/api/posts/{post_id}").status_code == 404
        assert client.get(f"/api/tags/{tag_ids[0]}/posts").json() == []
        assert client.get(f"/api/tags/{tag_ids[0]}").status_code == 200

    def test_delete_others_post(self, authenticated_client, other_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        assert other_client.delete(f"/api/posts/{post_id}").status_code == 403
        assert authenticated_client.get(f"/api/posts/{post_id}").status_code == 200

    def test_delete_unauthorized(self, client, authenticated_client, test_post_data):
        post_id = authenticated_client.post("/api/posts", json=test_post_data).json()["id"]
        assert client.delete(f"/api/posts/{post_id}").status_code == 401
