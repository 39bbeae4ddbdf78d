from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from blogmeta import dependencies as deps
from blogmeta.routers import posts
from tests.conftest import FakePostsService


def make_app(fake_service: FakePostsService):
    app = FastAPI()
    app.dependency_overrides[deps.get_posts_service] = lambda: fake_service
    app.include_router(posts.router)
    return app


def summary(slug, title, date):
    return {
        "slug": slug,
        "url": f"https://blog.example.com/posts/{slug}/",
        "title": title,
        "date": date,
        "tags": [],
    }


def test_list_posts_returns_posts_in_service_order():
    fake_posts = [
        summary("second", "Second", "2024-02-01T00:00:00+00:00"),
        summary("first", "First", "2024-01-01T00:00:00+00:00"),
    ]
    client = TestClient(make_app(FakePostsService(list_posts_return=fake_posts)))

    res = client.get("/posts")

    assert res.status_code == 200
    body = res.json()
    assert [p["slug"] for p in body] == ["second", "first"]
    assert body[0]["cover"] is None


def test_get_post_returns_404_when_missing():
    client = TestClient(make_app(FakePostsService(get_post_return=None)))

    res = client.get("/posts/missing")

    assert res.status_code == 404
    assert res.json()["detail"] == "Post not found"


def test_get_post_success_with_nested_slug():
    service = FakePostsService(
        get_post_return={
            **summary("2024/hello", "Hello", "2024-01-01T00:00:00+00:00"),
            "content": "## Hi",
            "html": '<h2 id="hi">Hi</h2>',
            "toc": [{"id": "hi", "name": "Hi", "level": 2}],
            "tocOpen": True,
        }
    )
    client = TestClient(make_app(service))

    res = client.get("/posts/2024/hello")

    assert res.status_code == 200
    body = res.json()
    assert body["slug"] == "2024/hello"
    assert body["tocOpen"] is True
    assert body["toc"][0]["children"] == []
    assert service.calls == ["2024/hello"]


def test_list_posts_passes_through_http_exception():
    class BoomService(FakePostsService):
        def list_posts(self):
            raise HTTPException(status_code=418, detail="teapot")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts")

    assert res.status_code == 418
    assert res.json()["detail"] == "teapot"


def test_list_posts_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def list_posts(self):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve posts"


def test_get_post_returns_500_on_unexpected_error():
    class BoomService(FakePostsService):
        def get_post(self, slug: str):
            raise RuntimeError("boom")

    client = TestClient(make_app(BoomService()))

    res = client.get("/posts/any")

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to retrieve post"
