from fastapi.testclient import TestClient

import blogmeta.main as main_module
from blogmeta.dependencies import get_settings
from blogmeta.main import app
from blogmeta.security import API_KEY_NAME

POST = """
---
title: {title}
date: {date}
tags: [python]
showtoc: true
tocopen: true
---
## Intro

Hello.
"""


def use_settings(monkeypatch, test_settings):
    monkeypatch.setattr(main_module, "get_settings", lambda: test_settings)
    app.dependency_overrides[get_settings] = lambda: test_settings


def test_root_endpoint_runs_lifespan(monkeypatch, test_settings, write_post, caplog):
    write_post("good.md", POST.format(title="Good", date="2024-01-01T00:00:00+00:00"))
    write_post("bad.md", "---\ntitle: Bad\n---\n")
    use_settings(monkeypatch, test_settings)

    try:
        with caplog.at_level("INFO"), TestClient(app) as client:
            res = client.get("/")
            assert res.status_code == 200
            assert res.json() == {"message": "blogmeta API is running"}
    finally:
        app.dependency_overrides.clear()

    assert "Loaded 1 posts" in caplog.text
    assert "bad.md" in caplog.text


def test_routes_enforce_api_key(monkeypatch, test_settings, write_post):
    write_post("good.md", POST.format(title="Good", date="2024-01-01T00:00:00+00:00"))
    use_settings(monkeypatch, test_settings)

    try:
        with TestClient(app) as client:
            assert client.get("/posts").status_code == 403
            assert client.get("/tags").status_code == 403

            res = client.get("/posts", headers={API_KEY_NAME: "secret"})
            assert res.status_code == 200
            assert [p["slug"] for p in res.json()] == ["good"]
    finally:
        app.dependency_overrides.clear()


def test_end_to_end_post_and_tag_listing(monkeypatch, test_settings, write_post):
    write_post("older.md", POST.format(title="Older", date="2023-01-01T00:00:00+00:00"))
    write_post(
        "newer/index.md", POST.format(title="Newer", date="2024-01-01T00:00:00+00:00")
    )
    use_settings(monkeypatch, test_settings)
    headers = {API_KEY_NAME: "secret"}

    try:
        with TestClient(app) as client:
            detail = client.get("/posts/newer", headers=headers).json()
            listing = client.get("/tags/python", headers=headers).json()
            missing = client.get("/posts/nope", headers=headers)
    finally:
        app.dependency_overrides.clear()

    assert detail["tocOpen"] is True
    assert "<details open>" in detail["tocHtml"]
    assert [p["slug"] for p in listing["posts"]] == ["newer", "older"]
    assert missing.status_code == 404


def test_tag_with_slash_and_undecodable_post(monkeypatch, test_settings, write_post):
    write_post(
        "pipelines.md",
        "---\ntitle: Pipelines\ndate: 2024-01-01T00:00:00+00:00\ntags: [CI/CD]\n---\n",
    )
    (test_settings.posts_dir / "bad.md").write_bytes(b"---\ntitle: Bad \xff\n---\n")
    use_settings(monkeypatch, test_settings)
    headers = {API_KEY_NAME: "secret"}

    try:
        with TestClient(app) as client:
            tags = client.get("/tags", headers=headers).json()
            listing = client.get("/tags/ci/cd", headers=headers)
            posts = client.get("/posts", headers=headers)
    finally:
        app.dependency_overrides.clear()

    assert [t["slug"] for t in tags] == ["ci/cd"]
    assert listing.status_code == 200
    assert [p["slug"] for p in listing.json()["posts"]] == ["pipelines"]
    assert posts.status_code == 200
    assert [p["slug"] for p in posts.json()] == ["pipelines"]
