import textwrap

import pytest

from blogmeta.settings import Settings


def post_text(raw: str) -> str:
    return textwrap.dedent(raw).lstrip()


class FakeRepo:
    """
    Minimal in-memory stand-in for FilePostsRepo, keyed by slug.
    """

    def __init__(self, texts: dict[str, str]):
        self.docs = [
            {"path": f"posts/{slug}.md", "slug": slug, "text": post_text(text)}
            for slug, text in texts.items()
        ]

    def list_blog_docs(self):
        return list(self.docs)

    def get_blog_doc(self, slug):
        for doc in self.docs:
            if doc["slug"] == slug:
                return doc
        return None


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        list_tags_return=None,
        posts_for_tag_return=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._list_tags_return = list_tags_return or []
        self._posts_for_tag_return = posts_for_tag_return
        self.calls = []

    def list_posts(self):
        return self._list_posts_return

    def get_post(self, slug: str):
        self.calls.append(slug)
        return self._get_post_return

    def list_tags(self):
        return self._list_tags_return

    def posts_for_tag(self, tag: str):
        self.calls.append(tag)
        return self._posts_for_tag_return


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        CONTENT_DIR=str(tmp_path / "content"),
        POSTS_SECTION="posts",
        BASE_URL="https://blog.example.com",
        BLOG_API_KEY="secret",
    )


@pytest.fixture
def write_post(test_settings):
    """Write a post file under the test content directory."""

    def _write(relative: str, raw: str):
        path = test_settings.posts_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(post_text(raw), encoding="utf-8")
        return path

    return _write
