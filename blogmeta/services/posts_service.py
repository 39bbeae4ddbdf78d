import datetime
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from blogmeta.exceptions import ParseError, PostNotFound
from blogmeta.schemas.blog import (
    Breadcrumb,
    ContentError,
    ContentReport,
    ContentWarning,
    CoverView,
    DisplayOptions,
    NavLink,
    PostDetail,
    PostSummary,
    TagListing,
    TagSummary,
)
from blogmeta.schemas.post import Post
from blogmeta.services.content_checks import check_post, tag_slug
from blogmeta.services.frontmatter_parser import parse_post
from blogmeta.services.markdown_renderer import (
    calculate_reading_time,
    count_words,
    render_markdown,
    render_toc_html,
)
from blogmeta.settings import Settings, settings

logger = logging.getLogger(__name__)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class PostsService:
    def __init__(
        self,
        repo,
        config: Optional[Settings] = None,
        clock: Callable[[], datetime.datetime] = _utcnow,
    ):
        self.repo = repo
        self.config = config or settings
        self.clock = clock

    def load_posts(self) -> Tuple[List[Post], List[ParseError]]:
        """Parse every post document, collecting the ones that fail."""
        loaded, errors = self._load()
        return [post for _source, post in loaded], errors

    def load_post(self, slug: str) -> Post:
        doc = self.repo.get_blog_doc(slug)
        if doc is not None:
            post = parse_post(doc["text"], slug=doc["slug"], source=doc["path"])
            if post.slug == slug:
                return post
        # the slug may have been overridden in the front-matter
        posts, _errors = self.load_posts()
        for post in posts:
            if post.slug == slug:
                return post
        raise PostNotFound(slug)

    def list_posts(self) -> List[PostSummary]:
        return [self._summary(post) for post in self._published()]

    def get_post(self, slug: str) -> Optional[PostDetail]:
        posts = self._published()
        for index, post in enumerate(posts):
            if post.slug == slug:
                newer = posts[index - 1] if index > 0 else None
                older = posts[index + 1] if index + 1 < len(posts) else None
                return self._detail(post, newer, older)
        return None

    def list_tags(self) -> List[TagSummary]:
        names: Dict[str, str] = {}
        counts: Dict[str, int] = {}
        for post in self._published():
            seen = set()
            for tag in post.tags:
                key = tag_slug(tag)
                if key in seen:
                    continue
                seen.add(key)
                names.setdefault(key, tag)
                counts[key] = counts.get(key, 0) + 1

        return sorted(
            (
                TagSummary(slug=key, name=names[key], count=counts[key])
                for key in names
            ),
            key=lambda t: (t.name.casefold(), t.slug),
        )

    def posts_for_tag(self, tag: str) -> Optional[TagListing]:
        key = tag_slug(tag)
        tagged = []
        name = None
        for post in self._published():
            for candidate in post.tags:
                if tag_slug(candidate) == key:
                    name = name or candidate
                    tagged.append(post)
                    break

        if not tagged:
            return None
        return TagListing(
            slug=key,
            name=name,
            count=len(tagged),
            posts=[self._summary(post) for post in tagged],
        )

    def check(self) -> ContentReport:
        """Validate every post, drafts included, for a build step."""
        loaded, errors = self._load()
        report = ContentReport(
            posts=len(loaded),
            errors=[ContentError(source=e.source, problems=e.problems) for e in errors],
        )

        seen: Dict[str, str] = {}
        for source, post in loaded:
            if post.slug in seen:
                report.errors.append(
                    ContentError(
                        source=source,
                        problems=[f"slug {post.slug!r} already used by {seen[post.slug]}"],
                    )
                )
            else:
                seen[post.slug] = source

            for message in check_post(post):
                report.warnings.append(ContentWarning(slug=post.slug, message=message))

        return report

    def _load(self) -> Tuple[List[Tuple[str, Post]], List[ParseError]]:
        loaded = []
        errors = []
        for doc in self.repo.list_blog_docs():
            try:
                post = parse_post(doc["text"], slug=doc["slug"], source=doc["path"])
            except ParseError as e:
                logger.warning(f"Failed to parse post {doc['path']}: {e}")
                errors.append(e)
                continue
            loaded.append((doc["path"], post))
        return loaded, errors

    def _published(self) -> List[Post]:
        posts, _errors = self.load_posts()
        now = self.clock()
        visible = [
            post
            for post in posts
            if (self.config.INCLUDE_DRAFTS or not post.draft)
            and (self.config.INCLUDE_FUTURE or post.date <= now)
        ]
        return sort_posts(visible)

    def _post_url(self, post: Post) -> str:
        return f"{self.config.posts_url}/{post.slug}/"

    def _summary(self, post: Post) -> PostSummary:
        return PostSummary(**self._summary_fields(post))

    def _summary_fields(self, post: Post) -> dict:
        cover = None
        if post.has_cover_image:
            cover = CoverView(
                image=resolve_cover_image(
                    post.cover.image,
                    post.cover.relative,
                    self._post_url(post),
                    self.config.BASE_URL,
                ),
                alt=post.cover.alt,
                caption=post.cover.caption,
            )
        return {
            "slug": post.slug,
            "url": self._post_url(post),
            "title": post.title,
            "date": post.date.isoformat(),
            "description": post.description,
            "author": post.author,
            "tags": list(post.tags),
            "categories": list(post.categories),
            "cover": cover,
            "draft": post.draft,
        }

    def _detail(
        self, post: Post, newer: Optional[Post], older: Optional[Post]
    ) -> PostDetail:
        fields = self._summary_fields(post)
        if post.cover is not None and post.cover.hidden:
            fields["cover"] = None

        rendered = render_markdown(post.body)
        reading_time = (
            calculate_reading_time(post.body, self.config.WORDS_PER_MINUTE)
            if post.show_reading_time
            else None
        )
        word_count = count_words(post.body) if post.show_word_count else None

        toc = rendered.toc if post.show_toc else []
        toc_open = post.show_toc and post.toc_open

        return PostDetail(
            **fields,
            content=post.body,
            html=rendered.html,
            byline=None if post.hide_meta else format_byline(post, reading_time, word_count),
            readingTime=reading_time,
            wordCount=word_count,
            toc=toc,
            tocHtml=render_toc_html(toc, open=toc_open) if post.show_toc else None,
            tocOpen=toc_open,
            breadcrumbs=self._breadcrumbs(post) if post.show_bread_crumbs else [],
            prev=_nav_link(newer) if post.show_post_nav_links else None,
            next=_nav_link(older) if post.show_post_nav_links else None,
            canonicalUrl=post.canonical_url,
            display=display_options(post),
        )

    def _breadcrumbs(self, post: Post) -> List[Breadcrumb]:
        base = self.config.BASE_URL.rstrip("/")
        crumbs = [
            Breadcrumb(name="Home", url=f"{base}/"),
            Breadcrumb(
                name=self.config.POSTS_SECTION.strip("/").title(),
                url=f"{self.config.posts_url}/",
            ),
        ]
        url = self.config.posts_url
        for part in post.slug.split("/")[:-1]:
            url = f"{url}/{part}"
            crumbs.append(Breadcrumb(name=part, url=f"{url}/"))
        return crumbs


def sort_posts(posts: List[Post]) -> List[Post]:
    """Newest first; posts sharing a date are ordered by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date, reverse=True)


def resolve_cover_image(
    image: str, relative: bool, post_url: str, base_url: str
) -> str:
    if re.match(r"^(?:[a-z][a-z0-9+.-]*:)?//", image, re.IGNORECASE):
        return image
    if relative:
        return f"{post_url.rstrip('/')}/{image.lstrip('/')}"
    return f"{base_url.rstrip('/')}/{image.lstrip('/')}"


def format_byline(
    post: Post, reading_time: Optional[str] = None, word_count: Optional[int] = None
) -> str:
    published = post.date
    parts = [f"{published:%B} {published.day}, {published.year}"]
    if reading_time:
        parts.append(reading_time)
    if word_count is not None:
        parts.append(f"{word_count} words")
    if post.author:
        parts.append(post.author)
    return " · ".join(parts)


def display_options(post: Post) -> DisplayOptions:
    return DisplayOptions(
        hideMeta=post.hide_meta,
        comments=post.comments,
        showReadingTime=post.show_reading_time,
        showWordCount=post.show_word_count,
        showBreadCrumbs=post.show_bread_crumbs,
        showPostNavLinks=post.show_post_nav_links,
        showRssButtonInSectionTermList=post.show_rss_button_in_section_term_list,
        showShareButtons=post.show_share_buttons,
        showCodeCopyButtons=post.show_code_copy_buttons,
        showToc=post.show_toc,
        tocOpen=post.show_toc and post.toc_open,
    )


def _nav_link(post: Optional[Post]) -> Optional[NavLink]:
    if post is None:
        return None
    return NavLink(slug=post.slug, title=post.title)
