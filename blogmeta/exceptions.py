from typing import Sequence


class BlogMetaError(Exception):
    """Base class for our exceptions so they can be caught collectively"""


class ParseError(BlogMetaError):
    """A post's front-matter is missing, malformed or fails validation."""

    def __init__(self, source: str, problems: Sequence[str]):
        self.source = source
        self.problems = list(problems)
        super().__init__(f"{source}: {'; '.join(self.problems)}")


class PostNotFound(BlogMetaError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(slug)
