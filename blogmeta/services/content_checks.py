import re
from typing import List

from blogmeta.schemas.post import Post


def tag_slug(tag: str) -> str:
    return re.sub(r"\s+", "-", tag.strip().lower())


def check_post(post: Post) -> List[str]:
    """
    Content-quality problems that should not stop a build, e.g. a cover image
    with no alt text.
    """
    warnings = []

    if post.has_cover_image and not post.cover.alt.strip():
        warnings.append(f"cover image {post.cover.image!r} has no alt text")

    if post.description is not None and not post.description.strip():
        warnings.append("description is empty")

    # same grouping as the tag index, so these would share one listing
    seen = set()
    for tag in post.tags:
        key = tag_slug(tag)
        if key in seen:
            warnings.append(f"duplicate tag {tag!r}")
        seen.add(key)

    return warnings
