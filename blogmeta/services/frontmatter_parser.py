import logging
from typing import Any, Dict, List, Optional

import frontmatter
import yaml
from pydantic import ValidationError

from blogmeta.exceptions import ParseError
from blogmeta.schemas.post import Post

logger = logging.getLogger(__name__)

_yaml_handler = frontmatter.YAMLHandler()


def parse_post(text: str, slug: str = "", source: Optional[str] = None) -> Post:
    """Parse a front-matter document into a Post.

    The document must open with a ``---`` delimited YAML mapping. Anything
    wrong with the block, or with the values inside it, raises ParseError
    rather than falling back to defaults.
    """
    source = source or slug or "<string>"
    metadata, body = split_document(text, source)

    data: Dict[str, Any] = dict(metadata)
    data.pop("body", None)
    if not data.get("slug"):
        data["slug"] = slug
    data["body"] = body

    try:
        post = Post.model_validate(data)
    except ValidationError as e:
        raise ParseError(source, _format_validation_errors(e)) from e

    logger.debug(f"Parsed post {post.slug!r} from {source}")
    return post


def split_document(text: str, source: str = "<string>") -> tuple[dict, str]:
    """Separate the metadata mapping from the markdown body."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError:
            raise ParseError(source, ["file is not valid UTF-8"])
    text = text.lstrip("\ufeff").lstrip()

    if not _yaml_handler.detect(text):
        raise ParseError(source, ["no front-matter block at start of document"])

    try:
        raw_metadata, body = _yaml_handler.split(text)
    except ValueError:
        raise ParseError(source, ["unterminated front-matter block"])

    try:
        metadata = _yaml_handler.load(raw_metadata)
    except yaml.YAMLError as e:
        raise ParseError(source, [f"malformed front-matter: {e}"]) from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ParseError(
            source,
            [f"front-matter must be a mapping, not {type(metadata).__name__}"],
        )

    return metadata, body.strip()


def dump_post(post: Post) -> str:
    """Serialize a Post back into front-matter and body text."""
    metadata = post.model_dump(
        by_alias=True,
        exclude={"slug", "body"},
        exclude_defaults=True,
    )
    if post.slug:
        metadata["slug"] = post.slug

    document = frontmatter.Post(post.body, **metadata)
    return frontmatter.dumps(document, handler=_yaml_handler, sort_keys=False) + "\n"


def _format_validation_errors(error: ValidationError) -> List[str]:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "front-matter"
        problems.append(f"{location}: {item['msg']}")
    return problems
