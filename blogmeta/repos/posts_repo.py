import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

SECTION_INDEX = "_index.md"
BUNDLE_INDEX = "index.md"


class FilePostsRepo:
    """Reads post documents from a content section directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def list_blog_docs(self) -> List[dict]:
        if not self.root.is_dir():
            logger.warning(f"Posts directory {self.root} does not exist")
            return []

        docs = []
        for path in sorted(self.root.rglob("*.md")):
            if path.name == SECTION_INDEX or not path.is_file():
                continue
            docs.append(self._read(path))
        return docs

    def get_blog_doc(self, slug: str) -> Optional[dict]:
        for candidate in (
            self.root / f"{slug}.md",
            self.root / slug / BUNDLE_INDEX,
        ):
            if self._is_inside(candidate) and candidate.is_file():
                return self._read(candidate)
        return None

    def slug_for(self, path: Path) -> str:
        relative = path.relative_to(self.root)
        if relative.name == BUNDLE_INDEX and len(relative.parts) > 1:
            relative = relative.parent
        else:
            relative = relative.with_suffix("")
        return relative.as_posix()

    def _read(self, path: Path) -> dict:
        raw = path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            # left as bytes so the parser reports it against this post
            logger.warning(f"{path} is not valid UTF-8")
            text = raw
        return {
            "path": path.as_posix(),
            "slug": self.slug_for(path),
            "text": text,
        }

    def _is_inside(self, path: Path) -> bool:
        try:
            path.resolve().relative_to(self.root.resolve())
        except ValueError:
            return False
        return True
