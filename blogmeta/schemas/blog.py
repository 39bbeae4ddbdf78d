from typing import List, Optional

from pydantic import BaseModel, Field


class CoverView(BaseModel):
    image: str
    alt: str = ""
    caption: str = ""


class TocEntry(BaseModel):
    id: str
    name: str
    level: int
    children: List["TocEntry"] = Field(default_factory=list)


class Breadcrumb(BaseModel):
    name: str
    url: str


class NavLink(BaseModel):
    slug: str
    title: str


class DisplayOptions(BaseModel):
    hideMeta: bool = False
    comments: bool = False
    showReadingTime: bool = False
    showWordCount: bool = False
    showBreadCrumbs: bool = False
    showPostNavLinks: bool = False
    showRssButtonInSectionTermList: bool = False
    showShareButtons: bool = False
    showCodeCopyButtons: bool = False
    showToc: bool = False
    tocOpen: bool = False


class PostSummary(BaseModel):
    slug: str
    url: str
    title: str
    date: str
    description: Optional[str] = None
    author: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    cover: Optional[CoverView] = None
    draft: bool = False


class PostDetail(PostSummary):
    content: str
    html: str
    byline: Optional[str] = None
    readingTime: Optional[str] = None
    wordCount: Optional[int] = None
    toc: List[TocEntry] = Field(default_factory=list)
    tocHtml: Optional[str] = None
    tocOpen: bool = False
    breadcrumbs: List[Breadcrumb] = Field(default_factory=list)
    prev: Optional[NavLink] = None
    next: Optional[NavLink] = None
    canonicalUrl: Optional[str] = None
    display: DisplayOptions = Field(default_factory=DisplayOptions)


class TagSummary(BaseModel):
    slug: str
    name: str
    count: int


class TagListing(TagSummary):
    posts: List[PostSummary] = Field(default_factory=list)


class ContentError(BaseModel):
    source: str
    problems: List[str]


class ContentWarning(BaseModel):
    slug: str
    message: str


class ContentReport(BaseModel):
    posts: int = 0
    errors: List[ContentError] = Field(default_factory=list)
    warnings: List[ContentWarning] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
