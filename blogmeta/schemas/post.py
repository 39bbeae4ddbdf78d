import datetime
import re
from typing import Any, List, Optional

from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
)

_EPOCH = re.compile(r"[+-]?\d+(?:\.\d*)?")


class Cover(BaseModel):
    """The hero image block of a post."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    image: str = ""
    alt: str = ""
    caption: str = ""
    relative: StrictBool = False
    hidden: StrictBool = False

    @field_validator("image", "alt", "caption", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def has_image(self) -> bool:
        return bool(self.image.strip())


class Post(BaseModel):
    """A post's front-matter plus its markdown body.

    Field aliases are the keys as they are spelled in the front-matter block,
    unknown keys are dropped.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    slug: str = ""
    title: str = Field(min_length=1)
    date: AwareDatetime
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    description: Optional[str] = None
    draft: StrictBool = False
    canonical_url: Optional[str] = Field(default=None, alias="canonicalURL")

    hide_meta: StrictBool = Field(default=False, alias="hidemeta")
    comments: StrictBool = False
    show_reading_time: StrictBool = Field(default=False, alias="ShowReadingTime")
    show_bread_crumbs: StrictBool = Field(default=False, alias="ShowBreadCrumbs")
    show_post_nav_links: StrictBool = Field(default=False, alias="ShowPostNavLinks")
    show_word_count: StrictBool = Field(default=False, alias="ShowWordCount")
    show_rss_button_in_section_term_list: StrictBool = Field(
        default=False, alias="ShowRssButtonInSectionTermList"
    )
    show_share_buttons: StrictBool = Field(default=False, alias="ShowShareButtons")
    show_code_copy_buttons: StrictBool = Field(
        default=False, alias="ShowCodeCopyButtons"
    )
    show_toc: StrictBool = Field(default=False, alias="showtoc")
    toc_open: StrictBool = Field(default=False, alias="tocopen")

    cover: Optional[Cover] = None
    body: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("author", "description", "canonical_url", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _require_offset(cls, value: Any) -> Any:
        if isinstance(value, datetime.datetime):
            if value.tzinfo is None:
                raise ValueError("date must include a timezone offset")
        elif isinstance(value, datetime.date):
            raise ValueError("date must be a timestamp with a timezone offset")
        elif isinstance(value, (int, float)) or (
            isinstance(value, str) and _EPOCH.fullmatch(value.strip())
        ):
            # pydantic would read a bare number as seconds since the epoch
            raise ValueError("date must be a timestamp with a timezone offset")
        return value

    @field_validator("tags", "categories", mode="before")
    @classmethod
    def _normalize_terms(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            return [
                str(item).strip()
                for item in value
                if item is not None and str(item).strip()
            ]
        return value

    @property
    def has_cover_image(self) -> bool:
        return self.cover is not None and self.cover.has_image
