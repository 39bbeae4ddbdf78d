import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from blogmeta import dependencies as deps
from blogmeta.schemas.blog import TagListing, TagSummary
from blogmeta.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tags", response_model=List[TagSummary])
def list_tags(service: PostsService = Depends(deps.get_posts_service)):
    """Get every tag with the number of posts carrying it."""
    try:
        return service.list_tags()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tags")


@router.get("/tags/{tag:path}", response_model=TagListing)
def get_tag(
    tag: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get the posts under a tag, newest first."""
    try:
        listing = service.posts_for_tag(tag.strip("/"))
        if not listing:
            raise HTTPException(status_code=404, detail="Tag not found")
        return listing
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving tag {tag}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tag")
