import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from blogmeta.dependencies import get_posts_repo, get_posts_service, get_settings
from blogmeta.log import configure_logging
from blogmeta.routers import posts, tags
from blogmeta.security import get_api_key
from blogmeta.settings import settings

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    current_settings = get_settings()
    service = get_posts_service(
        repo=get_posts_repo(current_settings), current_settings=current_settings
    )
    report = service.check()
    logger.info(
        f"Loaded {report.posts} posts from {current_settings.posts_dir} "
        f"({len(report.errors)} errors, {len(report.warnings)} warnings)"
    )
    for error in report.errors:
        logger.error(f"{error.source}: {'; '.join(error.problems)}")
    yield


app = FastAPI(
    title="blogmeta API",
    description="Front-matter records for the blog's posts",
    lifespan=lifespan,
)

app.include_router(posts.router, dependencies=[Depends(get_api_key)])
app.include_router(tags.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "blogmeta API is running"}
