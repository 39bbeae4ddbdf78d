from fastapi import Depends

from blogmeta.repos.posts_repo import FilePostsRepo
from blogmeta.services.posts_service import PostsService
from blogmeta.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilePostsRepo(current_settings.posts_dir)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(repo=repo, config=current_settings)
