import sys
from pathlib import Path
from typing import Optional

import click

from blogmeta.exceptions import ParseError, PostNotFound
from blogmeta.log import configure_logging
from blogmeta.repos.posts_repo import FilePostsRepo
from blogmeta.services.frontmatter_parser import dump_post
from blogmeta.services.posts_service import PostsService
from blogmeta.settings import settings


def _service(content_dir: Optional[Path]) -> PostsService:
    config = settings
    if content_dir is not None:
        config = settings.model_copy(update={"CONTENT_DIR": str(content_dir)})
    return PostsService(repo=FilePostsRepo(config.posts_dir), config=config)


content_dir_option = click.option(
    "-d",
    "--content-dir",
    default=None,
    help="Content directory (overrides CONTENT_DIR)",
    type=click.Path(file_okay=False, path_type=Path),
)


@click.group(help="Inspect and validate the blog's posts")
def cli() -> None:
    configure_logging(settings.LOG_LEVEL)


@cli.command(help="Validate every post's front-matter; exits 1 on errors")
@content_dir_option
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
def check(content_dir: Optional[Path], strict: bool) -> None:
    report = _service(content_dir).check()
    for error in report.errors:
        click.echo(f"error: {error.source}: {'; '.join(error.problems)}", err=True)
    for warning in report.warnings:
        click.echo(f"warning: {warning.slug}: {warning.message}", err=True)

    click.echo(
        f"{report.posts} posts, {len(report.errors)} errors, "
        f"{len(report.warnings)} warnings"
    )
    if not report.ok or (strict and report.warnings):
        sys.exit(1)


@cli.command("list", help="List published posts, newest first")
@content_dir_option
def list_posts(content_dir: Optional[Path]) -> None:
    for post in _service(content_dir).list_posts():
        click.echo(f"{post.date[:10]}  {post.slug}  {post.title}")


@cli.command(help="List tags and how many posts carry each")
@content_dir_option
def tags(content_dir: Optional[Path]) -> None:
    for tag in _service(content_dir).list_tags():
        click.echo(f"{tag.count:>4}  {tag.name}")


@cli.command(help="Print a post's normalised front-matter and body")
@content_dir_option
@click.argument("slug")
def show(content_dir: Optional[Path], slug: str) -> None:
    try:
        post = _service(content_dir).load_post(slug)
    except PostNotFound:
        raise click.ClickException(f"no post with slug {slug!r}")
    except ParseError as e:
        raise click.ClickException(str(e))
    click.echo(dump_post(post), nl=False)
