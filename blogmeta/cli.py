"""Build-time commands: pre-rendering, sitemap generation and output audit."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from blogmeta.config import Settings, configure_logging, load_settings
from blogmeta.errors import RemoteStoreUnavailable, TemplateMissing
from blogmeta.services.audit import audit_tree
from blogmeta.services.content_store import ContentStoreClient
from blogmeta.services.prerender import StaticPageMaterializer
from blogmeta.services.sitemap import SitemapBuilder

logger = logging.getLogger(__name__)


def _fail(message: str, exc: Exception) -> None:
    logger.error("%s: %s", message, exc)
    click.echo(f"{message}: {exc}", err=True)
    sys.exit(1)


def _run_prerender(settings: Settings, dist_dir: Path, template: Optional[Path]) -> int:
    materializer = StaticPageMaterializer(
        ContentStoreClient(settings.content_store),
        base_url=settings.base_url,
        dist_dir=dist_dir,
        template_path=template,
        facebook_app_id=settings.facebook_app_id,
    )
    try:
        written = asyncio.run(materializer.write_all())
    except TemplateMissing as exc:
        _fail("Pre-rendering aborted", exc)
    except RemoteStoreUnavailable as exc:
        _fail("Pre-rendering failed", exc)
    click.echo(f"Generated {len(written)} HTML files in {dist_dir}")
    return len(written)


def _run_sitemap(settings: Settings, output: Path) -> None:
    builder = SitemapBuilder(
        ContentStoreClient(settings.content_store),
        base_url=settings.base_url,
        output_path=output,
    )
    try:
        path = asyncio.run(builder.write())
    except RemoteStoreUnavailable as exc:
        _fail("Sitemap generation failed", exc)
    click.echo(f"Sitemap written to {path}")


@click.group()
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help="Path to a .env file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, env_file: Optional[str], verbose: bool) -> None:
    configure_logging("DEBUG" if verbose else "INFO")
    ctx.obj = load_settings(env_file)


@cli.command()
@click.option("--dist", "dist_dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--template", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Base HTML document (defaults to <dist>/index.html).")
@click.pass_obj
def prerender(settings: Settings, dist_dir: Optional[Path], template: Optional[Path]) -> None:
    """Write one HTML page per route with metadata baked in."""
    _run_prerender(settings, dist_dir or Path(settings.dist_dir), template)


@cli.command()
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def sitemap(settings: Settings, output: Optional[Path]) -> None:
    """Write sitemap.xml for the home page, the about page and all posts."""
    _run_sitemap(settings, output or Path(settings.sitemap_path))


@cli.command()
@click.option("--dist", "dist_dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--sitemap-output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def build(settings: Settings, dist_dir: Optional[Path], sitemap_output: Optional[Path]) -> None:
    """Generate the sitemap, then pre-render every page."""
    _run_sitemap(settings, sitemap_output or Path(settings.sitemap_path))
    _run_prerender(settings, dist_dir or Path(settings.dist_dir), None)


@cli.command()
@click.option("--dist", "dist_dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.pass_obj
def verify(settings: Settings, dist_dir: Optional[Path]) -> None:
    """Check every pre-rendered page for missing or malformed meta tags."""
    dist_dir = dist_dir or Path(settings.dist_dir)
    failures = audit_tree(dist_dir)
    for path, problems in failures.items():
        click.echo(f"{path}: {'; '.join(problems)}")
    if failures:
        click.echo(f"{len(failures)} page(s) failed verification", err=True)
        sys.exit(1)
    click.echo(f"All pages in {dist_dir} passed verification")


if __name__ == "__main__":  # pragma: no cover
    cli()
