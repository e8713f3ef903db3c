"""Command-line entry point for prismic-reader."""

from __future__ import annotations

import logging
import sys

import click

from .commands import list_articles as list_cmd
from .commands import show_article as show_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH
from .core.errors import NotFound, PrismicReaderError
from .core.paths import ensure_data_dir

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.option(
    "--config",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="Path to config file (defaults to data_dir/config/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool) -> None:
    """prismic-reader - browse a Prismic blog from the terminal."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command("list")
@click.option("--pages", default=1, type=int, show_default=True, help="Number of pages to load")
@click.option("--all", "all_pages", is_flag=True, help="Load every page")
@click.option("--page-size", type=int, help="Items per page (overrides listing.page_size)")
@click.option("--preview-ref", help="Prismic preview ref; shows drafts as if published")
@click.pass_context
def list_articles(
    ctx: click.Context,
    pages: int,
    all_pages: bool,
    page_size: int | None,
    preview_ref: str | None,
) -> None:
    """List articles, newest first."""
    try:
        state = list_cmd.run(
            ctx.obj["config_path"],
            None if all_pages else pages,
            page_size=page_size,
            preview_ref=preview_ref,
        )
    except (PrismicReaderError, ValueError) as exc:
        click.echo(f"❌ Listing failed: {exc}", err=True)
        sys.exit(1)

    for item in state.items:
        click.echo(list_cmd.format_summary(item))
    if state.has_more:
        click.echo("… more posts available (use --pages or --all)")
    click.echo(f"✅ {len(state.items)} article(s) listed")


@cli.command("show")
@click.argument("uid")
@click.option("--preview-ref", help="Prismic preview ref; shows drafts as if published")
@click.pass_context
def show(ctx: click.Context, uid: str, preview_ref: str | None) -> None:
    """Show one article with reading time and previous/next links."""
    try:
        view = show_cmd.run(ctx.obj["config_path"], uid, preview_ref=preview_ref)
    except NotFound as exc:
        click.echo(f"❌ {exc}", err=True)
        sys.exit(1)
    except (PrismicReaderError, ValueError) as exc:
        click.echo(f"❌ Could not load article '{uid}': {exc}", err=True)
        sys.exit(1)

    for line in show_cmd.render_lines(view):
        click.echo(line)


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration status."""
    try:
        config_manager = ConfigManager(ctx.obj["config_path"])
        click.echo(f"📁 Data dir: {ensure_data_dir()}")
        click.echo(f"📄 Config file: {config_manager.config_path}")

        if config_manager.validate_config():
            click.echo("✅ Configuration is valid")
        else:
            click.echo("❌ Configuration validation failed")
            sys.exit(1)

        settings = config_manager.get_prismic_settings()
        click.echo(f"🌐 Endpoint: {settings['endpoint']}")
        click.echo(f"📚 Document type: {settings['document_type']}")
        click.echo(f"📑 Page size: {config_manager.get_page_size()}")
        click.echo(f"🔑 Access token: {'set' if settings.get('access_token') else 'not set'}")

    except (OSError, ValueError) as exc:
        click.echo(f"❌ Error checking status: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - script entry
    cli()
