"""diffgate CLI - diff coverage and diff quality gates."""

import click

from diffgate import __version__
from diffgate.cli.cover import cover_command
from diffgate.cli.quality import quality_command
from diffgate.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="diffgate")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """diffgate - fail CI only when new code is untested or breaks lint rules."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(cover_command, name="cover")
cli.add_command(quality_command, name="quality")


def diff_cover() -> None:
    """diff-cover entry point: `diffgate cover` as its own command."""
    cover_command(obj={})


def diff_quality() -> None:
    """diff-quality entry point: `diffgate quality` as its own command."""
    quality_command(obj={})


if __name__ == "__main__":
    cli()
