"""overridekit CLI - ovk command."""

import click

from overridekit import __version__
from overridekit.cli.apply import apply_command
from overridekit.cli.check import check_command
from overridekit.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="ovk")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """overridekit - add missing overrides of pure virtual C++ methods."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(check_command, name="check")
cli.add_command(apply_command, name="apply")


if __name__ == "__main__":
    cli()
