"""hookchain CLI entry point."""

from pathlib import Path

import click

from hookchain.config import Settings


@click.group()
@click.option(
    "--metadata-path",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Metadata directory (defaults to $HOOKCHAIN_METADATA_PATH or ./metadata).",
)
@click.pass_context
def cli(ctx: click.Context, metadata_path: Path | None):
    """hookchain entity lifecycle hooks CLI."""
    settings = Settings.from_env()
    if metadata_path is not None:
        settings.metadata_path = metadata_path
    settings.configure_logging()
    ctx.obj = settings


# Register subcommands
from hookchain.cli.check_cmd import check  # noqa: E402
from hookchain.cli.metadata_cmd import metadata  # noqa: E402

cli.add_command(check)
cli.add_command(metadata)
