"""Main CLI application entry point.

Defines the Typer application, its global options and the command set.
"""

from pathlib import Path
from typing import Annotated

import typer

from recyclectl import __version__
from recyclectl.cli.commands import config, delete, list_cmd, purge, restore, search, shred, trash
from recyclectl.core.config import ConfigError, load_settings
from recyclectl.core.logging_setup import setup_logging
from recyclectl.utils.formatting import print_error

app = typer.Typer(
    name="recyclectl",
    help="Trash, restore, purge, delete and shred files from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"recyclectl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
        ),
    ] = None,
    recurse: Annotated[
        bool,
        typer.Option("--recurse", "-r", help="Recurse into directories without asking."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-item results and debug logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print errors."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            dir_okay=False,
            help="Use this config file instead of ~/.config/recyclectl/config.toml.",
        ),
    ] = None,
) -> None:
    """recyclectl - a safer rm with a recycle bin and secure shredding.

    Move files to the trash and get them back by name, or delete and
    shred them for good.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    ctx.ensure_object(dict)
    ctx.obj.update(
        verbose=verbose,
        quiet=quiet,
        recurse=recurse,
        config_path=config_path,
        settings=settings,
    )


# Unnamed groups contribute their commands to the top level
for module in (trash, restore, purge, delete, shred, list_cmd, search):
    app.add_typer(module.app)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
