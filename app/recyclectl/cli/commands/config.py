"""Config command implementation.

Shows and initializes the recyclectl configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer

from recyclectl.cli.types import get_settings
from recyclectl.core.config import ConfigError, Settings, render_settings, save_settings
from recyclectl.core.paths import get_config_path
from recyclectl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    """Return the config path given with --config, or the default one."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    path = obj.get("config_path")
    return path if isinstance(path, Path) else get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as TOML."""
    path = _config_path(ctx)
    source = str(path) if path.exists() else f"defaults ({path} does not exist)"
    print_info(f"# Source: {source}")
    console.print(render_settings(get_settings(ctx)), markup=False, highlight=False)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Write a configuration file with default values."""
    path = _config_path(ctx)

    if path.exists() and not force:
        print_error(f"Config file already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(Settings(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default configuration to {saved}")
