"""Config commands: inspect and create the configuration file."""

from pathlib import Path
from typing import Optional

import click

from kubeblinkt.cli.output import show_error
from kubeblinkt.exceptions import KubeBlinktError
from kubeblinkt.model_manager import PydanticPersistence
from kubeblinkt.models import ControllerConfig
from kubeblinkt.models.config import DEFAULT_CONFIG_PATH

config_path_option = click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.kubeblinkt/config.json)"
)


@click.group(name="config")
def config():
    """Show or create the kubeblinkt configuration."""


@config.command()
@config_path_option
@click.option("--brightness", type=float, envvar="BRIGHTNESS", default=None, hidden=True)
@click.option("--resync-period", envvar="RESYNC_PERIOD", default=None, hidden=True)
@click.pass_context
def show(ctx, config_path: Optional[Path], brightness: Optional[float], resync_period: Optional[str]):
    """
    Print the effective configuration as JSON.

    File values are shown with BRIGHTNESS and RESYNC_PERIOD applied.
    """
    try:
        effective = ControllerConfig.load_or_default(config_path).with_overrides(
            brightness=brightness,
            resync_period=resync_period,
        )
    except KubeBlinktError as e:
        show_error(e, (ctx.obj or {}).get("log_path"))
        ctx.exit(1)

    click.echo(effective.model_dump_json(indent=2))


@config.command()
@config_path_option
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init(ctx, config_path: Optional[Path], force: bool):
    """Write the default configuration file."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists() and not force:
        click.echo(f"[FAIL] {path} already exists (use --force to overwrite)", err=True)
        ctx.exit(1)

    try:
        PydanticPersistence.save_json(ControllerConfig(), path)
    except OSError as e:
        show_error(e, (ctx.obj or {}).get("log_path"))
        ctx.exit(1)

    click.echo(f"[OK] Wrote default configuration to {path}")
