"""Error output shared by the CLI commands."""

from pathlib import Path
from typing import Optional

import click

from kubeblinkt.exceptions import format_error_for_display


def show_error(error: Exception, log_path: Optional[Path]) -> None:
    """Print a clean error message with its recovery hint, without a traceback."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    click.echo("For logging options, run: kubeblinkt --help", err=True)
