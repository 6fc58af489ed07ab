"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from kubeblinkt import __version__

from .commands import config, test, watch

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".kubeblinkt" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Pick the log file for the given flags."""
    if log_file:
        return log_file
    if debug:
        # Debug mode: log to current directory
        return Path.cwd() / "kubeblinkt-debug.log"
    return LOG_DIR / "kubeblinkt.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Log records go to a rotating file and to stderr (stdout carries the
    --echo output).

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    # Determine log level based on flags
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if provided
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger = logging.getLogger()
    # Drop handlers from an earlier invocation in the same process
    for handler in list(root_logger.handlers):
        if getattr(handler, "kubeblinkt", False):
            root_logger.removeHandler(handler)
            handler.close()
    for handler in (file_handler, stream_handler):
        handler.kubeblinkt = True
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.version_option(version=__version__, prog_name="kubeblinkt")
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./kubeblinkt-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.pass_context
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    kubeblinkt - show Kubernetes pods or nodes on a Blinkt! LED strip.

    Each tracked resource gets one of the eight pixels, in arrival order.
    New resources flash green, changed ones blue and removed ones red.

    \b
    Examples:
      # Show pods labelled blinkt=show
      kubectl get pods -l blinkt=show --watch --output-watch-events -o json \\
        | kubeblinkt watch -

    \b
      # Show nodes
      kubectl get nodes --watch --output-watch-events -o json \\
        | kubeblinkt watch --kind-label Node -

    \b
      # Replay a recorded stream without hardware
      kubeblinkt -v watch --dry-run events.json

    \b
      # Check the strip
      kubeblinkt test
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(watch)
cli.add_command(test)
cli.add_command(config)

if __name__ == "__main__":
    cli()
