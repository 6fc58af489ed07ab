"""Watch command: mirror a watch event stream onto the strip."""

import logging
import signal
import threading
from pathlib import Path
from typing import Optional, TextIO

import click

from kubeblinkt.cli.output import show_error
from kubeblinkt.core import Controller
from kubeblinkt.exceptions import ErrorContext, KubeBlinktError
from kubeblinkt.models import Color, ControllerConfig
from kubeblinkt.protocols import ResourceEvent
from kubeblinkt.watch import JsonStreamSource, ObjectKind, WatchWorker

logger = logging.getLogger(__name__)


class EventEcho:
    """Observer printing one line per resource event to stdout."""

    SYMBOLS = {
        ResourceEvent.ADDED: "+",
        ResourceEvent.UPDATED: "~",
        ResourceEvent.DELETED: "-",
        ResourceEvent.EVICTED: "x",
    }

    def __init__(self, label: str):
        self.label = label

    def on_resource_event(self, event: ResourceEvent, name: str) -> None:
        click.echo(f"{self.SYMBOLS[event]} {self.label} {name} {event.value}")


def validate_hex(ctx, param, value: str) -> str:
    """Click callback accepting 6 hex digits."""
    try:
        return Color.from_hex(value).to_hex()
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def create_display(dry_run: bool):
    """Open the Blinkt! strip, or an in-memory strip that logs frames."""
    if dry_run:
        from kubeblinkt.devices import MemoryDisplay

        return MemoryDisplay(realtime=True)

    from kubeblinkt.devices import BlinktDisplay

    return BlinktDisplay()


@click.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--kind-label",
    default="Pod",
    show_default=True,
    help="Resource kind used in log and echo lines"
)
@click.option(
    "--color-label",
    default="blinktColor",
    show_default=True,
    help="Object label holding the pixel color"
)
@click.option(
    "--default-color",
    default="0000FF",
    show_default=True,
    callback=validate_hex,
    help="Color for objects without a color label"
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.kubeblinkt/config.json)"
)
@click.option(
    "--brightness", "-b",
    type=click.FloatRange(0.0, 1.0),
    envvar="BRIGHTNESS",
    default=None,
    help="Pixel brightness 0.0-1.0 [env: BRIGHTNESS]"
)
@click.option(
    "--resync-period",
    envvar="RESYNC_PERIOD",
    default=None,
    help=(
        "Evict entries not seen for 3 periods, e.g. 30s or 5m. Only use with a source "
        "that re-lists every object at least once per period [env: RESYNC_PERIOD]"
    )
)
@click.option("--dry-run", is_flag=True, help="Log frames instead of driving the LEDs")
@click.option("--exit-on-eof", is_flag=True, help="Exit when the source is exhausted")
@click.option("--echo", is_flag=True, help="Print one line per resource event")
@click.pass_context
def watch(
    ctx,
    source: TextIO,
    kind_label: str,
    color_label: str,
    default_color: str,
    config_path: Optional[Path],
    brightness: Optional[float],
    resync_period: Optional[str],
    dry_run: bool,
    exit_on_eof: bool,
    echo: bool,
):
    """
    Mirror watch events from SOURCE onto the strip.

    SOURCE is a file of concatenated JSON watch events, or - for stdin.
    Runs until interrupted (Ctrl+C / SIGTERM).

    \b
    Examples:
      kubectl get pods -l blinkt=show --watch --output-watch-events -o json \\
        | kubeblinkt watch -
      kubeblinkt watch --dry-run --exit-on-eof --echo recorded.json
    """
    log_path = (ctx.obj or {}).get("log_path")

    try:
        config = ControllerConfig.load_or_default(config_path).with_overrides(
            brightness=brightness,
            resync_period=resync_period,
        )
        display = create_display(dry_run)
    except KubeBlinktError as e:
        logger.error(f"Startup failed: {e}")
        show_error(e, log_path)
        ctx.exit(1)

    controller = Controller(display, config)
    kind = ObjectKind(kind_label, color_label=color_label, default_color=default_color)
    if echo:
        controller.register_observer(EventEcho(kind_label))

    stop_event = threading.Event()

    def on_worker_finished(worker: WatchWorker) -> None:
        if exit_on_eof or worker.error is not None:
            stop_event.set()

    def on_signal(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down")
        stop_event.set()

    previous_handlers = {
        signum: signal.signal(signum, on_signal)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }

    worker = WatchWorker(JsonStreamSource(source, getattr(source, "name", "<stream>")), controller, kind)
    worker.on_finished(on_worker_finished)

    failure: Optional[Exception] = None
    try:
        worker.start()
        # Without a resync period, wait() blocks until a stop is requested
        interval = config.resync_period.total_seconds() if config.resync_period else None
        while not stop_event.wait(interval):
            # Periodic pass so stale entries are evicted even when the stream is quiet
            controller.render()
    except KubeBlinktError as e:
        failure = e
        logger.error(f"Render failed: {e}")
    finally:
        worker.stop()
        with ErrorContext("clean up LED strip", logger, re_raise=False) as cleanup:
            controller.close()
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)

    failure = failure or worker.error or cleanup.error
    if failure is not None:
        show_error(failure, log_path)
        ctx.exit(1)

    logger.info(f"Handled {worker.events_handled} {kind_label} event(s)")
