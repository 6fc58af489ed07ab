"""Test command: light each pixel in turn."""

import logging
import time
from typing import Optional

import click

from kubeblinkt.cli.output import show_error
from kubeblinkt.devices import OFF
from kubeblinkt.exceptions import KubeBlinktError
from kubeblinkt.models import ControllerConfig

from .watch import create_display

logger = logging.getLogger(__name__)

# Colors cycled along the strip
TEST_COLORS = ["FF0000", "00FF00", "0000FF", "FFFFFF"]


def run_pixel_test(display, brightness: float, delay: float, final_color: str) -> int:
    """
    Light every pixel on its own, then run the shutdown sequence.

    Returns:
        Number of pixels tested
    """
    pixel_count = getattr(display, "pixel_count", 8)
    for index in range(pixel_count):
        color = TEST_COLORS[index % len(TEST_COLORS)]
        for other in range(pixel_count):
            display.set(other, OFF, 0.0)
        display.set(index, color, brightness)
        display.show()
        click.echo(f"[OK] Pixel {index}: {color}")
        time.sleep(delay)

    display.cleanup(final_color, brightness)
    return pixel_count


@click.command()
@click.option(
    "--brightness", "-b",
    type=click.FloatRange(0.0, 1.0),
    envvar="BRIGHTNESS",
    default=None,
    help="Pixel brightness 0.0-1.0 [env: BRIGHTNESS]"
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=0.3,
    show_default=True,
    help="Seconds each pixel stays lit"
)
@click.option("--dry-run", is_flag=True, help="Log frames instead of driving the LEDs")
@click.pass_context
def test(ctx, brightness: Optional[float], delay: float, dry_run: bool):
    """
    Check the strip by lighting each pixel in turn.

    \b
    Examples:
      kubeblinkt test
      kubeblinkt test --brightness 0.5 --delay 1
    """
    log_path = (ctx.obj or {}).get("log_path")

    try:
        config = ControllerConfig().with_overrides(brightness=brightness)
        display = create_display(dry_run)
        click.echo(f"Testing strip at brightness {config.brightness}")
        count = run_pixel_test(display, config.brightness, delay, config.final_color)
    except KubeBlinktError as e:
        logger.error(f"Strip test failed: {e}")
        show_error(e, log_path)
        ctx.exit(1)

    click.echo(f"\n[OK] {count} pixel(s) tested")
