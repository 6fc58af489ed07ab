"""Render pass: registry state to LED strip calls."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from kubeblinkt.devices.protocols import OFF, DisplayAdapter
from kubeblinkt.exceptions import DisplayError, wrap_display_error
from kubeblinkt.models import ControllerConfig, ResourceState
from kubeblinkt.protocols import ResourceEvent

from .registry import ResourceRegistry

logger = logging.getLogger(__name__)


@dataclass
class RenderReport:
    """What a render pass did, in sweep order."""

    events: list[tuple[ResourceEvent, str]] = field(default_factory=list)
    flashes: int = 0

    def record(self, event: ResourceEvent, name: str) -> None:
        self.events.append((event, name))

    def names(self, event: ResourceEvent) -> list[str]:
        """Names recorded for one event type."""
        return [name for recorded, name in self.events if recorded is event]

    @property
    def changed(self) -> bool:
        return bool(self.events)


class Reconciler:
    """
    Translates the registry into one strip frame.

    A pass is a single left-to-right sweep where the registry position is
    also the pixel index while it is below capacity:

    - added/updated: flash the transition color, then set the resource color
    - deleted: flash the removal color, remove the entry, then look at the
      same position again (the next entry has shifted into it)
    - unchanged: set the resource color again; an entry that just moved into
      the visible window is flashed first like a new one

    Pixels left over after the sweep are switched off and the frame is shown.
    Entries past capacity get no hardware calls.

    Display failures are not retried. They propagate as DisplayError.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        display: DisplayAdapter,
        config: ControllerConfig,
    ):
        """
        Initialize the reconciler.

        Args:
            registry: Resource registry to render
            display: Strip to draw on
            config: Brightness, transition colors, flash timing and eviction age
        """
        self.registry = registry
        self.display = display
        self.config = config

    def render(self) -> RenderReport:
        """
        Run one render pass.

        Returns:
            RenderReport describing the resources added, updated, deleted or evicted

        Raises:
            DisplayError: If the strip cannot be written
        """
        report = RenderReport()
        capacity = self.config.capacity
        brightness = self.config.brightness

        evicted: set[str] = set()
        if self.config.eviction_age is not None:
            evicted.update(self.registry.mark_stale(self.config.eviction_age))
            for name in evicted:
                logger.info(f"{name} not seen for {self.config.eviction_age:.0f}s, evicting")

        i = 0
        while i < len(self.registry):
            resource = self.registry.entry_at(i)
            visible = i < capacity

            if resource.state is ResourceState.DELETED:
                if visible:
                    self._flash(report, i, self.config.removed_color)
                self.registry.remove_at(i)
                event = ResourceEvent.EVICTED if resource.name in evicted else ResourceEvent.DELETED
                report.record(event, resource.name)
                # Position i now holds the next entry
                continue

            if resource.needs_transition:
                if visible:
                    self._flash(report, i, self._transition_color(resource.state))
                    self._set(i, resource.color, brightness)
                    resource.displayed = True
                report.record(
                    ResourceEvent.ADDED
                    if resource.state is ResourceState.ADDED
                    else ResourceEvent.UPDATED,
                    resource.name,
                )
                resource.state = ResourceState.UNCHANGED
            elif visible:
                if not resource.displayed:
                    # Promoted into the window by a removal earlier in the list
                    self._flash(report, i, self.config.added_color)
                    resource.displayed = True
                self._set(i, resource.color, brightness)

            i += 1

        for index in range(min(len(self.registry), capacity), capacity):
            self._set(index, OFF, 0.0)

        self._call("show", self.display.show)

        logger.debug(
            f"Rendered {len(self.registry)} resource(s), "
            f"{min(len(self.registry), capacity)} visible, {report.flashes} flash(es)"
        )
        return report

    def _transition_color(self, state: ResourceState) -> str:
        if state is ResourceState.ADDED:
            return self.config.added_color
        return self.config.updated_color

    def _flash(self, report: RenderReport, index: int, color: str) -> None:
        self._call(
            "flash",
            self.display.flash,
            index,
            color,
            self.config.brightness,
            self.config.flash_count,
            self.config.flash_interval,
        )
        report.flashes += 1

    def _set(self, index: int, color: str, brightness: float) -> None:
        self._call("set", self.display.set, index, color, brightness)

    def _call(self, operation: str, fn: Callable, *args) -> None:
        try:
            fn(*args)
        except DisplayError:
            raise
        except Exception as e:
            raise wrap_display_error(e, operation) from e
