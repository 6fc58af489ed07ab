"""Tests for the render pass."""

from datetime import timedelta
from unittest.mock import Mock

import pytest

from kubeblinkt.core import Reconciler
from kubeblinkt.devices import OFF, DisplayCall
from kubeblinkt.exceptions import DisplayError
from kubeblinkt.models import ControllerConfig, ResourceState
from kubeblinkt.protocols import ResourceEvent

from conftest import fill

ADDED = "00FF00"
UPDATED = "000B87"
REMOVED = "FF0000"


@pytest.fixture
def reconciler(registry, display, config):
    """Reconciler over the shared registry and display."""
    return Reconciler(registry, display, config)


@pytest.mark.unit
class TestRenderPass:
    """Test the single-sweep render pass."""

    def test_added_resource_flashes_then_sets(self, registry, display, reconciler):
        """Test the call sequence for one new resource."""
        registry.add("p1", "00FFFF")

        report = reconciler.render()

        assert display.calls == (
            [
                DisplayCall("flash", 0, ADDED, 0.2),
                DisplayCall("set", 0, "00FFFF", 0.2),
            ]
            + [DisplayCall("set", i, OFF, 0.0) for i in range(1, 8)]
            + [DisplayCall("show")]
        )
        assert report.events == [(ResourceEvent.ADDED, "p1")]
        assert registry.get("p1").state is ResourceState.UNCHANGED

    def test_updated_resource_flashes_update_color(self, registry, display, reconciler):
        """Test that a color change flashes the update color."""
        registry.add("p1", "00FFFF")
        reconciler.render()
        display.reset_calls()

        registry.update("p1", "FFFF00")
        report = reconciler.render()

        assert display.flashes() == [(0, UPDATED)]
        assert display.sets()[0] == (0, "FFFF00", 0.2)
        assert report.names(ResourceEvent.UPDATED) == ["p1"]

    def test_empty_registry_switches_everything_off(self, display, reconciler):
        """Test that an empty registry renders an all-off frame."""
        reconciler.render()

        assert display.sets() == [(i, OFF, 0.0) for i in range(8)]
        assert display.frames_shown == 1

    def test_uses_configured_brightness(self, registry, display):
        """Test that the set brightness comes from the config."""
        reconciler = Reconciler(registry, display, ControllerConfig(brightness=0.7))
        registry.add("p1", "00FFFF")

        reconciler.render()

        assert display.sets()[0] == (0, "00FFFF", 0.7)

    def test_uses_configured_flash_timing(self, registry, config):
        """Test that flashes receive the configured count and interval."""
        display = Mock()
        reconciler = Reconciler(registry, display, config)
        registry.add("p1", "00FFFF")

        reconciler.render()

        display.flash.assert_called_once_with(0, ADDED, 0.2, 2, 0.05)

    def test_idempotent_second_pass(self, controller, display):
        """Test that a pass with no mutation flashes nothing and repeats its sets."""
        fill(controller, 5)
        display.reset_calls()

        controller.render()
        first = display.sets()
        display.reset_calls()

        controller.render()

        assert display.flashes() == []
        assert display.sets() == first

    def test_capacity_limits_hardware_calls(self, controller, display):
        """Test that entries past the eighth are tracked but never drawn."""
        names = fill(controller, 11)

        indices = [call.index for call in display.calls if call.index is not None]
        assert max(indices) == 7
        assert controller.registry.names() == names
        assert [color for color, _ in display.frame] == ["0000FF"] * 8

    def test_invisible_entries_become_unchanged(self, controller):
        """Test that an entry added past capacity is not left pending."""
        fill(controller, 9)
        assert controller.registry.get("r8").state is ResourceState.UNCHANGED
        assert controller.registry.get("r8").displayed is False

    def test_partial_strip_clears_tail(self, controller, display):
        """Test that unused pixels are set off."""
        fill(controller, 3)
        display.reset_calls()

        controller.render()

        assert display.sets()[3:] == [(i, OFF, 0.0) for i in range(3, 8)]


@pytest.mark.unit
class TestDeletion:
    """Test removal, shifting and promotion."""

    def test_cascading_promotion(self, controller, display):
        """Test that deleting the first of nine entries promotes the ninth into view."""
        controller.add("A", "000001")
        for name in "BCDEFGH":
            controller.add(name, "0000FF")
        controller.add("I", "ABCDEF")
        display.reset_calls()

        controller.delete("A")

        flashes = [call for call in display.calls if call.op == "flash"]
        assert flashes == [
            DisplayCall("flash", 0, REMOVED, 0.2),
            DisplayCall("flash", 7, ADDED, 0.2),
        ]
        # I is set right after its flash
        position = display.calls.index(DisplayCall("flash", 7, ADDED, 0.2))
        assert display.calls[position + 1] == DisplayCall("set", 7, "ABCDEF", 0.2)
        assert controller.registry.names() == list("BCDEFGHI")

    def test_shift_and_clear(self, controller, display):
        """Test deleting from the middle of a full strip."""
        for i in range(8):
            controller.add(f"r{i}", f"00000{i}")
        display.reset_calls()

        controller.delete("r3")

        assert display.flashes() == [(3, REMOVED)]
        sets = display.sets()
        assert sets[3:7] == [(i - 1, f"00000{i}", 0.2) for i in range(4, 8)]
        assert sets[-1] == (7, OFF, 0.0)
        assert display.calls[-1] == DisplayCall("show")
        assert controller.registry.names() == ["r0", "r1", "r2", "r4", "r5", "r6", "r7"]

    def test_consecutive_deleted_entries(self, registry, display, reconciler):
        """Test that two adjacent deletions in one pass are both flashed."""
        for name in ("a", "b", "c"):
            registry.add(name, "0000FF")
        reconciler.render()
        display.reset_calls()

        registry.delete("a")
        registry.delete("b")
        report = reconciler.render()

        assert display.flashes() == [(0, REMOVED), (0, REMOVED)]
        assert registry.names() == ["c"]
        assert report.names(ResourceEvent.DELETED) == ["a", "b"]

    def test_invisible_deletion_has_no_hardware_flash(self, controller, display):
        """Test that deleting an entry past capacity only refreshes the frame."""
        fill(controller, 10)
        display.reset_calls()

        controller.delete("r9")

        assert display.flashes() == []
        assert "r9" not in controller.registry


@pytest.mark.unit
class TestEviction:
    """Test stale-entry eviction."""

    def test_disabled_without_resync_period(self, controller, display, clock):
        """Test that nothing is evicted when no resync period is set."""
        fill(controller, 2)
        clock.advance(10_000)

        controller.render()

        assert len(controller.registry) == 2

    def test_stale_entries_are_evicted(self, registry, display, clock):
        """Test that entries not seen for three periods are flashed out."""
        config = ControllerConfig(resync_period=timedelta(seconds=10))
        reconciler = Reconciler(registry, display, config)
        registry.add("old", "0000FF")
        reconciler.render()
        clock.advance(25)
        registry.add("new", "00FFFF")
        reconciler.render()
        display.reset_calls()

        clock.advance(10)  # old: 35s, new: 10s
        report = reconciler.render()

        assert report.names(ResourceEvent.EVICTED) == ["old"]
        assert registry.names() == ["new"]
        assert display.flashes() == [(0, REMOVED)]

    def test_update_keeps_entry_alive(self, registry, display, clock):
        """Test that an unchanged update refreshes last-seen."""
        config = ControllerConfig(resync_period=timedelta(seconds=10))
        reconciler = Reconciler(registry, display, config)
        registry.add("p1", "0000FF")
        reconciler.render()

        clock.advance(25)
        registry.update("p1", "0000FF")
        clock.advance(25)
        reconciler.render()

        assert "p1" in registry


@pytest.mark.unit
class TestDisplayFailure:
    """Test that display failures surface as DisplayError."""

    def test_driver_exception_is_wrapped(self, registry, config):
        """Test that a raw exception becomes a DisplayError."""
        display = Mock()
        display.flash.side_effect = OSError("GPIO busy")
        reconciler = Reconciler(registry, display, config)
        registry.add("p1", "00FFFF")

        with pytest.raises(DisplayError) as exc_info:
            reconciler.render()

        assert exc_info.value.operation == "flash"
        display.show.assert_not_called()

    def test_display_error_passes_through(self, registry, config):
        """Test that an adapter's own DisplayError is not re-wrapped."""
        error = DisplayError("strip gone", operation="show")
        display = Mock()
        display.show.side_effect = error
        reconciler = Reconciler(registry, display, config)

        with pytest.raises(DisplayError) as exc_info:
            reconciler.render()

        assert exc_info.value is error
