"""Tests for the controller: mutator contract, observers and shutdown."""

import threading
import time
from unittest.mock import Mock

import pytest

from kubeblinkt.core import Controller
from kubeblinkt.devices import DisplayCall, MemoryDisplay
from kubeblinkt.exceptions import DisplayError
from kubeblinkt.models import ControllerConfig
from kubeblinkt.protocols import ResourceEvent, ResourceObserver

from conftest import fill


class RecordingObserver:
    """Observer collecting every event."""

    def __init__(self):
        self.events = []

    def on_resource_event(self, event, name):
        self.events.append((event, name))


@pytest.mark.unit
class TestMutators:
    """Test the unified mutator contract."""

    def test_add_renders(self, controller, display):
        """Test that a new resource is drawn before add returns."""
        assert controller.add("p1", "00FFFF") is True
        assert display.frame[0] == ("00FFFF", 0.2)

    def test_upsert(self, controller, display):
        """Test that two adds of one name give one entry with the last color."""
        controller.add("p1", "00FF00")
        display.reset_calls()

        assert controller.add("p1", "0000FF") is True

        assert controller.registry.names() == ["p1"]
        assert controller.registry.get("p1").color == "0000FF"
        assert display.flashes() == [(0, "000B87")]

    def test_noop_update_issues_no_calls(self, controller, display):
        """Test that updating to the current color touches nothing."""
        controller.add("p1", "0000FF")
        display.reset_calls()

        assert controller.update("p1", "0000FF") is False
        assert display.calls == []

    def test_update_unknown_name(self, controller, display):
        """Test that updating an unknown name neither adds nor renders."""
        assert controller.update("ghost", "FF0000") is False
        assert "ghost" not in controller.registry
        assert display.calls == []

    def test_delete_unknown_name(self, controller, display):
        """Test that deleting an unknown name does nothing."""
        assert controller.delete("ghost") is False
        assert display.calls == []

    def test_delete_renders(self, controller, display):
        """Test that a delete flashes the entry out."""
        controller.add("p1", "0000FF")

        assert controller.delete("p1") is True
        assert "p1" not in controller.registry
        assert display.frame[0] == ("000000", 0.0)

    def test_display_error_propagates(self, config):
        """Test that a failing strip surfaces from the mutator."""
        display = Mock()
        display.show.side_effect = RuntimeError("SPI write failed")
        controller = Controller(display, config)

        with pytest.raises(DisplayError):
            controller.add("p1", "0000FF")


@pytest.mark.unit
class TestObservers:
    """Test observer notification."""

    def test_observer_protocol(self):
        """Test that the recording observer satisfies the protocol."""
        assert isinstance(RecordingObserver(), ResourceObserver)

    def test_events_in_sweep_order(self, controller):
        """Test added, updated and deleted notifications."""
        observer = RecordingObserver()
        controller.register_observer(observer)

        controller.add("a", "0000FF")
        controller.update("a", "FF00FF")
        controller.delete("a")

        assert observer.events == [
            (ResourceEvent.ADDED, "a"),
            (ResourceEvent.UPDATED, "a"),
            (ResourceEvent.DELETED, "a"),
        ]

    def test_unregister(self, controller):
        """Test that an unregistered observer hears nothing more."""
        observer = RecordingObserver()
        controller.register_observer(observer)
        controller.unregister_observer(observer)

        controller.add("a", "0000FF")

        assert observer.events == []

    def test_failing_observer_does_not_break_rendering(self, controller, display):
        """Test that observer errors are contained."""
        broken = Mock()
        broken.on_resource_event.side_effect = ValueError("boom")
        observer = RecordingObserver()
        controller.register_observer(broken)
        controller.register_observer(observer)

        assert controller.add("a", "0000FF") is True

        assert observer.events == [(ResourceEvent.ADDED, "a")]
        assert display.frame[0] == ("0000FF", 0.2)


@pytest.mark.unit
class TestShutdown:
    """Test close()."""

    def test_single_cleanup(self, controller, display):
        """Test that close runs the cleanup exactly once."""
        fill(controller, 3)

        controller.close()
        controller.close()

        cleanups = [call for call in display.calls if call.op == "cleanup"]
        assert cleanups == [DisplayCall("cleanup", None, "FF0000", 0.2)]
        assert controller.closed

    def test_no_render_after_close(self, controller, display):
        """Test that mutators are ignored once closed."""
        controller.close()
        display.reset_calls()

        assert controller.add("p1", "0000FF") is False
        assert controller.update("p1", "00FF00") is False
        assert controller.delete("p1") is False
        assert controller.render() is None
        assert display.calls == []

    def test_context_manager_closes(self, display, config):
        """Test that leaving the with-block cleans up."""
        with Controller(display, config) as controller:
            controller.add("p1", "0000FF")

        assert display.cleaned_up

    def test_uses_configured_final_color(self, display):
        """Test that cleanup gets the configured color and brightness."""
        controller = Controller(display, ControllerConfig(final_color="00ff00", brightness=0.5))

        controller.close()

        assert display.calls[-1] == DisplayCall("cleanup", None, "00FF00", 0.5)

    def test_cleanup_failure_is_wrapped(self, config):
        """Test that a raw cleanup exception becomes a DisplayError."""
        display = Mock()
        display.cleanup.side_effect = OSError("GPIO released")
        controller = Controller(display, config)

        with pytest.raises(DisplayError):
            controller.close()
        assert controller.closed


@pytest.mark.integration
class TestConcurrency:
    """Test that render passes never overlap."""

    def test_one_render_in_flight(self, config):
        """Test two threads mutating one controller."""
        display = MemoryDisplay()
        active = []
        overlaps = []
        original_show = display.show

        def slow_show():
            active.append(1)
            if len(active) > 1:
                overlaps.append(True)
            time.sleep(0.001)
            original_show()
            active.pop()

        display.show = slow_show
        controller = Controller(display, config)

        def feed(prefix):
            for i in range(20):
                controller.add(f"{prefix}{i}", "0000FF")

        threads = [threading.Thread(target=feed, args=(p,)) for p in ("pod-", "node-")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []
        assert len(controller.registry) == 40

    def test_close_waits_for_in_flight_render(self, config):
        """Test that cleanup happens after the running render pass."""
        display = MemoryDisplay()
        started = threading.Event()
        release = threading.Event()
        original_show = display.show

        def blocking_show():
            started.set()
            release.wait(timeout=5)
            original_show()

        display.show = blocking_show
        controller = Controller(display, config)
        worker = threading.Thread(target=controller.add, args=("p1", "0000FF"))
        worker.start()
        assert started.wait(timeout=5)

        closer = threading.Thread(target=controller.close)
        closer.start()
        time.sleep(0.05)
        assert not display.cleaned_up

        release.set()
        worker.join(timeout=5)
        closer.join(timeout=5)

        ops = [call.op for call in display.calls]
        assert ops[-1] == "cleanup"
        assert display.frames_shown == 1
