"""Tests for the generic observer manager."""

from unittest.mock import Mock

import pytest

from kubeblinkt.model_manager import ObserverManager
from kubeblinkt.protocols import ResourceEvent, ResourceObserver


@pytest.mark.unit
class TestObserverManager:
    """Test ObserverManager."""

    def test_register_is_idempotent(self):
        manager = ObserverManager[ResourceObserver]()
        observer = Mock()

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    def test_notify(self):
        manager = ObserverManager[ResourceObserver]()
        observer = Mock()
        manager.register(observer)

        manager.notify("on_resource_event", ResourceEvent.ADDED, "p1")

        observer.on_resource_event.assert_called_once_with(ResourceEvent.ADDED, "p1")

    def test_missing_callback_is_logged(self, caplog):
        manager = ObserverManager[ResourceObserver](observer_type_name="resource")
        manager.register(object())

        manager.notify("on_resource_event", ResourceEvent.ADDED, "p1")

        assert "has no method 'on_resource_event'" in caplog.text

    def test_failing_observer_does_not_stop_others(self):
        manager = ObserverManager[ResourceObserver]()
        broken = Mock()
        broken.on_resource_event.side_effect = RuntimeError("boom")
        healthy = Mock()
        manager.register(broken)
        manager.register(healthy)

        manager.notify("on_resource_event", ResourceEvent.DELETED, "p1")

        healthy.on_resource_event.assert_called_once_with(ResourceEvent.DELETED, "p1")

    def test_unregister_and_clear(self):
        manager = ObserverManager[ResourceObserver]()
        first, second = Mock(), Mock()
        manager.register(first)
        manager.register(second)

        manager.unregister(first)
        assert first not in manager

        manager.clear()
        assert len(manager) == 0
