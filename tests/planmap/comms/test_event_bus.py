"""Unit tests for EventBus — synchronous pub/sub dispatch."""
from __future__ import annotations

import pytest

from planmap.comms.event_bus import EventBus


@pytest.mark.unit
class TestEventBus:
    """Subscribe, publish, filter and unsubscribe."""

    def test_publish_reaches_subscriber(self):
        bus = EventBus()
        received = []
        bus.subscribe(lambda t, d: received.append((t, d)))
        bus.publish("status", {"message": "Ready"})
        assert received == [("status", {"message": "Ready"})]

    def test_publish_without_data(self):
        bus = EventBus()
        received = []
        bus.subscribe(lambda t, d: received.append(d))
        bus.publish("ping")
        assert received == [{}]

    def test_filtered_subscription(self):
        bus = EventBus()
        received = []
        bus.subscribe(lambda t, d: received.append(t), "draw.create")
        bus.publish("draw.update")
        bus.publish("draw.create")
        assert received == ["draw.create"]

    def test_subscription_order_preserved(self):
        bus = EventBus()
        order = []
        bus.subscribe(lambda t, d: order.append(1))
        bus.subscribe(lambda t, d: order.append(2))
        bus.publish("x")
        assert order == [1, 2]

    def test_unsubscribe_removes_all_registrations(self):
        bus = EventBus()
        received = []

        def handler(t, d):
            received.append(t)

        bus.subscribe(handler, "a")
        bus.subscribe(handler, "b")
        bus.unsubscribe(handler)
        bus.publish("a")
        bus.publish("b")
        assert received == []

    def test_handler_may_unsubscribe_during_dispatch(self):
        bus = EventBus()
        received = []

        def once(t, d):
            received.append(t)
            bus.unsubscribe(once)

        bus.subscribe(once)
        bus.publish("a")
        bus.publish("b")
        assert received == ["a"]

    def test_unsubscribe_bound_method(self):
        class Listener:
            def __init__(self):
                self.received = []

            def on_event(self, t, d):
                self.received.append(t)

        bus = EventBus()
        listener = Listener()
        bus.subscribe(listener.on_event, "a")
        bus.unsubscribe(listener.on_event)
        bus.publish("a")
        assert listener.received == []

    def test_failing_handler_does_not_stop_later_handlers(self):
        bus = EventBus()
        received = []

        def broken(t, d):
            raise RuntimeError("boom")

        bus.subscribe(broken)
        bus.subscribe(lambda t, d: received.append(t))
        bus.publish("draw.create")
        assert received == ["draw.create"]
