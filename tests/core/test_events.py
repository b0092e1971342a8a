"""Tests for event bus."""

from handpuppet.core.events import EventBus, EventType


def test_subscribe_publish():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.CANVAS_RESIZED, lambda **kw: received.append(kw))
    bus.publish(EventType.CANVAS_RESIZED, width=800, height=600)
    assert received == [{"width": 800, "height": 600}]


def test_unsubscribe():
    bus = EventBus()
    received = []
    handler = lambda **kw: received.append(kw)
    bus.subscribe(EventType.CIRCLE_RESPAWNED, handler)
    bus.unsubscribe(EventType.CIRCLE_RESPAWNED, handler)
    bus.publish(EventType.CIRCLE_RESPAWNED, position=(0.0, 0.0))
    assert received == []


def test_multiple_subscribers():
    bus = EventBus()
    a, b = [], []
    bus.subscribe(EventType.FRAME_UPDATE, lambda **kw: a.append(1))
    bus.subscribe(EventType.FRAME_UPDATE, lambda **kw: b.append(1))
    bus.publish(EventType.FRAME_UPDATE, result=None)
    assert len(a) == 1
    assert len(b) == 1


def test_different_events_independent():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.HANDS_STATE_CHANGED, lambda **kw: received.append("state"))
    bus.publish(EventType.FRAME_UPDATE, result=None)
    assert received == []


def test_clear():
    bus = EventBus()
    bus.subscribe(EventType.FRAME_UPDATE, lambda **kw: None)
    bus.clear()
    # Should not raise
    bus.publish(EventType.FRAME_UPDATE)
