import logging

from gui.services.event_bus import EventBus, SessionEvent


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []
    bus.subscribe(SessionEvent.SESSION_SAVED, lambda evt: received.append((evt.name, evt.payload)))
    bus.publish(SessionEvent.SESSION_SAVED, {"path": "x"})
    assert received == [(SessionEvent.SESSION_SAVED.value, {"path": "x"})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(SessionEvent.SESSION_RESTORED, incr, once=True)
    bus.publish(SessionEvent.SESSION_RESTORED)
    bus.publish(SessionEvent.SESSION_RESTORED)
    assert count == 1
    assert bus.subscriber_count(SessionEvent.SESSION_RESTORED) == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", lambda _: order.append("good"))
    bus.publish("custom")
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_unsubscribe():
    bus = EventBus()
    received = []
    sub = bus.subscribe(SessionEvent.UPDATE_APPLYING, received.append)
    bus.unsubscribe(sub)
    bus.publish(SessionEvent.UPDATE_APPLYING)
    assert received == []
    assert not sub.active


def test_handler_errors_are_capped_and_logged(caplog):
    bus = EventBus(error_capacity=3)

    def bad(_):
        raise ValueError("nope")

    bus.subscribe("custom", bad)
    with caplog.at_level(logging.ERROR, logger="gui.services.event_bus"):
        for _ in range(5):
            bus.publish("custom")
    assert len(bus.errors) == 3
    assert sum("Handler for custom failed" in r.getMessage() for r in caplog.records) == 5
