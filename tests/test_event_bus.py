from scoregrid.services.event_bus import EventBus, ScoreboardEvent


def test_subscribe_and_publish():
    bus = EventBus()
    received = []
    bus.subscribe(ScoreboardEvent.SORT_APPLIED, lambda e: received.append(e.payload))
    bus.publish(ScoreboardEvent.SORT_APPLIED, {"column": 3})
    assert received == [{"column": 3}]


def test_enum_and_string_names_share_a_channel():
    bus = EventBus()
    hits = []
    bus.subscribe("round_toggled", lambda e: hits.append(e.name))
    bus.publish(ScoreboardEvent.ROUND_TOGGLED)
    assert hits == ["round_toggled"]
    assert bus.subscriber_count(ScoreboardEvent.ROUND_TOGGLED) == 1


def test_once_subscription_removed_after_first_event():
    bus = EventBus()
    hits = []
    bus.subscribe("x", lambda e: hits.append(1), once=True)
    bus.publish("x")
    bus.publish("x")
    assert hits == [1]
    assert bus.subscriber_count("x") == 0


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    hits = []
    sub = bus.subscribe("x", lambda e: hits.append(1))
    bus.unsubscribe(sub)
    bus.publish("x")
    assert hits == []
    assert not sub.active


def test_handler_error_isolated():
    bus = EventBus()
    hits = []

    def boom(_event):
        raise RuntimeError("fail")

    bus.subscribe("x", boom)
    bus.subscribe("x", lambda e: hits.append(1))
    bus.publish("x")
    assert hits == [1]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)
    bus.clear()
    assert bus.errors == []


def test_error_log_keeps_only_recent_failures():
    bus = EventBus(max_errors=3)

    def boom(event):
        raise ValueError(event.payload)

    bus.subscribe("x", boom)
    for i in range(10):
        bus.publish("x", i)
    assert [evt.payload for evt, _ in bus.errors] == [7, 8, 9]
