"""Unit tests for the manual visibility source."""
from insights.services.visibility import ManualVisibilitySource


def test_notifies_only_on_change() -> None:
    source = ManualVisibilitySource()
    seen: list[bool] = []
    source.subscribe(seen.append)

    assert source.set_hidden(False) is False
    assert source.set_hidden(True) is True
    assert source.set_hidden(True) is False
    assert source.set_hidden(False) is True

    assert seen == [True, False]


def test_subscribe_is_idempotent_and_unsubscribe_stops_notifications() -> None:
    source = ManualVisibilitySource()
    seen: list[bool] = []

    source.subscribe(seen.append)
    source.subscribe(seen.append)
    assert source.subscriber_count == 1

    source.unsubscribe(seen.append)
    source.unsubscribe(seen.append)
    source.set_hidden(True)

    assert source.subscriber_count == 0
    assert seen == []


def test_callback_may_unsubscribe_itself() -> None:
    source = ManualVisibilitySource()
    seen: list[str] = []

    def once(hidden: bool) -> None:
        seen.append("once")
        source.unsubscribe(once)

    source.subscribe(once)
    source.subscribe(lambda hidden: seen.append("always"))

    source.set_hidden(True)
    source.set_hidden(False)

    assert seen == ["once", "always", "always"]
