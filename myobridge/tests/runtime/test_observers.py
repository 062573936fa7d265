from __future__ import annotations

import pytest

from myobridge.model.enums import ObserverKind
from myobridge.runtime.observers import ObserverRegistry, ObserverSet


def test_registry_has_exactly_one_set_per_kind():
    reg = ObserverRegistry()

    assert len(reg) == len(ObserverKind)
    assert set(reg) == set(ObserverKind)
    assert reg[ObserverKind.POSE] is reg[ObserverKind.POSE]
    assert reg[ObserverKind.POSE] is not reg[ObserverKind.EMG]


def test_registry_lookup_by_value():
    reg = ObserverRegistry()
    assert reg["pose"] is reg[ObserverKind.POSE]


def test_empty_set_notify_is_noop():
    s = ObserverSet(ObserverKind.RSSI)
    assert not s
    assert s.notify("event") == 0


def test_notify_in_registration_order():
    s = ObserverSet(ObserverKind.RSSI)
    calls = []
    s.add(lambda e: calls.append(("a", e)))
    s.add(lambda e: calls.append(("b", e)))

    assert s.notify(1) == 2
    assert calls == [("a", 1), ("b", 1)]


def test_remove_drops_first_match_only():
    s = ObserverSet(ObserverKind.POSE)
    calls = []
    s.add(calls.append)
    s.add(calls.append)

    assert s.remove(calls.append) is True
    assert len(s) == 1
    s.notify("x")
    assert calls == ["x"]


def test_remove_missing_returns_false():
    s = ObserverSet(ObserverKind.POSE)
    assert s.remove(print) is False


def test_add_non_callable_raises():
    s = ObserverSet(ObserverKind.POSE)
    with pytest.raises(TypeError):
        s.add("not callable")


def test_observer_removing_itself_during_notify_does_not_skip_others():
    s = ObserverSet(ObserverKind.LOCKED)
    calls = []

    def once(e):
        calls.append("once")
        s.remove(once)

    s.add(once)
    s.add(lambda e: calls.append("other"))

    s.notify(None)
    s.notify(None)

    assert calls == ["once", "other", "other"]


def test_failing_observer_is_counted_and_skipped():
    s = ObserverSet(ObserverKind.EMG)
    calls = []

    def boom(_):
        raise ValueError("nope")

    s.add(boom)
    s.add(calls.append)

    assert s.notify(5) == 2
    assert calls == [5]


def test_registry_counts_and_clear():
    reg = ObserverRegistry()
    reg[ObserverKind.EMG].add(print)
    reg[ObserverKind.EMG].add(print)

    assert reg.counts()[ObserverKind.EMG] == 2
    assert reg.has_observers(ObserverKind.EMG) is True
    assert reg.has_observers(ObserverKind.POSE) is False

    reg.clear()
    assert reg.has_observers(ObserverKind.EMG) is False
