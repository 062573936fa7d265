from __future__ import annotations

import logging

import pytest

from myobridge.interfaces.command_sink import CommandEvent
from myobridge.model.enums import StreamEmgType, UnlockType, UserActionType, VibrationType
from myobridge.native.errors import NativeCallError
from myobridge.runtime.device import MyoDevice

HANDLE = 0xABCD


class RecordingNative:
    """Captures command calls as (name, args...)."""
    def __init__(self):
        self.calls: list[tuple] = []
        self.raise_on: dict[str, Exception] = {}

    def _call(self, name, *args):
        if name in self.raise_on:
            raise self.raise_on[name]
        self.calls.append((name, *args))

    def vibrate(self, handle, vibration_type):
        self._call("vibrate", handle, vibration_type)

    def request_rssi(self, handle):
        self._call("request_rssi", handle)

    def set_stream_emg(self, handle, stream_type):
        self._call("set_stream_emg", handle, stream_type)

    def unlock(self, handle, unlock_type):
        self._call("unlock", handle, unlock_type)

    def lock(self, handle):
        self._call("lock", handle)

    def notify_user_action(self, handle, action_type):
        self._call("notify_user_action", handle, action_type)


class ListSink:
    def __init__(self):
        self.events: list[CommandEvent] = []

    def on_command(self, event: CommandEvent) -> None:
        self.events.append(event)

    def close(self) -> None:
        return None


def _make_device():
    native = RecordingNative()
    sink = ListSink()
    device = MyoDevice(object(), HANDLE, native, logger=logging.getLogger("test"), cmd_sink=sink)
    return device, native, sink


@pytest.mark.parametrize(
    "invoke,expected",
    [
        (lambda d: d.vibrate(VibrationType.SHORT), ("vibrate", HANDLE, VibrationType.SHORT)),
        (lambda d: d.vibrate(VibrationType.LONG), ("vibrate", HANDLE, VibrationType.LONG)),
        (lambda d: d.request_rssi(), ("request_rssi", HANDLE)),
        (lambda d: d.set_stream_emg(StreamEmgType.ENABLED), ("set_stream_emg", HANDLE, StreamEmgType.ENABLED)),
        (lambda d: d.set_stream_emg(StreamEmgType.DISABLED), ("set_stream_emg", HANDLE, StreamEmgType.DISABLED)),
        (lambda d: d.unlock(UnlockType.HOLD), ("unlock", HANDLE, UnlockType.HOLD)),
        (lambda d: d.unlock(UnlockType.TIMED), ("unlock", HANDLE, UnlockType.TIMED)),
        (lambda d: d.lock(), ("lock", HANDLE)),
        (lambda d: d.notify_user_action(), ("notify_user_action", HANDLE, UserActionType.SINGLE)),
    ],
)
def test_each_command_issues_exactly_one_native_call(invoke, expected):
    device, native, _ = _make_device()

    assert invoke(device) is True
    assert native.calls == [expected]


def test_command_accepts_raw_int_enum_values():
    device, native, _ = _make_device()

    device.vibrate(1)

    assert native.calls == [("vibrate", HANDLE, VibrationType.MEDIUM)]


def test_command_rejects_value_outside_enum():
    device, native, _ = _make_device()

    with pytest.raises(ValueError):
        device.vibrate(9)
    assert native.calls == []


def test_successful_command_reports_ok_to_sink():
    device, _, sink = _make_device()

    device.unlock(UnlockType.HOLD)

    assert len(sink.events) == 1
    ev = sink.events[0]
    assert ev.name == "UNLOCK"
    assert ev.kind == "ok"
    assert ev.payload == {"args": {"UnlockType": "HOLD"}}
    assert ev.request_id == "1"


def test_request_ids_increase_per_command():
    device, _, sink = _make_device()

    device.lock()
    device.request_rssi()

    assert [e.request_id for e in sink.events] == ["1", "2"]


def test_native_failure_returns_false_and_reports_error():
    device, native, sink = _make_device()
    native.raise_on["vibrate"] = NativeCallError("libmyo_vibrate", 3, "runtime error")

    assert device.vibrate(VibrationType.SHORT) is False

    assert sink.events[-1].kind == "error"
    assert "runtime error" in sink.events[-1].payload["error"]


def test_non_native_exception_propagates():
    device, native, _ = _make_device()
    native.raise_on["lock"] = RuntimeError("bug in binding")

    with pytest.raises(RuntimeError):
        device.lock()


def test_invalidated_device_rejects_commands_without_native_call():
    device, native, sink = _make_device()
    device.invalidate()

    results = [
        device.vibrate(),
        device.request_rssi(),
        device.set_stream_emg(StreamEmgType.ENABLED),
        device.unlock(),
        device.lock(),
        device.notify_user_action(),
    ]

    assert results == [False] * 6
    assert native.calls == []
    assert {e.kind for e in sink.events} == {"rejected"}
    assert device.is_valid is False


def test_commands_without_sink_still_work():
    native = RecordingNative()
    device = MyoDevice(object(), HANDLE, native)

    assert device.lock() is True
    assert native.calls == [("lock", HANDLE)]
