# myobridge/runtime/device.py
from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from myobridge.core.errors import InvalidHandleError
from myobridge.interfaces.command_sink import CommandEvent, CommandSink
from myobridge.model.enums import (
    Arm,
    EventType,
    ObserverKind,
    OrientationIndex,
    Pose,
    StreamEmgType,
    UnlockType,
    UserActionType,
    VibrationType,
    XDirection,
)
from myobridge.model.events import (
    AccelerometerDataEvent,
    ArmSyncedEvent,
    EmgEvent,
    GyroscopeDataEvent,
    MyoEvent,
    OrientationDataEvent,
    PoseEvent,
    RssiEvent,
)
from myobridge.model.values import Quaternion, Vector3
from myobridge.native.base import NativeLibrary, is_valid_handle
from myobridge.native.errors import NativeError
from myobridge.runtime.observers import Observer, ObserverRegistry, ObserverSet

EMG_SENSOR_COUNT = 8

UnknownEventHook = Callable[[Any, Any], None]  # (raw kind, timestamp)

# Tags that carry no payload: tag -> observer kind
_PLAIN_KINDS: Dict[EventType, ObserverKind] = {
    EventType.CONNECTED: ObserverKind.CONNECTED,
    EventType.DISCONNECTED: ObserverKind.DISCONNECTED,
    EventType.ARM_UNSYNCED: ObserverKind.ARM_UNSYNCED,
    EventType.UNLOCKED: ObserverKind.UNLOCKED,
    EventType.LOCKED: ObserverKind.LOCKED,
}


class MyoDevice:
    """
    Proxy for one connected armband behind an opaque native handle.

    Responsibilities:
      - decode tagged native events into typed records and fan them out to the
        observers registered for each kind (synchronously, in order)
      - turn typed commands into single fire-and-forget native calls

    Not thread-safe: the owning hub calls dispatch() from its own pump thread.
    """

    def __init__(
        self,
        hub: Any,
        handle: Any,
        native: NativeLibrary,
        *,
        logger: Optional[logging.Logger] = None,
        cmd_sink: Optional[CommandSink] = None,
        on_unknown: Optional[UnknownEventHook] = None,
        report_unknown: bool = False,
    ):
        if not is_valid_handle(handle):
            raise InvalidHandleError(
                "Cannot construct a device with a null handle.",
                hint="The hub must pass the handle it received from the native library.",
                details={"handle": repr(handle)},
            )

        self._hub = hub
        self._handle = handle
        self._native = native
        self._log = logger or logging.getLogger(__name__)
        self._cmd_sink = cmd_sink
        self.on_unknown = on_unknown
        self._unknown_level = logging.WARNING if report_unknown else logging.DEBUG

        self._observers = ObserverRegistry(logger=self._log)
        self._valid = True
        self._request_ids = itertools.count(1)

        self._handlers: Dict[EventType, Callable[[Any, Any], None]] = {
            EventType.ARM_SYNCED: self._handle_arm_synced,
            EventType.ORIENTATION: self._handle_orientation,
            EventType.POSE: self._handle_pose,
            EventType.RSSI: self._handle_rssi,
            EventType.EMG: self._handle_emg,
        }
        for event_type, kind in _PLAIN_KINDS.items():
            self._handlers[event_type] = self._plain_handler(kind)

    # ------------------------------------------------------------------
    # Identity / state
    # ------------------------------------------------------------------
    @property
    def hub(self) -> Any:
        return self._hub

    @property
    def handle(self) -> Any:
        return self._handle

    @property
    def native(self) -> NativeLibrary:
        return self._native

    @property
    def is_valid(self) -> bool:
        return self._valid

    def invalidate(self) -> None:
        """Mark the device gone; later commands are rejected instead of reaching native code."""
        if self._valid:
            self._valid = False
            self._log.info("DEVICE_INVALIDATED handle=%r", self._handle)

    # ------------------------------------------------------------------
    # Observer registration
    # ------------------------------------------------------------------
    @property
    def observers(self) -> ObserverRegistry:
        return self._observers

    def subscribe(self, kind: ObserverKind, observer: Observer) -> Observer:
        return self._observers[kind].add(observer)

    def unsubscribe(self, kind: ObserverKind, observer: Observer) -> bool:
        return self._observers[kind].remove(observer)

    @property
    def connected(self) -> ObserverSet:
        return self._observers[ObserverKind.CONNECTED]

    @property
    def disconnected(self) -> ObserverSet:
        return self._observers[ObserverKind.DISCONNECTED]

    @property
    def arm_synced(self) -> ObserverSet:
        return self._observers[ObserverKind.ARM_SYNCED]

    @property
    def arm_unsynced(self) -> ObserverSet:
        return self._observers[ObserverKind.ARM_UNSYNCED]

    @property
    def pose(self) -> ObserverSet:
        return self._observers[ObserverKind.POSE]

    @property
    def orientation(self) -> ObserverSet:
        return self._observers[ObserverKind.ORIENTATION]

    @property
    def accelerometer(self) -> ObserverSet:
        return self._observers[ObserverKind.ACCELEROMETER]

    @property
    def gyroscope(self) -> ObserverSet:
        return self._observers[ObserverKind.GYROSCOPE]

    @property
    def rssi(self) -> ObserverSet:
        return self._observers[ObserverKind.RSSI]

    @property
    def emg(self) -> ObserverSet:
        return self._observers[ObserverKind.EMG]

    @property
    def unlocked(self) -> ObserverSet:
        return self._observers[ObserverKind.UNLOCKED]

    @property
    def locked(self) -> ObserverSet:
        return self._observers[ObserverKind.LOCKED]

    # ------------------------------------------------------------------
    # Commands (fire-and-forget; the bool only reports local outcome)
    # ------------------------------------------------------------------
    def vibrate(self, vibration_type: VibrationType = VibrationType.SHORT) -> bool:
        vt = VibrationType(vibration_type)
        return self._command("VIBRATE", self._native.vibrate, vt)

    def request_rssi(self) -> bool:
        return self._command("REQUEST_RSSI", self._native.request_rssi)

    def set_stream_emg(self, stream_type: StreamEmgType) -> bool:
        st = StreamEmgType(stream_type)
        return self._command("SET_STREAM_EMG", self._native.set_stream_emg, st)

    def unlock(self, unlock_type: UnlockType = UnlockType.TIMED) -> bool:
        ut = UnlockType(unlock_type)
        return self._command("UNLOCK", self._native.unlock, ut)

    def lock(self) -> bool:
        return self._command("LOCK", self._native.lock)

    def notify_user_action(self) -> bool:
        return self._command("NOTIFY_USER_ACTION", self._native.notify_user_action, UserActionType.SINGLE)

    def _command(self, name: str, call: Callable[..., None], *args: Any) -> bool:
        request_id = str(next(self._request_ids))
        cmd_args = {type(a).__name__: a.name for a in args}

        if not self._valid:
            self._log.error("COMMAND_REJECTED cmd=%s handle=%r reason=device_invalidated", name, self._handle)
            self._emit_command(name, "rejected", request_id, {"args": cmd_args, "error": "device invalidated"})
            return False

        try:
            call(self._handle, *args)
        except NativeError as e:
            self._log.warning("COMMAND_FAILED cmd=%s handle=%r error=%s", name, self._handle, e)
            self._emit_command(name, "error", request_id, {"args": cmd_args, "error": str(e)})
            return False

        self._log.debug("COMMAND_SENT cmd=%s args=%s", name, cmd_args)
        self._emit_command(name, "ok", request_id, {"args": cmd_args})
        return True

    def _emit_command(self, name: str, kind: str, request_id: str, payload: dict) -> None:
        if self._cmd_sink is None:
            return
        self._cmd_sink.on_command(
            CommandEvent(name=name, kind=kind, request_id=request_id, payload=payload)
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, kind: Any, timestamp: datetime, evt: Any) -> None:
        """
        Decode one native event and notify the matching observers.

        Fields are only read when the target observer set is non-empty.
        Unknown tags are ignored; this method never raises.
        """
        try:
            event_type: Optional[EventType] = EventType(kind)
        except (ValueError, TypeError):
            event_type = None

        handler = self._handlers.get(event_type) if event_type is not None else None
        if handler is None:
            self._on_unhandled(kind, timestamp)
            return

        handler(timestamp, evt)

    handle_event = dispatch

    def _notify(self, kind: ObserverKind, build: Callable[[], MyoEvent]) -> None:
        observers = self._observers[kind]
        if not observers:
            return
        try:
            event = build()
        except Exception:
            self._log.exception("EVENT_DECODE_FAILED kind=%s handle=%r", kind.value, self._handle)
            return
        observers.notify(event)

    def _plain_handler(self, kind: ObserverKind) -> Callable[[Any, Any], None]:
        def _handle(timestamp: Any, evt: Any) -> None:
            self._notify(kind, lambda: MyoEvent(self, timestamp))
        return _handle

    def _handle_arm_synced(self, timestamp: Any, evt: Any) -> None:
        def build() -> MyoEvent:
            arm = Arm(self._native.event_get_arm(evt))
            x_direction = XDirection(self._native.event_get_x_direction(evt))
            return ArmSyncedEvent(self, timestamp, arm, x_direction)

        self._notify(ObserverKind.ARM_SYNCED, build)

    def _handle_orientation(self, timestamp: Any, evt: Any) -> None:
        native = self._native

        def accelerometer() -> MyoEvent:
            v = Vector3(*(native.event_get_accelerometer(evt, i) for i in range(3)))
            return AccelerometerDataEvent(self, timestamp, v)

        def gyroscope() -> MyoEvent:
            v = Vector3(*(native.event_get_gyroscope(evt, i) for i in range(3)))
            return GyroscopeDataEvent(self, timestamp, v)

        def orientation() -> MyoEvent:
            q = Quaternion(*(native.event_get_orientation(evt, idx) for idx in OrientationIndex))
            return OrientationDataEvent(self, timestamp, q)

        # order matters: accelerometer, gyroscope, orientation
        self._notify(ObserverKind.ACCELEROMETER, accelerometer)
        self._notify(ObserverKind.GYROSCOPE, gyroscope)
        self._notify(ObserverKind.ORIENTATION, orientation)

    def _handle_pose(self, timestamp: Any, evt: Any) -> None:
        self._notify(
            ObserverKind.POSE,
            lambda: PoseEvent(self, timestamp, Pose(self._native.event_get_pose(evt))),
        )

    def _handle_rssi(self, timestamp: Any, evt: Any) -> None:
        self._notify(
            ObserverKind.RSSI,
            lambda: RssiEvent(self, timestamp, int(self._native.event_get_rssi(evt))),
        )

    def _handle_emg(self, timestamp: Any, evt: Any) -> None:
        def build() -> MyoEvent:
            emg = tuple(int(self._native.event_get_emg(evt, i)) for i in range(EMG_SENSOR_COUNT))
            return EmgEvent(self, timestamp, emg)

        self._notify(ObserverKind.EMG, build)

    def _on_unhandled(self, kind: Any, timestamp: Any) -> None:
        self._log.log(self._unknown_level, "UNHANDLED_EVENT kind=%r handle=%r", kind, self._handle)
        hook = self.on_unknown
        if hook is None:
            return
        try:
            hook(kind, timestamp)
        except Exception:
            self._log.exception("UNKNOWN_EVENT_HOOK_FAILED kind=%r", kind)

    def __repr__(self) -> str:
        state = "valid" if self._valid else "invalidated"
        return f"MyoDevice(handle={self._handle!r}, {state})"
