# myobridge/model/enums.py
from __future__ import annotations

from enum import Enum, IntEnum


class EventType(IntEnum):
    """Native event tags as reported by libmyo."""
    PAIRED = 0
    UNPAIRED = 1
    CONNECTED = 2
    DISCONNECTED = 3
    ARM_SYNCED = 4
    ARM_UNSYNCED = 5
    ORIENTATION = 6
    POSE = 7
    RSSI = 8
    UNLOCKED = 9
    LOCKED = 10
    EMG = 11


class _UnknownFallback(IntEnum):
    """Raw values outside the enum decode to UNKNOWN instead of raising."""

    @classmethod
    def _missing_(cls, value):
        return cls["UNKNOWN"]


class Arm(_UnknownFallback):
    RIGHT = 0
    LEFT = 1
    UNKNOWN = 2


class XDirection(_UnknownFallback):
    TOWARD_WRIST = 0
    TOWARD_ELBOW = 1
    UNKNOWN = 2


class Pose(_UnknownFallback):
    REST = 0
    FIST = 1
    WAVE_IN = 2
    WAVE_OUT = 3
    FINGERS_SPREAD = 4
    DOUBLE_TAP = 5
    UNKNOWN = 0xFFFF


class VibrationType(IntEnum):
    SHORT = 0
    MEDIUM = 1
    LONG = 2


class StreamEmgType(IntEnum):
    DISABLED = 0
    ENABLED = 1


class UnlockType(IntEnum):
    TIMED = 0  # unlock for a fixed period of time
    HOLD = 1   # unlock until explicitly re-locked


class UserActionType(IntEnum):
    SINGLE = 0


class OrientationIndex(IntEnum):
    X = 0
    Y = 1
    Z = 2
    W = 3


class ObserverKind(Enum):
    """
    Notification channels exposed by a device.

    The native ORIENTATION tag fans out to ACCELEROMETER, GYROSCOPE and ORIENTATION.
    """
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ARM_SYNCED = "arm_synced"
    ARM_UNSYNCED = "arm_unsynced"
    POSE = "pose"
    ORIENTATION = "orientation"
    ACCELEROMETER = "accelerometer"
    GYROSCOPE = "gyroscope"
    RSSI = "rssi"
    EMG = "emg"
    UNLOCKED = "unlocked"
    LOCKED = "locked"


# Native tag -> observer kinds it can notify, in notification order.
KINDS_BY_EVENT_TYPE: dict[EventType, tuple[ObserverKind, ...]] = {
    EventType.CONNECTED: (ObserverKind.CONNECTED,),
    EventType.DISCONNECTED: (ObserverKind.DISCONNECTED,),
    EventType.ARM_SYNCED: (ObserverKind.ARM_SYNCED,),
    EventType.ARM_UNSYNCED: (ObserverKind.ARM_UNSYNCED,),
    EventType.ORIENTATION: (
        ObserverKind.ACCELEROMETER,
        ObserverKind.GYROSCOPE,
        ObserverKind.ORIENTATION,
    ),
    EventType.POSE: (ObserverKind.POSE,),
    EventType.RSSI: (ObserverKind.RSSI,),
    EventType.EMG: (ObserverKind.EMG,),
    EventType.UNLOCKED: (ObserverKind.UNLOCKED,),
    EventType.LOCKED: (ObserverKind.LOCKED,),
}
