from .enums import (
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
from .events import (
    AccelerometerDataEvent,
    ArmSyncedEvent,
    EmgEvent,
    GyroscopeDataEvent,
    MyoEvent,
    OrientationDataEvent,
    PoseEvent,
    RssiEvent,
)
from .values import Quaternion, Vector3

__all__ = [
    "Vector3", "Quaternion",
    "EventType", "ObserverKind", "OrientationIndex",
    "Arm", "XDirection", "Pose",
    "VibrationType", "StreamEmgType", "UnlockType", "UserActionType",
    "MyoEvent", "ArmSyncedEvent", "PoseEvent", "OrientationDataEvent",
    "AccelerometerDataEvent", "GyroscopeDataEvent", "RssiEvent", "EmgEvent",
]
