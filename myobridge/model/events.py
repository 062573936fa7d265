# myobridge/model/events.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Tuple

from .enums import Arm, Pose, XDirection
from .values import Quaternion, Vector3

if TYPE_CHECKING:
    from myobridge.runtime.device import MyoDevice


@dataclass(frozen=True, slots=True)
class MyoEvent:
    """
    Base record for every device notification.

    Built fresh for each dispatch and never reused. Kinds without payload
    (connected, disconnected, arm unsynced, unlocked, locked) use it as-is.
    """
    device: "MyoDevice"
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class ArmSyncedEvent(MyoEvent):
    arm: Arm
    x_direction: XDirection


@dataclass(frozen=True, slots=True)
class PoseEvent(MyoEvent):
    pose: Pose


@dataclass(frozen=True, slots=True)
class OrientationDataEvent(MyoEvent):
    orientation: Quaternion


@dataclass(frozen=True, slots=True)
class AccelerometerDataEvent(MyoEvent):
    accelerometer: Vector3


@dataclass(frozen=True, slots=True)
class GyroscopeDataEvent(MyoEvent):
    gyroscope: Vector3


@dataclass(frozen=True, slots=True)
class RssiEvent(MyoEvent):
    rssi: int


@dataclass(frozen=True, slots=True)
class EmgEvent(MyoEvent):
    emg: Tuple[int, ...]  # 8 signed bytes, sensor 0..7
