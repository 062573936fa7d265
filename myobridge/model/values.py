# myobridge/model/values.py
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3-component vector (accelerometer in g, gyroscope in deg/s).
    """
    x: float
    y: float
    z: float

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vector3":
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vector3":
        return Vector3(self.x / k, self.y / k, self.z / k)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector3":
        m = self.magnitude()
        if m == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / m


@dataclass(frozen=True)
class Quaternion:
    """
    Immutable unit-quaternion style rotation (x, y, z, w).

    Euler helpers follow the armband convention: roll about X, pitch about Y,
    yaw about Z, all in radians.
    """
    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(0.0, 0.0, 0.0, 1.0)

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        # Hamilton product
        return Quaternion(
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
        )

    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalized(self) -> "Quaternion":
        n = self.norm()
        if n == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def rotate(self, v: Vector3) -> Vector3:
        """Rotate v by this (unit) quaternion: q * v * q^-1."""
        p = Quaternion(v.x, v.y, v.z, 0.0)
        r = self * p * self.conjugate()
        return Vector3(r.x, r.y, r.z)

    def roll(self) -> float:
        return math.atan2(
            2.0 * (self.w * self.x + self.y * self.z),
            1.0 - 2.0 * (self.x * self.x + self.y * self.y),
        )

    def pitch(self) -> float:
        s = 2.0 * (self.w * self.y - self.z * self.x)
        # clamp against float drift outside [-1, 1]
        return math.asin(max(-1.0, min(1.0, s)))

    def yaw(self) -> float:
        return math.atan2(
            2.0 * (self.w * self.z + self.x * self.y),
            1.0 - 2.0 * (self.y * self.y + self.z * self.z),
        )
