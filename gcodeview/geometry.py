"""Small 3D vector type, working planes and NaN-aware helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


class Plane(IntEnum):
    """Working plane selected by G17, G18 and G19."""

    XY = 0
    ZX = 1
    YZ = 2


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        """Euclidean length; NaN if any component is NaN."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def has_nan(self) -> bool:
        """True if any component is NaN."""
        return any(math.isnan(c) for c in self)


def nan_min(a: float, b: float) -> float:
    """Minimum of two values, ignoring a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def nan_max(a: float, b: float) -> float:
    """Maximum of two values, ignoring a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def rotate_to_plane(point: Vec3, plane: Plane) -> Vec3:
    """Rotate a point so that the given working plane becomes the XY plane."""
    if plane is Plane.ZX:
        # 90 degrees about the X axis
        return Vec3(point.x, -point.z, point.y)
    if plane is Plane.YZ:
        # -90 degrees about the Y axis
        return Vec3(-point.z, point.y, point.x)
    return point


def rotate_from_plane(point: Vec3, plane: Plane) -> Vec3:
    """Undo :func:`rotate_to_plane`."""
    if plane is Plane.ZX:
        # -90 degrees about the X axis
        return Vec3(point.x, point.z, -point.y)
    if plane is Plane.YZ:
        # 90 degrees about the Y axis
        return Vec3(point.z, point.y, -point.x)
    return point