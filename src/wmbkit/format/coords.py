"""Remapping from the native Gamestudio axes into a target convention."""

from __future__ import annotations

from typing import Tuple

from ..config import CoordinateSystem
from ..model import Vec3

__all__ = ["CoordinateMapper"]

# Rows of the position transform, applied as (x, y, z) * M.
_POSITION_MATRICES = {
    CoordinateSystem.GAMESTUDIO: ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
    CoordinateSystem.OPENGL: ((0.0, 0.0, -1.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    CoordinateSystem.DIRECTX: ((0.0, 0.0, 1.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
}


class CoordinateMapper:
    def __init__(self, system: CoordinateSystem = CoordinateSystem.GAMESTUDIO):
        self.system = CoordinateSystem(system)
        self._m = _POSITION_MATRICES[self.system]

    def position(self, x: float, y: float, z: float) -> Vec3:
        if self.system is CoordinateSystem.GAMESTUDIO:
            return Vec3(x, y, z)
        m = self._m
        return Vec3(
            x * m[0][0] + y * m[1][0] + z * m[2][0],
            x * m[0][1] + y * m[1][1] + z * m[2][1],
            x * m[0][2] + y * m[1][2] + z * m[2][2],
        )

    def scale(self, x: float, y: float, z: float) -> Vec3:
        # scales are unsigned extents, only the axes are permuted
        if self.system is CoordinateSystem.GAMESTUDIO:
            return Vec3(x, y, z)
        return Vec3(x, z, y)

    def triangle(self, v1: int, v2: int, v3: int) -> Tuple[int, int, int]:
        if self.system is CoordinateSystem.OPENGL:
            return v1, v3, v2
        return v1, v2, v3
