"""Basic geometric and voxel types shared across the SLAM core."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

Vec2 = Tuple[float, float]
Vec2i = Tuple[int, int]
Mat2x2 = Tuple[Tuple[float, float], Tuple[float, float]]

CoarseVoxelIndex = Vec2i
FineVoxelIndex = Vec2i
LocalIndex = Vec2i

ZERO_VEC2: Vec2 = (0.0, 0.0)
ZERO_MAT2: Mat2x2 = ((0.0, 0.0), (0.0, 0.0))


@dataclass(frozen=True)
class Pose2:
    """Rigid 2D transform: a rotation by ``theta`` followed by a translation."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0

    @classmethod
    def identity(cls) -> "Pose2":
        """Return the identity transform."""
        return cls(0.0, 0.0, 0.0)

    @property
    def translation(self) -> Vec2:
        return (self.x, self.y)

    @property
    def rotation(self) -> Mat2x2:
        c, s = math.cos(self.theta), math.sin(self.theta)
        return ((c, -s), (s, c))

    def apply(self, point: Vec2) -> Vec2:
        """Transform a point from the local frame into the global frame."""
        px, py = point
        c, s = math.cos(self.theta), math.sin(self.theta)
        return (c * px - s * py + self.x, s * px + c * py + self.y)

    def compose(self, other: "Pose2") -> "Pose2":
        """Return the transform equal to applying ``other`` and then ``self``."""
        x, y = self.apply(other.translation)
        theta = math.atan2(
            math.sin(self.theta + other.theta), math.cos(self.theta + other.theta)
        )
        return Pose2(x, y, theta)

    def inverse(self) -> "Pose2":
        """Return the inverse transform."""
        c, s = math.cos(self.theta), math.sin(self.theta)
        return Pose2(-(c * self.x + s * self.y), -(-s * self.x + c * self.y), -self.theta)

    def __mul__(self, other: Union["Pose2", Vec2]):
        if isinstance(other, Pose2):
            return self.compose(other)
        if isinstance(other, (tuple, list)) and len(other) == 2:
            return self.apply((float(other[0]), float(other[1])))
        return NotImplemented


@dataclass
class TimedPose2:
    """A pose stamped with a time."""

    time: float = 0.0
    pose: Pose2 = field(default_factory=Pose2.identity)


@dataclass
class PointCloud:
    """A 2D scan: a time and its points."""

    time: float = 0.0
    data: List[Vec2] = field(default_factory=list)


def voxel_index_hash(index: Vec2i) -> int:
    """Pair a signed 2D voxel index into a single non-negative integer."""
    ix, iy = index
    x_key = -2 * ix - 1 if ix < 0 else 2 * ix
    y_key = -2 * iy - 1 if iy < 0 else 2 * iy
    total = x_key + y_key
    return total * (total + 1) // 2 + y_key


@dataclass
class SubVoxel:
    """Accumulated statistics for one node of a voxel's quadtree."""

    sum: Vec2 = ZERO_VEC2
    moment: Mat2x2 = ZERO_MAT2
    count: int = 0
    left_bottom: Vec2 = ZERO_VEC2
    voxel_size: float = 0.0
    depth: int = 0


@dataclass
class Voxel:
    """A coarse voxel with its normal distribution and its sub-voxels."""

    mean: Vec2 = ZERO_VEC2
    information: Mat2x2 = ZERO_MAT2
    normal_vector: Vec2 = ZERO_VEC2
    count: int = 0
    is_valid: bool = False
    is_planar: bool = False
    sub_voxels: Dict[int, SubVoxel] = field(default_factory=dict)


VoxelMap = Dict[CoarseVoxelIndex, Voxel]
VoxelOccupancyMap = Dict[FineVoxelIndex, int]