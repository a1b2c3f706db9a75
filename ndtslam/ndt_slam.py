"""Multi-resolution NDT SLAM core: voxel indexing and occupancy map updates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional

from .types import (
    CoarseVoxelIndex,
    FineVoxelIndex,
    LocalIndex,
    PointCloud,
    Pose2,
    Vec2,
    Voxel,
)

INITIAL_OCCUPANCY = 128
MAX_OCCUPANCY = 255
MIN_OCCUPANCY = 30
_DIRECTION_EPSILON = 1e-6


@dataclass
class QuadtreeParameters:
    """Settings of the quadtree that splits every coarse voxel."""

    max_depth: int = 2


@dataclass
class Parameters:
    """Settings of the SLAM core."""

    voxel_size: float = 0.2
    quadtree: QuadtreeParameters = field(default_factory=QuadtreeParameters)


@dataclass
class Condition:
    """Run-time state flags."""

    is_initialized: bool = False


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class NDTSLAM:
    """Keeps a coarse voxel map and a fine occupancy map built from 2D scans."""

    def __init__(self, parameters: Optional[Parameters] = None) -> None:
        self.parameters = parameters if parameters is not None else Parameters()
        self._subdivisions = 1 << self.parameters.quadtree.max_depth
        self.fine_voxel_size = self.parameters.voxel_size / self._subdivisions
        self._voxel_map: dict = {}
        self._occupancy_map: dict = {}
        self._pose: Optional[Pose2] = None
        self.condition = Condition()

    @property
    def pose(self) -> Optional[Pose2]:
        """Current pose estimate, ``None`` before the first scan."""
        return self._pose

    @property
    def voxel_map(self) -> Mapping[CoarseVoxelIndex, Voxel]:
        """Read-only view of the coarse voxel map."""
        return MappingProxyType(self._voxel_map)

    @property
    def occupancy_map(self) -> Mapping[FineVoxelIndex, int]:
        """Read-only view of the fine occupancy map."""
        return MappingProxyType(self._occupancy_map)

    def update(self, point_cloud: PointCloud) -> None:
        """Feed one scan; the first scan initialises the map at the origin."""
        if not self.condition.is_initialized:
            self._pose = Pose2.identity()
            self._update_map(self._pose, point_cloud)
            self.condition.is_initialized = True

    def _update_map(self, pose: Pose2, point_cloud: PointCloud) -> None:
        hit_indices = set()
        miss_indices = set()
        for point in point_cloud.data:
            global_point = pose * point
            hit_indices.add(self.fine_index(global_point))
            miss_indices.update(self.miss_voxel_indices(pose, global_point))

        for fine in hit_indices:
            occupancy = self._occupancy_map.get(fine, INITIAL_OCCUPANCY)
            self._occupancy_map[fine] = min(occupancy + 1, MAX_OCCUPANCY)
            self._voxel_map.setdefault(self.coarse_voxel_index(fine), Voxel())

        for fine in miss_indices - hit_indices:
            occupancy = self._occupancy_map.get(fine, INITIAL_OCCUPANCY)
            self._occupancy_map[fine] = max(occupancy - 1, 0)

        empty = [idx for idx, occ in self._occupancy_map.items() if occ < MIN_OCCUPANCY]
        for idx in empty:
            del self._occupancy_map[idx]
            self._voxel_map.pop(idx, None)

    def miss_voxel_indices(self, pose: Pose2, global_point: Vec2) -> List[FineVoxelIndex]:
        """Fine cells crossed by the ray from the pose to the point, endpoints excluded."""
        origin = pose.translation
        current = list(self.fine_index(origin))
        end_index = self.fine_index(global_point)

        dx = global_point[0] - origin[0]
        dy = global_point[1] - origin[1]
        remaining = math.hypot(dx, dy)
        if remaining == 0.0:
            return []
        direction = (dx / remaining, dy / remaining)

        steps = tuple(1 if d > 0 else -1 for d in direction)
        deltas = tuple(
            math.inf if abs(d) < _DIRECTION_EPSILON else self.fine_voxel_size / abs(d)
            for d in direction
        )
        t_max = [0.0, 0.0]

        misses: List[FineVoxelIndex] = []
        while remaining > 0.0:
            axis = 0 if t_max[0] < t_max[1] else 1
            t_max[axis] += deltas[axis]
            remaining -= deltas[axis]
            current[axis] += steps[axis]
            index = (current[0], current[1])
            if remaining <= 0.0 or index == end_index:
                break
            misses.append(index)
        return misses

    def coarse_index(self, point: Vec2) -> CoarseVoxelIndex:
        """Index of the coarse voxel holding the point."""
        inverse = 1.0 / self.parameters.voxel_size
        return (math.floor(point[0] * inverse), math.floor(point[1] * inverse))

    def fine_index(self, point: Vec2) -> FineVoxelIndex:
        """Index of the finest quadtree cell holding the point."""
        inverse = 1.0 / self.fine_voxel_size
        return (math.floor(point[0] * inverse), math.floor(point[1] * inverse))

    def coarse_voxel_index(self, fine_index: FineVoxelIndex) -> CoarseVoxelIndex:
        """Coarse voxel index of a fine index, dividing toward zero."""
        d = self._subdivisions
        return (_trunc_div(fine_index[0], d), _trunc_div(fine_index[1], d))

    def local_index_in_coarse_voxel(self, fine_index: FineVoxelIndex) -> LocalIndex:
        """Position of a fine cell inside its coarse voxel, remainder of the toward-zero division."""
        d = self._subdivisions
        return tuple(v - d * _trunc_div(v, d) for v in fine_index)  # type: ignore[return-value]