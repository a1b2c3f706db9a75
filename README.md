# ndtslam

The mapping core of a multi-resolution NDT (Normal Distributions Transform)
SLAM system for 2D point clouds. A coarse voxel grid covers the plane, and each
coarse voxel is split into a quadtree of `2 ** max_depth` by `2 ** max_depth`
fine cells. Rays from the sensor pose to each scan point update an occupancy
value per fine cell. The package also has a small utility for timing functions.

It has no dependencies beyond the Python standard library (Python 3.10 or later).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `ndtslam.types`: `Pose2` (a rigid 2D transform with `identity()`, `apply()`,
  `compose()`, `inverse()`, and `*` for a point or another pose), `TimedPose2`,
  `PointCloud`, `SubVoxel`, `Voxel`, and `voxel_index_hash()`, which pairs a
  signed 2D index into one non-negative integer.
- `ndtslam.ndt_slam`: `Parameters` (`voxel_size`, default 0.2, and
  `quadtree.max_depth`, default 2), `QuadtreeParameters`, `Condition`, and
  `NDTSLAM`.
- `ndtslam.time_monitor`: `TimeMonitor`, `TimeMonitorManager`, `monitor_time`,
  `FunctionStatistics`, `Timestamp`, `to_timestamp()`, and the helpers
  `compute_sum`, `compute_mean`, `compute_median` and
  `compute_standard_deviation`.
- `ndtslam.demo`: the `ndtslam-demo` command.

## Usage

```python
from ndtslam.ndt_slam import NDTSLAM, Parameters, QuadtreeParameters
from ndtslam.types import PointCloud

params = Parameters(voxel_size=0.4, quadtree=QuadtreeParameters(max_depth=2))
slam = NDTSLAM(params)

print(slam.coarse_index((1.0, 2.0)))        # index in the coarse grid
fine = slam.fine_index((1.05, 2.15))        # index of the finest quadtree cell
print(slam.coarse_voxel_index(fine))        # coarse voxel holding that cell
print(slam.local_index_in_coarse_voxel(fine))

slam.update(PointCloud(time=0.0, data=[(1.0, 0.5), (0.8, -0.3)]))
print(slam.pose)            # identity pose after the first scan
print(dict(slam.occupancy_map))
```

The first `update()` sets the pose to the identity and builds the map. Every
fine cell hit by a point has its occupancy raised by one (starting from 128, at
most 255). Every cell that a ray crosses and that no point hit is lowered by one.
Cells whose occupancy falls below 30 are dropped. `miss_voxel_indices(pose,
point)` returns the fine cells crossed by one ray, with both ends left out.
`voxel_map` and `occupancy_map` are read-only views.

Fine indices are turned into coarse and local indices by dividing toward zero,
so negative fine indices give negative local remainders.

### Timing functions

```python
from ndtslam.time_monitor import TimeMonitor, TimeMonitorManager, monitor_time

with TimeMonitor("my_module", "work"):
    ...  # timed block

@monitor_time(True)
def step():
    ...

print(TimeMonitorManager.instance().report())
```

A `TimeMonitor` records into the shared manager unless it is given one of its
own through `manager=`. The report lists every monitored name with its call
count and its minimum, maximum, mean, median, standard deviation and total time
in milliseconds, sorted by total time, largest first. The shared manager also
writes its report to standard error when the interpreter exits.

## Demo

```
ndtslam-demo
ndtslam-demo --voxel-size 0.4 --max-depth 2
```

Prints to standard error the coarse and fine indices of the points (1.0, 2.0)
and (1.05, 2.15), and the local index of the second. `--voxel-size` defaults to
0.4 and `--max-depth` to 2.

## What the package does not do

Only the first scan changes anything: later calls to `update()` neither estimate
a new pose nor update the map. There is no scan matching or pose optimisation,
and the `Voxel` and `SubVoxel` records are created empty; no means, covariances
or normals are computed for them. Maps are held in memory only and are not saved.