"""Voxel indexing, occupancy mapping and timing utilities for 2D NDT SLAM."""

__version__ = "0.1.0"
__all__ = ["types", "time_monitor", "ndt_slam", "demo"]