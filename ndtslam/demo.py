"""Command that prints voxel indices of two sample points."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .ndt_slam import NDTSLAM, Parameters, QuadtreeParameters


def _fmt(index) -> str:
    return f"({index[0]}, {index[1]})"


def main(argv: Optional[List[str]] = None) -> int:
    """Print coarse, fine and local indices of two sample points to stderr."""
    parser = argparse.ArgumentParser(description="Show voxel indices of sample points.")
    parser.add_argument("--voxel-size", type=float, default=0.4)
    parser.add_argument("--max-depth", type=int, default=2)
    args = parser.parse_args(argv)

    slam = NDTSLAM(
        Parameters(
            voxel_size=args.voxel_size,
            quadtree=QuadtreeParameters(max_depth=args.max_depth),
        )
    )

    p1 = (1.0, 2.0)
    p2 = (1.05, 2.15)
    out = sys.stderr

    print(f"Coarse Voxel Index: {_fmt(slam.coarse_index(p1))}", file=out)
    print(f"Fine Voxel Index: {_fmt(slam.fine_index(p1))}", file=out)

    fine2 = slam.fine_index(p2)
    print(f"Coarse Voxel Index: {_fmt(slam.coarse_index(p2))}", file=out)
    print(f"Fine Voxel Index: {_fmt(fine2)}", file=out)
    print(f"Local Index: {_fmt(slam.local_index_in_coarse_voxel(fine2))}", file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())