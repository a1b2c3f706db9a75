[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ndtslam"
version = "0.1.0"
description = "Voxel indexing and occupancy mapping core for multi-resolution NDT SLAM on 2D point clouds, with function timing utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["slam", "ndt", "voxel", "occupancy", "point-cloud", "robotics", "quadtree"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ndtslam-demo = "ndtslam.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["ndtslam"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
