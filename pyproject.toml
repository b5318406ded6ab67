[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "armplanner"
version = "0.1.0"
description = "Trajectory planning and visualization for a planar three-link robot arm tracing a circle"
requires-python = ">=3.10"
keywords = ["robotics", "kinematics", "trajectory", "planning", "inverse-kinematics", "dijkstra"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "scipy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
armplanner = "armplanner.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["armplanner"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
