[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dqcoppeliasim"
version = "0.1.0"
description = "Dual-quaternion client layer for reading and setting object poses and joint states in CoppeliaSim scenes"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "dual quaternion", "coppeliasim", "simulation", "kinematics"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[tool.hatch.build.targets.wheel]
packages = ["dqcoppeliasim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
