[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liferewind"
version = "0.1.0"
description = "Grids, rules, validation and solution analysis for working backwards to predecessor states in Conway's Game of Life"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["game of life", "cellular automata", "conway", "predecessor", "validation"]
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
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["liferewind"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
