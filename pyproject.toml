[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netinfer"
version = "1.0.8"
description = "Numerical building blocks for directed network inference: supernormalization, histogram bin ranges, incremental cycle detection and matrix utilities."
requires-python = ">=3.10"
keywords = [
    "gene regulatory network",
    "network inference",
    "supernormalization",
    "histogram",
    "cycle detection",
    "topological order",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["netinfer"]

[tool.pytest.ini_options]
addopts = "-ra"
