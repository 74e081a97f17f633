[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsoax"
version = "0.1.0"
description = "Building blocks for curvilinear network tracking in image sequences: spatial bin grids, linear assignment, image I/O, interpolation, gradients and resampling."
requires-python = ">=3.10"
keywords = [
    "image processing",
    "filament tracking",
    "linear assignment",
    "spatial grid",
    "microscopy",
    "metaimage",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["tsoax"]

[tool.pytest.ini_options]
addopts = "-ra"
