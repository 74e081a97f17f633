"""Spatial bin grids, linear assignment, image I/O, interpolation, gradients and resampling for curvilinear network tracking."""

__version__ = "0.1.0"