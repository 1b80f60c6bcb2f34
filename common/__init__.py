"""
Common utilities and constants for the SRS project.

This package provides the shared geometric tolerance, orientation sector
layout and cache defaults used throughout the SRS codebase.
"""

from common.constants import *

__all__ = [
    # Geometric Tolerance
    "GEOMETRY_EPSILON",
    "AREA_RELATIVE_TOLERANCE",
    # Orientation Sectors
    "FULL_CIRCLE_DEGREES",
    "SECTOR_COUNT",
    "SECTOR_WIDTH_DEGREES",
    # Boundary Sampling
    "BOUNDARY_SAMPLES_PER_EDGE",
    # Cache Configuration
    "CACHE_TTL_SPATIAL_QUERIES",
    "CACHE_MAXSIZE_SPATIAL_QUERIES",
]
