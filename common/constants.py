"""
Centralized constants for the SRS (Spatial Reasoning System) project.

This module provides a single source of truth for the numeric tolerances,
sector geometry and cache defaults used by the relation engines and the
query dispatcher. Keeping the geometric tolerance in one place keeps the
EQ/PP/PO decision boundaries consistent across both engines.

Organization:
    - Geometric Tolerance: Shared epsilon for all floating-point predicates
    - Orientation Sectors: Compass sector layout for directional reasoning
    - Boundary Sampling: Defaults for polygon boundary sampling
    - Cache Configuration: TTL and size limits for query result caching

Usage:
    from common.constants import GEOMETRY_EPSILON, SECTOR_WIDTH_DEGREES

Note:
    GEOMETRY_EPSILON is intentionally not part of the YAML configuration.
    Cache and sampling defaults can be overridden via
    component_42_spatial_config.SpatialReasoningConfig.
"""

# =============================================================================
# Geometric Tolerance
# =============================================================================

GEOMETRY_EPSILON: float = 1e-9
"""
Absolute tolerance for every geometric equality comparison.

- |a - b| <= 1e-9: values are treated as equal (boundary contact)
- |a - b| >  1e-9: values are treated as distinct (true separation/overlap)

Rationale:
    Coordinates are expected in the range of typical scene units (0.1 to
    10^4). At that magnitude double precision noise from a handful of
    multiply/add operations stays several orders of magnitude below 1e-9,
    while genuine gaps between shapes are far larger.

Used by:
    - component_42_geometry_utils.py: All tolerance-aware predicates
    - component_42_spatial_shapes.py: Degenerate polygon detection
    - component_42_topological_engine.py: Containment and overlap tests
    - component_42_directional_engine.py: Zero-length vector detection
"""

AREA_RELATIVE_TOLERANCE: float = 1e-9
"""
Relative tolerance for comparing areas when deciding EQ.

Areas scale quadratically with coordinates, so a purely absolute epsilon
would be too strict for large shapes. Area comparison uses
math.isclose(rel_tol=AREA_RELATIVE_TOLERANCE, abs_tol=GEOMETRY_EPSILON).
"""

# =============================================================================
# Orientation Sectors
# =============================================================================

FULL_CIRCLE_DEGREES: float = 360.0

SECTOR_COUNT: int = 8
"""Number of compass sectors (N, NE, E, SE, S, SW, W, NW)."""

SECTOR_WIDTH_DEGREES: float = FULL_CIRCLE_DEGREES / SECTOR_COUNT
"""
Angular width of each compass sector (45 degrees).

Each sector is centred on its cardinal/diagonal direction and covers the
half-open interval [center - 22.5, center + 22.5).
"""

# =============================================================================
# Boundary Sampling
# =============================================================================

BOUNDARY_SAMPLES_PER_EDGE: int = 8
"""
Number of interior sample points taken on each polygon edge.

Sampled points complement the vertex tests in polygon/polygon containment
and overlap checks, covering non-convex configurations where all vertices
of one polygon touch the other's boundary.
"""

# =============================================================================
# Cache Configuration
# =============================================================================

CACHE_TTL_SPATIAL_QUERIES: int = 300
"""
TTL for the dispatcher's query result cache (5 minutes).

Cache keys embed the shape store revision, so entries computed before an
insertion or removal are never served again; the TTL only bounds memory.

Used by:
    - component_42_query_dispatcher.py: Query result caching
"""

CACHE_MAXSIZE_SPATIAL_QUERIES: int = 256
"""Maximum number of cached query results."""
