"""
Registry of spatial operations.

Provides ``SpatialOperationRegistry`` and ``build_default_registry()``,
which holds the PostGIS geometry-processing catalogue.  Each entry is a
declarative :class:`~postgis_expressions.schema.SpatialOperation`; new
functions are added by registering another description, not by writing a
builder method.

Defaults are the ones documented by PostGIS and only matter when a later
optional parameter forces an earlier one to be spelled out.
"""

from __future__ import annotations

from collections.abc import Iterator

from .enums import DelaunayTrianglesOutput, EndCap, Join, Side
from .exceptions import OperationNotFoundError
from .schema import (
    Parameter,
    SpatialOperation,
    StyleParameterGroup,
    TypeSelector,
    optional,
    required,
)


class SpatialOperationRegistry:
    """
    Registry of :class:`SpatialOperation` instances keyed by name.

    Usage::

        registry = SpatialOperationRegistry()
        registry.register(SpatialOperation("convex_hull", "ST_ConvexHull"))

        operation = registry.require("convex_hull")
    """

    def __init__(self) -> None:
        self._operations: dict[str, SpatialOperation] = {}

    # -- registration --------------------------------------------------------

    def register(self, operation: SpatialOperation) -> None:
        """Register an operation, replacing any previous one with its name."""
        self._operations[operation.name] = operation

    def register_all(self, *operations: SpatialOperation) -> None:
        for operation in operations:
            self.register(operation)

    def unregister(self, name: str) -> None:
        self._operations.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: str) -> SpatialOperation | None:
        """Return the registered operation or ``None``."""
        return self._operations.get(name)

    def has(self, name: str) -> bool:
        return name in self._operations

    def require(self, name: str) -> SpatialOperation:
        """
        Return the registered operation.

        Raises:
            OperationNotFoundError: If no operation has that name.
        """
        operation = self.get(name)
        if operation is None:
            raise OperationNotFoundError(name, list(self._operations))
        return operation

    @property
    def names(self) -> list[str]:
        return sorted(self._operations)

    def __iter__(self) -> Iterator[SpatialOperation]:
        return iter(self._operations.values())

    def __len__(self) -> int:
        return len(self._operations)


# ---------------------------------------------------------------------------
# Default catalogue
# ---------------------------------------------------------------------------

_QUAD_SEGS = optional("style_quad_segs", int)
_MITRE_LEVEL = optional("style_mitre_level", float)
_JOIN = optional("style_join", Join)

BUFFER = SpatialOperation(
    "buffer",
    "ST_Buffer",
    required=(required("radius"),),
    style=StyleParameterGroup(
        members=(
            ("quad_segs", _QUAD_SEGS),
            ("endcap", optional("style_end_cap", EndCap)),
            ("join", _JOIN),
            ("mitre_level", _MITRE_LEVEL),
            ("side", optional("style_side", Side)),
        ),
        exclusive_with=optional("num_seg_quarter_circle", int),
    ),
    description=(
        "Polygon covering all points within ``radius`` of the geometry. "
        "Negative radii shrink polygons."
    ),
)

BUILD_AREA = SpatialOperation(
    "build_area",
    "ST_BuildArea",
    description="Areal geometry formed by the linework of the input.",
)

CENTROID = SpatialOperation(
    "centroid",
    "ST_Centroid",
    type_selector=TypeSelector(flag=optional("use_spheroid", bool, True)),
    description=(
        "Geometric center of mass. Passing ``use_spheroid`` selects the "
        "geography overload."
    ),
)

CHAIKIN_SMOOTHING = SpatialOperation(
    "chaikin_smoothing",
    "ST_ChaikinSmoothing",
    optional=(
        optional("iterations", int, 1),
        optional("preserve_end_points", bool, False),
    ),
    description="Smoothed geometry using Chaikin's algorithm.",
)

CONCAVE_HULL = SpatialOperation(
    "concave_hull",
    "ST_ConcaveHull",
    required=(required("pctconvex"),),
    optional=(optional("allow_holes", bool, False),),
    description="Possibly concave geometry enclosing the input vertices.",
)

CONVEX_HULL = SpatialOperation(
    "convex_hull",
    "ST_ConvexHull",
    description="Smallest convex geometry enclosing the input.",
)

DELAUNAY_TRIANGLES = SpatialOperation(
    "delaunay_triangles",
    "ST_DelaunayTriangles",
    optional=(
        optional("tolerance", float, 0.0),
        optional("output", DelaunayTrianglesOutput, DelaunayTrianglesOutput.POLYGONS),
    ),
    description="Delaunay triangulation of the input vertices.",
)

FILTER_BY_M = SpatialOperation(
    "filter_by_m",
    "ST_FilterByM",
    required=(required("min"),),
    optional=(
        optional("max", float),
        optional("return_m", bool, False),
    ),
    description="Vertices whose M value lies within [min, max].",
)

GENERATE_POINTS = SpatialOperation(
    "generate_points",
    "ST_GeneratePoints",
    required=(required("number_of_points", int),),
    optional=(optional("seed", int),),
    description="Pseudo-random points inside the input area.",
)

GEOMETRIC_MEDIAN = SpatialOperation(
    "geometric_median",
    "ST_GeometricMedian",
    optional=(
        optional("tolerance", float),
        optional("max_iterations", int, 10000),
        optional("fail_if_not_converged", bool, False),
    ),
    description="Approximate geometric median of a MultiPoint (Weiszfeld).",
)

LINE_MERGE = SpatialOperation(
    "line_merge",
    "ST_LineMerge",
    optional=(optional("directed", bool, False),),
    description="Lines of a MultiLineString joined at 2-way intersections.",
)

MINIMUM_BOUNDING_CIRCLE = SpatialOperation(
    "minimum_bounding_circle",
    "ST_MinimumBoundingCircle",
    optional=(optional("number_of_segments_per_quarter_circle", int, 48),),
    description="Smallest circle polygon containing the geometry.",
)

ORIENTED_ENVELOPE = SpatialOperation(
    "oriented_envelope",
    "ST_OrientedEnvelope",
    description="Minimum-area rotated rectangle enclosing the geometry.",
)

OFFSET_CURVE = SpatialOperation(
    "offset_curve",
    "ST_OffsetCurve",
    required=(required("signed_distance"),),
    # quad_segs has no positional form here, so the count lives in the group
    style=StyleParameterGroup(
        members=(
            ("quad_segs", optional("num_seg_quarter_circle", int)),
            ("join", _JOIN),
            ("mitre_level", _MITRE_LEVEL),
        ),
    ),
    description="Line offset at a signed distance from the input line.",
)

POINT_ON_SURFACE = SpatialOperation(
    "point_on_surface",
    "ST_PointOnSurface",
    description="Point guaranteed to lie in the interior of a surface.",
)

REDUCE_PRECISION = SpatialOperation(
    "reduce_precision",
    "ST_ReducePrecision",
    required=(required("grid_size"),),
    description="Valid geometry with points rounded to the grid size.",
)

SHARED_PATHS = SpatialOperation(
    "shared_paths",
    "ST_SharedPaths",
    geometry_args=("geometry_a", "geometry_b"),
    description="Paths shared by two linear geometries.",
)

SIMPLIFY = SpatialOperation(
    "simplify",
    "ST_Simplify",
    required=(required("tolerance"),),
    optional=(optional("preserve_collapsed", bool, False),),
    description="Douglas-Peucker simplification.",
)

SIMPLIFY_POLYGON_HULL = SpatialOperation(
    "simplify_polygon_hull",
    "ST_SimplifyPolygonHull",
    required=(required("vertex_fraction"),),
    optional=(optional("is_outer", bool, True),),
    description="Topology-preserving outer or inner hull of a polygon.",
)

SIMPLIFY_PRESERVE_TOPOLOGY = SpatialOperation(
    "simplify_preserve_topology",
    "ST_SimplifyPreserveTopology",
    required=(required("tolerance"),),
    description="Douglas-Peucker simplification that keeps polygons valid.",
)

SIMPLIFY_VW = SpatialOperation(
    "simplify_vw",
    "ST_SimplifyVW",
    required=(required("tolerance"),),
    description="Visvalingam-Whyatt simplification.",
)

SET_EFFECTIVE_AREA = SpatialOperation(
    "set_effective_area",
    "ST_SetEffectiveArea",
    optional=(
        optional("threshold", float, 0.0),
        optional("set_area", int, 1),
    ),
    description="Stores the Visvalingam-Whyatt effective area as M values.",
)

TRIANGULATE_POLYGON = SpatialOperation(
    "triangulate_polygon",
    "ST_TriangulatePolygon",
    description="Constrained Delaunay triangulation of polygons.",
)


def _voronoi(name: str, function_name: str, description: str) -> SpatialOperation:
    return SpatialOperation(
        name,
        function_name,
        optional=(
            optional("tolerance", float, 0.0),
            Parameter("extend_to", geometry=True),
        ),
        description=description,
    )


VORONOI_LINES = _voronoi(
    "voronoi_lines",
    "ST_VoronoiLines",
    "Boundaries between the cells of the Voronoi diagram of the vertices.",
)

VORONOI_POLYGONS = _voronoi(
    "voronoi_polygons",
    "ST_VoronoiPolygons",
    "Cells of the Voronoi diagram of the vertices.",
)

DEFAULT_OPERATIONS: tuple[SpatialOperation, ...] = (
    BUFFER,
    BUILD_AREA,
    CENTROID,
    CHAIKIN_SMOOTHING,
    CONCAVE_HULL,
    CONVEX_HULL,
    DELAUNAY_TRIANGLES,
    FILTER_BY_M,
    GENERATE_POINTS,
    GEOMETRIC_MEDIAN,
    LINE_MERGE,
    MINIMUM_BOUNDING_CIRCLE,
    ORIENTED_ENVELOPE,
    OFFSET_CURVE,
    POINT_ON_SURFACE,
    REDUCE_PRECISION,
    SHARED_PATHS,
    SIMPLIFY,
    SIMPLIFY_POLYGON_HULL,
    SIMPLIFY_PRESERVE_TOPOLOGY,
    SIMPLIFY_VW,
    SET_EFFECTIVE_AREA,
    TRIANGULATE_POLYGON,
    VORONOI_LINES,
    VORONOI_POLYGONS,
)


def build_default_registry() -> SpatialOperationRegistry:
    """Create a registry holding the full geometry-processing catalogue."""
    registry = SpatialOperationRegistry()
    registry.register_all(*DEFAULT_OPERATIONS)
    return registry
