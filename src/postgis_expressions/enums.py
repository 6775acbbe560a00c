"""Wire-value enums for PostGIS function parameters.

Member values are passed verbatim to PostGIS and must match the vocabulary
its function signatures accept.
"""

from enum import Enum


class EndCap(str, Enum):
    """Buffer end cap style (``endcap=`` in the buffer style string)."""

    ROUND = "round"
    FLAT = "flat"
    SQUARE = "square"


class Join(str, Enum):
    """Join style for buffers and offset curves (``join=``)."""

    ROUND = "round"
    MITRE = "mitre"
    BEVEL = "bevel"


class Side(str, Enum):
    """Side of a line to buffer (``side=``)."""

    BOTH = "both"
    LEFT = "left"
    RIGHT = "right"


class DelaunayTrianglesOutput(int, Enum):
    """``flags`` argument of ST_DelaunayTriangles."""

    POLYGONS = 0
    MULTILINESTRING = 1
    TIN = 2


class GeometryType(str, Enum):
    """Spatial type an expression is evaluated as."""

    GEOMETRY = "geometry"
    GEOGRAPHY = "geography"
