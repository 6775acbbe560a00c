"""Typed PostGIS spatial SQL expression builder for SQLAlchemy."""

from __future__ import annotations

from .builder import SpatialExpressionBuilder
from .compat import HAS_GEOJSON_PYDANTIC, HAS_SHAPELY
from .dimension import Dimension
from .enums import DelaunayTrianglesOutput, EndCap, GeometryType, Join, Side
from .exceptions import (
    MissingParameterError,
    MutuallyExclusiveParametersError,
    OperationNotFoundError,
    SpatialExpressionError,
    UnknownParameterError,
    ValidationError,
)
from .expression import GeometryArgument, RawSql, SqlExpression
from .operations import SpatialOperationRegistry, build_default_registry
from .rendering import geometry_clause, to_clause
from .schema import Parameter, SpatialOperation, StyleParameterGroup, TypeSelector
from .settings import BuilderSettings

__all__ = [
    # Builder
    "SpatialExpressionBuilder",
    "BuilderSettings",
    # Schema / registry
    "Parameter",
    "SpatialOperation",
    "StyleParameterGroup",
    "TypeSelector",
    "SpatialOperationRegistry",
    "build_default_registry",
    # Expressions
    "SqlExpression",
    "GeometryArgument",
    "RawSql",
    # Rendering
    "to_clause",
    "geometry_clause",
    # Enums
    "Dimension",
    "DelaunayTrianglesOutput",
    "EndCap",
    "GeometryType",
    "Join",
    "Side",
    # Exceptions
    "SpatialExpressionError",
    "ValidationError",
    "MissingParameterError",
    "MutuallyExclusiveParametersError",
    "UnknownParameterError",
    "OperationNotFoundError",
    # Soft dependencies
    "HAS_SHAPELY",
    "HAS_GEOJSON_PYDANTIC",
]
