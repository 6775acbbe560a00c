"""
SQLAlchemy rendering of :class:`~postgis_expressions.expression.SqlExpression`.

Scalars become bound parameters, geometry literals are handed to PostGIS
constructors, and geography-annotated expressions cast their geometry
operands to ``geography``.  The resulting clause is never executed here.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from geoalchemy2 import Geography, Geometry
from geoalchemy2.elements import WKBElement, WKTElement
from sqlalchemy import cast, func, literal, literal_column
from sqlalchemy.sql.elements import ClauseElement
from sqlalchemy.sql.functions import Function

from .compat import HAS_GEOJSON_PYDANTIC, HAS_SHAPELY
from .enums import GeometryType
from .exceptions import ValidationError
from .expression import GeometryArgument, RawSql, SqlExpression
from .settings import DEFAULT_SETTINGS, BuilderSettings

if HAS_SHAPELY:
    from geoalchemy2.shape import from_shape
    from shapely.geometry.base import BaseGeometry

if HAS_GEOJSON_PYDANTIC:
    from geojson_pydantic.geometries import parse_geometry_obj


def to_clause(
    expression: SqlExpression,
    settings: BuilderSettings | None = None,
) -> Function[Any]:
    """
    Render a spatial expression as a SQLAlchemy function clause.

    Args:
        expression: Value produced by the builder.
        settings: Schema qualification and literal SRID.

    Returns:
        A ``Function`` typed as GeoAlchemy2 ``Geometry`` or ``Geography``.
    """
    settings = settings or DEFAULT_SETTINGS
    geography = expression.type_annotation is GeometryType.GEOGRAPHY
    arguments = [
        _render_argument(argument, settings, geography)
        for argument in expression.arguments
    ]
    return_type = (
        Geography(geometry_type=None) if geography else Geometry(geometry_type=None)
    )

    generator = func
    if settings.schema:
        generator = getattr(func, settings.schema)
    function = getattr(generator, expression.function_name)
    return function(*arguments, type_=return_type)  # type: ignore[no-any-return]


def _render_argument(
    argument: Any,
    settings: BuilderSettings,
    geography: bool,
) -> Any:
    if isinstance(argument, GeometryArgument):
        clause = geometry_clause(argument.value, settings)
        if geography:
            return cast(clause, Geography(geometry_type=None))
        return clause
    if isinstance(argument, RawSql):
        return literal_column(argument.text)
    if isinstance(argument, SqlExpression):
        return to_clause(argument, settings)
    if isinstance(argument, Enum):
        return argument.value
    return argument


def geometry_clause(value: Any, settings: BuilderSettings | None = None) -> Any:
    """
    Turn a geometry operand into a SQL clause.

    Columns and other clauses pass through unchanged.  GeoJSON (dicts or
    objects exposing ``__geo_interface__``) is bound as JSON text and parsed
    by ``ST_GeomFromGeoJSON``.  GeoAlchemy2 elements, shapely geometries and
    (E)WKT strings are bound through the GeoAlchemy2 ``Geometry`` type.
    """
    settings = settings or DEFAULT_SETTINGS

    if isinstance(value, ClauseElement) or hasattr(value, "__clause_element__"):
        return value
    if isinstance(value, SqlExpression):
        return to_clause(value, settings)
    if isinstance(value, RawSql):
        return literal_column(value.text)
    if isinstance(value, WKTElement | WKBElement):
        return literal(value, Geometry())
    if HAS_SHAPELY and isinstance(value, BaseGeometry):
        return literal(from_shape(value, srid=settings.srid), Geometry())
    if isinstance(value, str):
        return literal(value, Geometry())
    if isinstance(value, dict) or hasattr(value, "__geo_interface__"):
        geojson = value if isinstance(value, dict) else value.__geo_interface__
        return func.ST_SetSRID(
            func.ST_GeomFromGeoJSON(_geojson_to_str(geojson)), settings.srid
        )
    raise ValidationError(
        f"Unsupported geometry operand of type {type(value).__name__}"
    )


def _geojson_to_str(value: dict[str, Any]) -> str:
    """Validate a GeoJSON geometry mapping and serialise it."""
    if "type" not in value:
        raise ValidationError("GeoJSON geometry requires a 'type' member")
    if HAS_GEOJSON_PYDANTIC:
        try:
            geometry = parse_geometry_obj(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid GeoJSON geometry: {exc}") from exc
        return geometry.model_dump_json(exclude_none=True)
    return json.dumps(value)
