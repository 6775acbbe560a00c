"""
Immutable values produced by the builder.

``SqlExpression`` is a function name plus an ordered argument tuple; it
knows nothing about SQL dialects.  :func:`postgis_expressions.rendering.to_clause`
turns it into a SQLAlchemy clause.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .enums import GeometryType


@dataclass(frozen=True)
class RawSql:
    """SQL fragment placed into the argument list verbatim."""

    text: str


@dataclass(frozen=True)
class GeometryArgument:
    """
    Geometry-valued operand.

    ``value`` is opaque to the builder: a column, any SQLAlchemy clause, a
    nested :class:`SqlExpression`, a :class:`RawSql` fragment or a geometry
    literal (GeoJSON, shapely, GeoAlchemy2 element, EWKT string).
    """

    value: Any

    @classmethod
    def wrap(cls, value: Any) -> GeometryArgument:
        return value if isinstance(value, cls) else cls(value)


@dataclass(frozen=True)
class SqlExpression:
    """
    A spatial function call ready to be embedded in a query.

    Attributes:
        function_name: Canonical PostGIS function name, e.g. ``ST_Buffer``.
        arguments: Ordered arguments.  Geometry operands are wrapped in
            :class:`GeometryArgument`; everything else is a plain value or
            :class:`RawSql`.
        type_annotation: Overload the call resolves to, ``None`` when the
            function has a single signature.
    """

    function_name: str
    arguments: tuple[Any, ...] = ()
    type_annotation: GeometryType | None = None

    @property
    def arity(self) -> int:
        return len(self.arguments)

    @property
    def geometry_arguments(self) -> tuple[GeometryArgument, ...]:
        return tuple(a for a in self.arguments if isinstance(a, GeometryArgument))

    @property
    def scalar_arguments(self) -> tuple[Any, ...]:
        return tuple(
            a for a in self.arguments if not isinstance(a, GeometryArgument)
        )

    def __str__(self) -> str:
        rendered = ", ".join(_describe(a) for a in self.arguments)
        call = f"{self.function_name}({rendered})"
        if self.type_annotation is not None:
            return f"{call}::{self.type_annotation.value}"
        return call


def _describe(argument: Any) -> str:
    if isinstance(argument, GeometryArgument):
        return _describe(argument.value)
    if isinstance(argument, RawSql):
        return argument.text
    if isinstance(argument, Enum):
        return repr(argument.value)
    if argument is None or isinstance(argument, str | int | float):
        return repr(argument)
    return str(argument)
