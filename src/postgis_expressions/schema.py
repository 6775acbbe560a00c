"""
Declarative parameter schema for spatial operations.

A :class:`SpatialOperation` describes one PostGIS function: its geometry
operands, its required scalars, an optional style-string group, trailing
optional scalars and an optional geometry/geography type selector.  The
:class:`~postgis_expressions.builder.SpatialExpressionBuilder` consumes these
descriptions; no per-function code exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .enums import GeometryType
from .exceptions import ValidationError


@dataclass(frozen=True)
class Parameter:
    """
    One named function parameter.

    Attributes:
        name: Keyword accepted by the builder.
        value_type: Python type of the value.  Enum types coerce wire values
            (``"round"`` → ``EndCap.ROUND``).
        required: Whether the caller must supply it.
        default: PostGIS default, only used to fill a positional gap when a
            later optional parameter is present.
        geometry: ``True`` for geometry-valued operands (e.g. ``extend_to``).
    """

    name: str
    value_type: type[Any] = object
    required: bool = False
    default: Any = None
    geometry: bool = False

    @property
    def is_enum(self) -> bool:
        return isinstance(self.value_type, type) and issubclass(
            self.value_type, Enum
        )

    def coerce(self, value: Any) -> Any:
        """Convert wire values of enum-typed parameters to members."""
        if not self.is_enum or isinstance(value, self.value_type):
            return value
        try:
            return self.value_type(value)
        except ValueError as exc:
            allowed = ", ".join(repr(m.value) for m in self.value_type)
            raise ValidationError(
                f"Invalid value {value!r} for '{self.name}'; "
                f"expected one of {allowed}",
                parameter=self.name,
            ) from exc


def required(name: str, type_: type[Any] = float) -> Parameter:
    return Parameter(name, type_, required=True)


def optional(
    name: str,
    type_: type[Any] = float,
    default: Any = None,
    *,
    geometry: bool = False,
) -> Parameter:
    return Parameter(name, type_, default=default, geometry=geometry)


@dataclass(frozen=True)
class StyleParameterGroup:
    """
    Optional parameters encoded as one ``key=value,key=value`` argument.

    ``members`` pairs each style key with the parameter feeding it, in the
    order keys appear in the rendered string.  ``exclusive_with`` names a
    shortcut parameter that fills the same role positionally and therefore
    cannot be combined with any member.
    """

    members: tuple[tuple[str, Parameter], ...]
    exclusive_with: Parameter | None = None

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(param.name for _, param in self.members)


@dataclass(frozen=True)
class TypeSelector:
    """
    Chooses between the geometry and geography overloads of a function.

    ``explicit`` carries a :class:`GeometryType`.  When it is absent, the mere
    presence of ``flag`` selects the geography overload.  ``flag`` is emitted
    as an argument only for geography and defaults to ``flag.default``.
    """

    flag: Parameter
    explicit: Parameter = field(
        default_factory=lambda: Parameter("geometry_type", GeometryType)
    )


@dataclass(frozen=True)
class SpatialOperation:
    """A PostGIS function and the shape of its argument list."""

    name: str
    function_name: str
    geometry_args: tuple[str, ...] = ("geometry",)
    required: tuple[Parameter, ...] = ()
    style: StyleParameterGroup | None = None
    optional: tuple[Parameter, ...] = ()
    type_selector: TypeSelector | None = None
    description: str = ""

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Every keyword the operation accepts, in argument order."""
        names = [p.name for p in self.required]
        if self.style is not None:
            names.extend(self.style.parameter_names)
            if self.style.exclusive_with is not None:
                names.append(self.style.exclusive_with.name)
        names.extend(p.name for p in self.optional)
        if self.type_selector is not None:
            names.extend(
                (self.type_selector.flag.name, self.type_selector.explicit.name)
            )
        return tuple(names)
