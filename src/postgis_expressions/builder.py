"""
Generic builder for PostGIS function-call expressions.

Example::

    builder = SpatialExpressionBuilder()

    expr = builder.build("buffer", [Place.geom], radius=5.0, style_end_cap="round")
    # → ST_Buffer(places.geom, 5.0, 'endcap=round')

    expr = builder.centroid(Place.geom, use_spheroid=False)
    # → ST_Centroid(places.geom, False)::geography

    stmt = select(builder.clause("convex_hull", [Place.geom]))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from .enums import GeometryType
from .exceptions import (
    MissingParameterError,
    MutuallyExclusiveParametersError,
    UnknownParameterError,
    ValidationError,
)
from .expression import GeometryArgument, SqlExpression
from .operations import build_default_registry
from .rendering import to_clause
from .settings import DEFAULT_SETTINGS, BuilderSettings

if TYPE_CHECKING:
    from sqlalchemy.sql.functions import Function

    from .operations import SpatialOperationRegistry
    from .schema import Parameter, SpatialOperation, TypeSelector

logger = logging.getLogger("postgis_expressions.builder")


class SpatialExpressionBuilder:
    """
    Builds :class:`SqlExpression` values from declarative operation schemas.

    The builder is stateless apart from its registry and settings, both
    read-only, so one instance can be shared freely.  Every registered
    operation is also reachable as a method: ``builder.simplify(geom,
    tolerance=0.5)``.
    """

    def __init__(
        self,
        registry: SpatialOperationRegistry | None = None,
        settings: BuilderSettings | None = None,
    ) -> None:
        self._registry = registry if registry is not None else build_default_registry()
        self._settings = settings or DEFAULT_SETTINGS

    @property
    def registry(self) -> SpatialOperationRegistry:
        return self._registry

    @property
    def settings(self) -> BuilderSettings:
        return self._settings

    # -- building ------------------------------------------------------------

    def build(
        self,
        operation: SpatialOperation | str,
        geometry_args: Sequence[Any] | Any = (),
        /,
        **params: Any,
    ) -> SqlExpression:
        """
        Assemble the argument list for ``operation``.

        ``None`` counts as absent for every parameter.

        Raises:
            OperationNotFoundError: If ``operation`` is an unknown name.
            ValidationError: On unknown or missing parameters, a wrong
                number of geometry operands, or mutually exclusive
                parameters supplied together.
        """
        op = (
            self._registry.require(operation)
            if isinstance(operation, str)
            else operation
        )
        self._check_known(op, params)
        present = {name: value for name, value in params.items() if value is not None}

        geometries = _as_sequence(geometry_args)
        if len(geometries) != len(op.geometry_args):
            raise ValidationError(
                f"Operation '{op.name}' takes {len(op.geometry_args)} geometry "
                f"operand(s) ({', '.join(op.geometry_args)}), got {len(geometries)}"
            )

        style_argument = self._style_argument(op, present)

        arguments: list[Any] = [GeometryArgument.wrap(g) for g in geometries]
        for param in op.required:
            if param.name not in present:
                raise MissingParameterError(op.name, param.name)
            arguments.append(param.coerce(present[param.name]))

        if style_argument is not None:
            arguments.append(style_argument)
        shortcut = op.style.exclusive_with if op.style is not None else None
        if shortcut is not None and shortcut.name in present:
            arguments.append(shortcut.coerce(present[shortcut.name]))

        arguments.extend(_optional_arguments(op.optional, present))

        type_annotation = None
        if op.type_selector is not None:
            type_annotation, variant_arguments = _resolve_variant(
                op.type_selector, present
            )
            arguments.extend(variant_arguments)

        expression = SqlExpression(op.function_name, tuple(arguments), type_annotation)
        logger.debug("Built spatial expression %s", expression)
        return expression

    def clause(
        self,
        operation: SpatialOperation | str,
        geometry_args: Sequence[Any] | Any = (),
        /,
        **params: Any,
    ) -> Function[Any]:
        """Build ``operation`` and render it as a SQLAlchemy clause."""
        return to_clause(self.build(operation, geometry_args, **params), self._settings)

    def render(self, expression: SqlExpression) -> Function[Any]:
        """Render a previously built expression with this builder's settings."""
        return to_clause(expression, self._settings)

    # -- fluent access -------------------------------------------------------

    def __getattr__(self, name: str) -> Callable[..., SqlExpression]:
        if name.startswith("_"):
            raise AttributeError(name)
        operation = self._registry.get(name)
        if operation is None:
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )

        found: SpatialOperation = operation

        def call(*geometries: Any, **params: Any) -> SqlExpression:
            return self.build(found, geometries, **params)

        call.__name__ = name
        call.__doc__ = found.description
        return call

    # -- internals -----------------------------------------------------------

    @staticmethod
    def _check_known(op: SpatialOperation, params: dict[str, Any]) -> None:
        valid = op.parameter_names
        for name in params:
            if name not in valid:
                raise UnknownParameterError(op.name, name, list(valid))

    @staticmethod
    def _style_argument(op: SpatialOperation, present: dict[str, Any]) -> str | None:
        """Encode present style members, enforcing shortcut exclusivity."""
        if op.style is None:
            return None
        used = [
            (key, param) for key, param in op.style.members if param.name in present
        ]
        shortcut = op.style.exclusive_with
        if used and shortcut is not None and shortcut.name in present:
            raise MutuallyExclusiveParametersError(
                op.name, [shortcut.name, *(param.name for _, param in used)]
            )
        if not used:
            return None
        return ",".join(
            f"{key}={_style_value(param.coerce(present[param.name]))}"
            for key, param in used
        )


def _as_sequence(geometry_args: Any) -> list[Any]:
    if isinstance(geometry_args, list | tuple):
        return list(geometry_args)
    return [geometry_args]


def _style_value(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _optional_arguments(
    params: tuple[Parameter, ...], present: dict[str, Any]
) -> list[Any]:
    """
    Positional optional arguments up to the last one supplied.

    Trailing absent parameters are dropped; an absent parameter followed by
    a present one is filled with its default to keep later positions.
    """
    last = max((i for i, p in enumerate(params) if p.name in present), default=-1)
    arguments: list[Any] = []
    for param in params[: last + 1]:
        if param.name in present:
            value = param.coerce(present[param.name])
        else:
            value = param.default
        if param.geometry and value is not None:
            value = GeometryArgument.wrap(value)
        arguments.append(value)
    return arguments


def _resolve_variant(
    selector: TypeSelector, present: dict[str, Any]
) -> tuple[GeometryType | None, list[Any]]:
    """
    Pick the geometry or geography overload.

    An explicit type wins.  Otherwise the presence of the flag, whatever its
    value, selects geography.  The flag is only passed to the geography
    overload and defaults to ``selector.flag.default`` there.
    """
    if selector.explicit.name in present:
        variant = selector.explicit.coerce(present[selector.explicit.name])
    elif selector.flag.name in present:
        variant = GeometryType.GEOGRAPHY
    else:
        return None, []

    if variant is GeometryType.GEOGRAPHY:
        return variant, [present.get(selector.flag.name, selector.flag.default)]
    return variant, []
