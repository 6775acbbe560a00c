"""Tests for SpatialExpressionBuilder argument assembly."""

from __future__ import annotations

import logging

import pytest

from postgis_expressions import (
    DelaunayTrianglesOutput,
    EndCap,
    GeometryArgument,
    GeometryType,
    Join,
    MissingParameterError,
    MutuallyExclusiveParametersError,
    OperationNotFoundError,
    Side,
    SpatialExpressionBuilder,
    SpatialOperation,
    SpatialOperationRegistry,
    SqlExpression,
    UnknownParameterError,
    ValidationError,
)
from postgis_expressions.schema import required

# -- buffer ------------------------------------------------------------------


def test_buffer_with_end_cap_style(builder, geom):
    expr = builder.build("buffer", [geom], radius=5.0, style_end_cap="round")

    assert expr == SqlExpression(
        "ST_Buffer", (GeometryArgument(geom), 5.0, "endcap=round")
    )
    assert expr.type_annotation is None


def test_buffer_without_style_emits_no_string(builder, geom):
    expr = builder.build("buffer", [geom], radius=5.0)
    assert expr.arguments == (GeometryArgument(geom), 5.0)


def test_buffer_style_string_follows_declared_key_order(builder, geom):
    expr = builder.build(
        "buffer",
        [geom],
        radius=2.5,
        style_side=Side.LEFT,
        style_mitre_level=5.0,
        style_join="mitre",
        style_end_cap=EndCap.FLAT,
        style_quad_segs=8,
    )
    assert expr.arguments[-1] == (
        "quad_segs=8,endcap=flat,join=mitre,mitre_level=5.0,side=left"
    )
    assert expr.arity == 3


def test_buffer_style_contains_only_present_members(builder, geom):
    expr = builder.build(
        "buffer", [geom], radius=1.0, style_side="right", style_quad_segs=4
    )
    assert expr.arguments[-1] == "quad_segs=4,side=right"


def test_buffer_num_seg_quarter_circle_is_positional(builder, geom):
    expr = builder.build("buffer", [geom], radius=5.0, num_seg_quarter_circle=8)
    assert expr.arguments == (GeometryArgument(geom), 5.0, 8)


def test_buffer_shortcut_and_style_are_mutually_exclusive(builder, geom):
    with pytest.raises(ValidationError, match="mutually exclusive parameters"):
        builder.build(
            "buffer",
            [geom],
            radius=5.0,
            num_seg_quarter_circle=8,
            style_end_cap="round",
        )


@pytest.mark.parametrize(
    "style",
    [
        {"style_quad_segs": 2},
        {"style_end_cap": EndCap.SQUARE},
        {"style_join": Join.BEVEL},
        {"style_mitre_level": 1.5},
        {"style_side": Side.BOTH},
    ],
)
def test_buffer_exclusivity_holds_for_every_style_member(builder, geom, style):
    with pytest.raises(MutuallyExclusiveParametersError) as exc_info:
        builder.build("buffer", [geom], radius=1.0, num_seg_quarter_circle=4, **style)
    assert exc_info.value.parameters[0] == "num_seg_quarter_circle"


def test_exclusivity_is_checked_before_required_parameters(builder, geom):
    with pytest.raises(MutuallyExclusiveParametersError):
        builder.build("buffer", [geom], num_seg_quarter_circle=4, style_side="left")


def test_buffer_requires_radius(builder, geom):
    with pytest.raises(MissingParameterError) as exc_info:
        builder.build("buffer", [geom])
    assert exc_info.value.parameter == "radius"
    assert isinstance(exc_info.value, ValidationError)


def test_none_counts_as_absent(builder, geom):
    with pytest.raises(MissingParameterError):
        builder.build("buffer", [geom], radius=None)

    expr = builder.build("buffer", [geom], radius=3.0, style_end_cap=None)
    assert expr.arguments == (GeometryArgument(geom), 3.0)


def test_invalid_enum_wire_value_is_rejected(builder, geom):
    with pytest.raises(ValidationError, match="style_end_cap"):
        builder.build("buffer", [geom], radius=1.0, style_end_cap="butt")


# -- offset_curve ------------------------------------------------------------


def test_offset_curve_without_style(builder, geom):
    expr = builder.build("offset_curve", [geom], signed_distance=3.0)
    assert expr == SqlExpression("ST_OffsetCurve", (GeometryArgument(geom), 3.0))


def test_offset_curve_folds_segment_count_into_style(builder, geom):
    expr = builder.build(
        "offset_curve",
        [geom],
        signed_distance=-2.0,
        num_seg_quarter_circle=4,
        style_join=Join.ROUND,
    )
    assert expr.arguments == (GeometryArgument(geom), -2.0, "quad_segs=4,join=round")


# -- centroid type variant ---------------------------------------------------


def test_centroid_defaults_to_geometry_without_argument(builder, geom):
    expr = builder.build("centroid", [geom])
    assert expr.arguments == (GeometryArgument(geom),)
    assert expr.type_annotation is None


def test_centroid_flag_presence_selects_geography(builder, geom):
    expr = builder.build("centroid", [geom], use_spheroid=False)
    assert expr.arguments == (GeometryArgument(geom), False)
    assert expr.type_annotation is GeometryType.GEOGRAPHY


def test_centroid_explicit_geography_defaults_flag_to_true(builder, geom):
    expr = builder.build("centroid", [geom], geometry_type="geography")
    assert expr.arguments == (GeometryArgument(geom), True)
    assert expr.type_annotation is GeometryType.GEOGRAPHY


def test_centroid_explicit_geometry_drops_flag(builder, geom):
    expr = builder.build(
        "centroid", [geom], use_spheroid=True, geometry_type=GeometryType.GEOMETRY
    )
    assert expr.arguments == (GeometryArgument(geom),)
    assert expr.type_annotation is GeometryType.GEOMETRY


# -- optional scalars --------------------------------------------------------


def test_trailing_optional_shrinks_argument_list(builder, geom):
    without = builder.build("simplify", [geom], tolerance=0.5)
    with_flag = builder.build(
        "simplify", [geom], tolerance=0.5, preserve_collapsed=True
    )

    assert with_flag.arity == without.arity + 1
    assert None not in without.arguments
    assert with_flag.arguments[-1] is True


def test_gap_before_present_optional_is_filled_with_default(builder, geom):
    expr = builder.build("chaikin_smoothing", [geom], preserve_end_points=True)
    assert expr.arguments == (GeometryArgument(geom), 1, True)


def test_gap_with_null_default_passes_null(builder, geom):
    expr = builder.build("geometric_median", [geom], fail_if_not_converged=True)
    assert expr.arguments == (GeometryArgument(geom), None, 10000, True)


def test_optional_enum_is_coerced(builder, geom):
    expr = builder.build("delaunay_triangles", [geom], output=1)
    assert expr.arguments == (
        GeometryArgument(geom),
        0.0,
        DelaunayTrianglesOutput.MULTILINESTRING,
    )


def test_voronoi_extend_to_is_geometry_operand(builder, geom, boundary):
    expr = builder.build("voronoi_lines", [geom], extend_to=boundary)
    assert expr.arguments == (
        GeometryArgument(geom),
        0.0,
        GeometryArgument(boundary),
    )
    assert expr.geometry_arguments == (
        GeometryArgument(geom),
        GeometryArgument(boundary),
    )


def test_voronoi_tolerance_only(builder, geom):
    expr = builder.build("voronoi_polygons", [geom], tolerance=0.1)
    assert expr.arguments == (GeometryArgument(geom), 0.1)


# -- geometry operands -------------------------------------------------------


def test_shared_paths_takes_two_geometries(builder, geom, boundary):
    expr = builder.build("shared_paths", [geom, boundary])
    assert expr.arguments == (GeometryArgument(geom), GeometryArgument(boundary))


def test_wrong_geometry_count_is_rejected(builder, geom):
    with pytest.raises(ValidationError, match="geometry_a, geometry_b"):
        builder.build("shared_paths", [geom])


def test_single_geometry_need_not_be_wrapped_in_list(builder, geom):
    assert builder.build("convex_hull", geom) == builder.build("convex_hull", [geom])


def test_nested_expression_as_geometry(builder, geom):
    hull = builder.build("convex_hull", [geom])
    expr = builder.build("centroid", [hull])

    assert expr.arguments == (GeometryArgument(hull),)
    assert str(expr) == "ST_Centroid(ST_ConvexHull(places.geom))"


# -- lookup and unknown parameters -------------------------------------------


def test_unknown_parameter_suggests_close_match(builder, geom):
    with pytest.raises(UnknownParameterError) as exc_info:
        builder.build("buffer", [geom], radius=1.0, style_endcap="round")
    assert "style_end_cap" in exc_info.value.suggestions


def test_parameters_rejected_on_parameterless_operation(builder, geom):
    with pytest.raises(UnknownParameterError, match="accepts no parameters"):
        builder.build("convex_hull", [geom], tolerance=1.0)


def test_unknown_operation(builder, geom):
    with pytest.raises(OperationNotFoundError) as exc_info:
        builder.build("bufer", [geom], radius=1.0)
    assert "buffer" in exc_info.value.suggestions


def test_operation_instance_is_accepted(builder, geom):
    operation = builder.registry.require("reduce_precision")
    expr = builder.build(operation, [geom], grid_size=0.01)
    assert expr.arguments == (GeometryArgument(geom), 0.01)


def test_custom_registry():
    registry = SpatialOperationRegistry()
    registry.register(
        SpatialOperation(
            "line_substring",
            "ST_LineSubstring",
            required=(required("start_fraction"), required("end_fraction")),
        )
    )
    builder = SpatialExpressionBuilder(registry=registry)

    expr = builder.line_substring("geom", start_fraction=0.25, end_fraction=0.75)

    assert expr.function_name == "ST_LineSubstring"
    assert expr.scalar_arguments == (0.25, 0.75)
    with pytest.raises(OperationNotFoundError):
        builder.build("buffer", ["geom"], radius=1.0)


# -- fluent access -----------------------------------------------------------


def test_fluent_method_matches_build(builder, geom):
    assert builder.buffer(geom, radius=5.0, style_join="bevel") == builder.build(
        "buffer", [geom], radius=5.0, style_join="bevel"
    )


def test_fluent_method_with_two_geometries(builder, geom, boundary):
    expr = builder.shared_paths(geom, boundary)
    assert expr.function_name == "ST_SharedPaths"
    assert len(expr.geometry_arguments) == 2


def test_fluent_method_has_description(builder):
    assert "Voronoi" in builder.voronoi_lines.__doc__
    assert builder.voronoi_lines.__name__ == "voronoi_lines"


def test_unknown_attribute_raises_attribute_error(builder):
    with pytest.raises(AttributeError):
        builder.not_an_operation  # noqa: B018


# -- observability -----------------------------------------------------------


def test_build_logs_expression(builder, geom, caplog):
    with caplog.at_level(logging.DEBUG, logger="postgis_expressions.builder"):
        builder.build("convex_hull", [geom])

    assert "Built spatial expression ST_ConvexHull(places.geom)" in caplog.text
