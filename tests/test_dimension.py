"""Tests for Dimension classification."""

from __future__ import annotations

import pytest

from postgis_expressions import HAS_SHAPELY, Dimension


@pytest.mark.parametrize(
    ("has_z", "has_m", "expected"),
    [
        (False, False, Dimension.DIMENSION_2D),
        (True, False, Dimension.DIMENSION_3DZ),
        (False, True, Dimension.DIMENSION_3DM),
        (True, True, Dimension.DIMENSION_4D),
    ],
)
def test_classify(has_z, has_m, expected):
    assert Dimension.classify(has_z, has_m) is expected


def test_has_3_dimensions_only_for_z_cases():
    assert {d for d in Dimension if d.has_3_dimensions()} == {
        Dimension.DIMENSION_3DZ,
        Dimension.DIMENSION_4D,
    }


def test_is_measured_only_for_m_cases():
    assert {d for d in Dimension if d.is_measured()} == {
        Dimension.DIMENSION_3DM,
        Dimension.DIMENSION_4D,
    }


def test_coordinate_size():
    assert [d.coordinate_size for d in Dimension] == [2, 3, 3, 4]


def test_from_coordinates_uses_presence_not_value():
    assert Dimension.from_coordinates(1.0, 2.0) is Dimension.DIMENSION_2D
    assert Dimension.from_coordinates(1.0, 2.0, z=0.0) is Dimension.DIMENSION_3DZ
    assert Dimension.from_coordinates(1.0, 2.0, m=0.0) is Dimension.DIMENSION_3DM
    assert Dimension.from_coordinates(1.0, 2.0, 3.0, 4.0) is Dimension.DIMENSION_4D


def test_wire_values():
    assert [d.value for d in Dimension] == ["2D", "3DZ", "3DM", "4D"]


@pytest.mark.skipif(not HAS_SHAPELY, reason="shapely missing")
def test_from_geometry():
    import shapely

    assert Dimension.from_geometry(shapely.Point(1, 2)) is Dimension.DIMENSION_2D
    assert Dimension.from_geometry(shapely.Point(1, 2, 3)) is Dimension.DIMENSION_3DZ
    assert (
        Dimension.from_geometry(shapely.from_wkt("POINT M (1 2 3)"))
        is Dimension.DIMENSION_3DM
    )
    assert (
        Dimension.from_geometry(shapely.from_wkt("POINT ZM (1 2 3 4)"))
        is Dimension.DIMENSION_4D
    )
