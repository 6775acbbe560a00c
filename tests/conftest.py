"""Shared fixtures for postgis_expressions tests."""

from __future__ import annotations

from typing import Any

import pytest
from geoalchemy2 import Geometry
from sqlalchemy import Column, Integer, MetaData, String, Table

from postgis_expressions import SpatialExpressionBuilder

metadata = MetaData()

places = Table(
    "places",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String),
    Column("geom", Geometry("GEOMETRY", srid=4326)),
    Column("boundary", Geometry("POLYGON", srid=4326)),
)


@pytest.fixture
def builder() -> SpatialExpressionBuilder:
    """Builder over the default operation registry."""
    return SpatialExpressionBuilder()


@pytest.fixture
def geom() -> Any:
    return places.c.geom


@pytest.fixture
def boundary() -> Any:
    return places.c.boundary
