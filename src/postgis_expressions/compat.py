"""Compatibility utilities for soft dependencies."""

from __future__ import annotations

try:
    import shapely  # noqa: F401

    HAS_SHAPELY = True
except ImportError:
    HAS_SHAPELY = False

try:
    import geojson_pydantic  # noqa: F401

    HAS_GEOJSON_PYDANTIC = True
except ImportError:
    HAS_GEOJSON_PYDANTIC = False


def require_shapely(feature_name: str) -> None:
    """
    Guard for features that require shapely (geometry extra).

    Args:
        feature_name: The name of the feature being accessed.

    Raises:
        ImportError: If shapely is not installed.
    """
    if not HAS_SHAPELY:
        raise ImportError(
            f"{feature_name} requires 'shapely'. "
            "Install it via 'pip install postgis-expressions[geometry]'"
        )
