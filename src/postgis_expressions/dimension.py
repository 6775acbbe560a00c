"""Coordinate dimension classification."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .compat import require_shapely


class Dimension(str, Enum):
    """
    Shape of a coordinate, derived from the presence of Z and M ordinates.

    Codecs use it to decide how many ordinates to read or write per
    coordinate.
    """

    # POINT(x y)
    DIMENSION_2D = "2D"
    # POINT Z (x y z)
    DIMENSION_3DZ = "3DZ"
    # POINT M (x y m)
    DIMENSION_3DM = "3DM"
    # POINT ZM (x y z m)
    DIMENSION_4D = "4D"

    @classmethod
    def classify(cls, has_z: bool, has_m: bool) -> Dimension:
        if has_z and has_m:
            return cls.DIMENSION_4D
        if has_z:
            return cls.DIMENSION_3DZ
        if has_m:
            return cls.DIMENSION_3DM
        return cls.DIMENSION_2D

    @classmethod
    def from_coordinates(
        cls,
        x: float,
        y: float,
        z: float | None = None,
        m: float | None = None,
    ) -> Dimension:
        """Classify a coordinate by which optional ordinates are present.

        Only presence matters: ``z=0.0`` still yields a Z-bearing dimension.
        """
        return cls.classify(z is not None, m is not None)

    @classmethod
    def from_geometry(cls, geometry: Any) -> Dimension:
        """Classify a shapely geometry by its Z and M ordinates."""
        require_shapely("Dimension.from_geometry")
        import shapely

        return cls.classify(
            bool(shapely.has_z(geometry)), bool(shapely.has_m(geometry))
        )

    def has_3_dimensions(self) -> bool:
        return self in (Dimension.DIMENSION_3DZ, Dimension.DIMENSION_4D)

    def is_measured(self) -> bool:
        return self in (Dimension.DIMENSION_3DM, Dimension.DIMENSION_4D)

    @property
    def coordinate_size(self) -> int:
        """Number of ordinates per coordinate."""
        return 2 + int(self.has_3_dimensions()) + int(self.is_measured())
