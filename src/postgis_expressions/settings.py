"""Builder configuration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class BuilderSettings:
    """
    Immutable rendering options shared by a builder and its clauses.

    Attributes:
        schema: Schema the PostGIS extension is installed in.  When set,
            function names are qualified (``postgis.ST_Buffer``).
        srid: SRID assigned to GeoJSON and shapely literals, which carry
            no SRID of their own.
    """

    schema: str | None = None
    srid: int = 4326

    def with_overrides(self, **changes: Any) -> BuilderSettings:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_SETTINGS = BuilderSettings()
