# reboque360/core/geo/models.py
"""
Гео-модели.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Точка на карте (WGS84)."""

    lat: float = Field(..., ge=-90.0, le=90.0, description="Широта")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Долгота")

    def as_osrm(self) -> str:
        """Формат OSRM: 'lon,lat'."""
        return f"{self.lon},{self.lat}"
