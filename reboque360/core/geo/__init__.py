# reboque360/core/geo/__init__.py
"""
Гео-сервис: Nominatim + OSRM.
"""

from reboque360.core.geo.models import Coordinates
from reboque360.core.geo.service import GeoService

__all__ = [
    "Coordinates",
    "GeoService",
]
