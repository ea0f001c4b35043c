"""Market data layer (Polygon)."""

from .polygon_client import PolygonClient

__all__ = ["PolygonClient"]
