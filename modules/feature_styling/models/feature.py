"""Feature Data Model

This module defines the Pydantic data models for polygon and point features
handled by the styling engine. A feature carries an optional identifier, a
GeoJSON-shaped geometry and a mutable property bag.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from src.exceptions import GeoStyleGeometryError


FILL_COLOR_PROPERTY = "fillColor"
LABEL_PROPERTY = "label"


class GeometryType(str, Enum):
    """Geometry types understood by the engine."""
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    POINT = "Point"


class FeaturePartition(str, Enum):
    """Partitions of the feature store."""
    POLYGONS = "polygons"
    POINTS = "points"


class FeatureGeometry(BaseModel):
    """GeoJSON-shaped geometry.
    
    Coordinates are kept exactly as ingestion supplied them; nothing is
    validated until the geometry is converted with ``to_shape``.
    """
    
    type: GeometryType = Field(..., description="Geometry type tag")
    coordinates: Any = Field(default_factory=list, description="Coordinates in GeoJSON nesting")
    
    @property
    def is_polygonal(self) -> bool:
        return self.type in (GeometryType.POLYGON, GeometryType.MULTI_POLYGON)
    
    @property
    def is_point(self) -> bool:
        return self.type == GeometryType.POINT
    
    def to_shape(self) -> BaseGeometry:
        """Convert to a shapely geometry.
        
        Returns:
            Non-empty shapely geometry
            
        Raises:
            GeoStyleGeometryError: If coordinates are empty or malformed
        """
        try:
            geometry = shape({"type": self.type.value, "coordinates": self.coordinates})
        except (ValueError, TypeError, IndexError, KeyError, AttributeError, ShapelyError) as e:
            raise GeoStyleGeometryError(
                f"Cannot build {self.type.value} geometry: {e}",
                {"geometry_type": self.type.value}
            ) from e
        
        if geometry.is_empty:
            raise GeoStyleGeometryError(
                f"Empty {self.type.value} geometry",
                {"geometry_type": self.type.value}
            )
        
        return geometry


class Feature(BaseModel):
    """Polygon or point feature.
    
    Features are mutable: the feature store writes derived identifiers onto
    them and the colorer writes ``fillColor`` into ``properties`` in place.
    Query results hand back the very same instances.
    
    Attributes:
        id: Stable identifier, assigned at ingestion or derived by the store
        geometry: Polygon, MultiPolygon or Point geometry
        properties: Property bag (label, fillColor and any source attributes)
    """
    
    id: Optional[str] = Field(None, description="Stable feature identifier")
    geometry: FeatureGeometry = Field(..., description="Feature geometry")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Feature property bag")
    
    @field_validator('id', mode='before')
    @classmethod
    def coerce_identifier(cls, v: Any) -> Optional[str]:
        """GeoJSON allows numeric ids; the store keys on strings."""
        if v is None:
            return None
        return str(v)
    
    @classmethod
    def from_geojson(cls, data: Mapping[str, Any]) -> "Feature":
        """Build a feature from an already-parsed GeoJSON feature mapping."""
        return cls(
            id=data.get("id"),
            geometry=data["geometry"],
            properties=dict(data.get("properties") or {}),
        )
    
    def get(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)
    
    def set(self, name: str, value: Any) -> None:
        self.properties[name] = value
    
    @property
    def label(self) -> Optional[str]:
        return self.properties.get(LABEL_PROPERTY)
    
    @property
    def fill_color(self) -> Optional[str]:
        return self.properties.get(FILL_COLOR_PROPERTY)
    
    def to_shape(self) -> BaseGeometry:
        """Shapely geometry of this feature; raises GeoStyleGeometryError."""
        return self.geometry.to_shape()
