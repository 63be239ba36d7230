"""Renderer-facing style factories.

Thin adapters turning a polygon's ``fillColor`` into a renderer style and
providing the fixed point-marker style. The renderer consumes these models
(or their ``model_dump()``) directly.
"""

from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from ..models import DEFAULT_FILL_COLOR, FILL_COLOR_PROPERTY, Feature


class Fill(BaseModel):
    color: str


class Stroke(BaseModel):
    color: str
    width: float = Field(1, ge=0)


class CircleStyle(BaseModel):
    radius: float = Field(..., gt=0)
    fill: Fill
    stroke: Optional[Stroke] = None


class Style(BaseModel):
    fill: Optional[Fill] = None
    stroke: Optional[Stroke] = None
    image: Optional[CircleStyle] = None


class StyleFactory:
    """Builds polygon and marker styles from the style configuration."""
    
    def __init__(self,
                 default_fill_color: str = DEFAULT_FILL_COLOR,
                 polygon_stroke: Optional[Stroke] = None,
                 marker: Optional[CircleStyle] = None):
        self.default_fill_color = default_fill_color
        self.polygon_stroke = polygon_stroke or Stroke(color='rgba(0, 0, 0, 0.8)', width=1)
        self.marker = marker or CircleStyle(
            radius=6,
            fill=Fill(color='rgba(255, 0, 0, 1)'),
            stroke=Stroke(color='white', width=2),
        )
    
    @classmethod
    def from_style_config(cls, style_config: Dict[str, Any]) -> "StyleFactory":
        """Build a factory from a validated style configuration mapping."""
        marker_config = style_config["marker"]
        return cls(
            default_fill_color=style_config["default_fill_color"],
            polygon_stroke=Stroke(**style_config["polygon_stroke"]),
            marker=CircleStyle(
                radius=marker_config["radius"],
                fill=Fill(color=marker_config["fill_color"]),
                stroke=Stroke(color=marker_config["stroke_color"], width=marker_config["stroke_width"]),
            ),
        )
    
    def polygon_style(self, feature: Feature) -> Style:
        """Style for a polygon from its ``fillColor`` property."""
        fill_color = feature.get(FILL_COLOR_PROPERTY) or self.default_fill_color
        return Style(fill=Fill(color=fill_color), stroke=self.polygon_stroke.model_copy())
    
    def polygon_style_function(self) -> Callable[[Feature], Style]:
        """Per-feature style callback for renderers that style lazily."""
        return self.polygon_style
    
    def marker_style(self) -> Style:
        """Fixed high-contrast style for point markers."""
        return Style(image=self.marker.model_copy(deep=True))
