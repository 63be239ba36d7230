"""Unit tests for renderer style models and the StyleFactory."""

import pytest
from pydantic import ValidationError

from modules.feature_styling.coloring import CircleStyle, Fill, Stroke, StyleFactory
from modules.feature_styling.models import DEFAULT_FILL_COLOR, Feature


def make_polygon(properties=None):
    ring = [[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]
    return Feature(id="p", geometry={"type": "Polygon", "coordinates": [ring]}, properties=properties or {})


class TestStyleFactory:
    """Test polygon and marker styles."""
    
    @pytest.fixture
    def style_config(self):
        return {
            "palette": ["red"],
            "default_fill_color": "rgba(1, 2, 3, 0.5)",
            "polygon_stroke": {"color": "black", "width": 2},
            "marker": {"radius": 4, "fill_color": "yellow", "stroke_color": "navy", "stroke_width": 1},
        }
    
    def test_polygon_style_uses_fill_color(self):
        """The polygon fill comes from its fillColor property."""
        factory = StyleFactory()
        
        style = factory.polygon_style(make_polygon({"fillColor": "rgba(31, 119, 180, 0.7)"}))
        
        assert style.fill.color == "rgba(31, 119, 180, 0.7)"
        assert style.stroke.color == "rgba(0, 0, 0, 0.8)"
        assert style.stroke.width == 1
        assert style.image is None
    
    def test_polygon_style_default_fill(self):
        """Polygons without fillColor use the neutral default."""
        style = StyleFactory().polygon_style(make_polygon())
        
        assert style.fill.color == DEFAULT_FILL_COLOR
    
    def test_polygon_style_function(self):
        """The style callback styles features lazily."""
        factory = StyleFactory()
        style_for = factory.polygon_style_function()
        
        assert style_for(make_polygon({"fillColor": "red"})).fill.color == "red"
    
    def test_marker_style(self):
        """Markers are red circles with a white outline."""
        style = StyleFactory().marker_style()
        
        assert style.fill is None
        assert style.image.radius == 6
        assert style.image.fill.color == "rgba(255, 0, 0, 1)"
        assert style.image.stroke == Stroke(color="white", width=2)
    
    def test_marker_style_is_a_copy(self):
        """Callers cannot mutate the factory's marker through a returned style."""
        factory = StyleFactory()
        
        factory.marker_style().image.radius = 99
        
        assert factory.marker_style().image.radius == 6
    
    def test_from_style_config(self, style_config):
        """Factories built from configuration honour every setting."""
        factory = StyleFactory.from_style_config(style_config)
        
        polygon = factory.polygon_style(make_polygon())
        marker = factory.marker_style()
        
        assert polygon.fill.color == "rgba(1, 2, 3, 0.5)"
        assert polygon.stroke == Stroke(color="black", width=2)
        assert marker.image == CircleStyle(
            radius=4, fill=Fill(color="yellow"), stroke=Stroke(color="navy", width=1)
        )
    
    def test_style_dump(self):
        """Styles serialize to plain mappings for the renderer."""
        dumped = StyleFactory().polygon_style(make_polygon({"fillColor": "red"})).model_dump(exclude_none=True)
        
        assert dumped == {
            "fill": {"color": "red"},
            "stroke": {"color": "rgba(0, 0, 0, 0.8)", "width": 1},
        }
    
    def test_invalid_marker_radius(self):
        """Circle radius must be positive."""
        with pytest.raises(ValidationError):
            CircleStyle(radius=0, fill=Fill(color="red"))
