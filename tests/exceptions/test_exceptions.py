"""
Unit tests for custom exceptions module.

This module contains tests for the custom exception classes
and their context handling.
"""

import pytest
from src.exceptions import (
    GeoStyleBaseException,
    GeoStyleConfigurationError,
    GeoStyleValidationError,
    GeoStyleGeometryError,
    GeoStyleProcessingError,
)


class TestGeoStyleBaseException:
    """Test suite for GeoStyleBaseException class."""
    
    def test_base_exception_without_context(self):
        """Test GeoStyleBaseException without context."""
        exception = GeoStyleBaseException("Test error message")
        
        assert str(exception) == "Test error message"
        assert exception.message == "Test error message"
        assert exception.context == {}
    
    def test_base_exception_with_context(self):
        """Test GeoStyleBaseException with context."""
        context = {"partition": "polygons", "feature_id": "Polygon_0,0"}
        exception = GeoStyleBaseException("Test error message", context)
        
        assert exception.message == "Test error message"
        assert exception.context == context
        assert "partition=polygons" in str(exception)
        assert "feature_id=Polygon_0,0" in str(exception)
    
    def test_base_exception_with_none_context(self):
        """Test GeoStyleBaseException with None context."""
        exception = GeoStyleBaseException("Test error message", None)
        
        assert str(exception) == "Test error message"
        assert exception.context == {}
    
    def test_base_exception_context_string_representation(self):
        """Test string representation with various context types."""
        context = {
            "string_value": "test",
            "int_value": 42,
            "bool_value": True,
            "none_value": None
        }
        exception = GeoStyleBaseException("Test error", context)
        
        error_str = str(exception)
        assert "string_value=test" in error_str
        assert "int_value=42" in error_str
        assert "bool_value=True" in error_str
        assert "none_value=None" in error_str


class TestGeoStyleConfigurationError:
    """Test suite for GeoStyleConfigurationError class."""
    
    def test_configuration_error_with_context(self):
        """Test GeoStyleConfigurationError with context."""
        context = {"config_file": "style_config.json", "environment": "development"}
        exception = GeoStyleConfigurationError("Invalid configuration", context)
        
        assert isinstance(exception, GeoStyleBaseException)
        assert exception.context == context
        assert "config_file=style_config.json" in str(exception)
    
    def test_configuration_error_can_be_caught_as_base_exception(self):
        """Test that GeoStyleConfigurationError can be caught as GeoStyleBaseException."""
        with pytest.raises(GeoStyleBaseException) as exc_info:
            raise GeoStyleConfigurationError("Test configuration error")
        
        assert isinstance(exc_info.value, GeoStyleConfigurationError)


class TestGeoStyleGeometryError:
    """Test suite for GeoStyleGeometryError class."""
    
    def test_geometry_error_is_validation_error(self):
        """Geometry errors are caught by validation error handlers."""
        exception = GeoStyleGeometryError("Empty ring", {"feature_id": "a"})
        
        assert isinstance(exception, GeoStyleValidationError)
        assert isinstance(exception, GeoStyleBaseException)
        assert "feature_id=a" in str(exception)
    
    def test_geometry_error_caught_as_validation_error(self):
        """Test catching a geometry error at the validation level."""
        with pytest.raises(GeoStyleValidationError):
            raise GeoStyleGeometryError("Degenerate polygon")


class TestExceptionInteraction:
    """Test suite for exception interaction and inheritance."""
    
    def test_all_exceptions_inherit_from_base(self):
        """Test that all custom exceptions inherit from GeoStyleBaseException."""
        exceptions = [
            GeoStyleConfigurationError("test"),
            GeoStyleValidationError("test"),
            GeoStyleGeometryError("test"),
            GeoStyleProcessingError("test"),
        ]
        
        for exception in exceptions:
            assert isinstance(exception, GeoStyleBaseException)
            assert isinstance(exception, Exception)
    
    def test_exception_chaining(self):
        """Test exception chaining with context."""
        original_error = ValueError("Original error")
        
        try:
            try:
                raise original_error
            except ValueError as e:
                context = {"original_error": str(e)}
                raise GeoStyleProcessingError("Coloring failed", context) from e
        except GeoStyleProcessingError as chained_error:
            assert chained_error.message == "Coloring failed"
            assert chained_error.context["original_error"] == "Original error"
            assert chained_error.__cause__ is original_error
