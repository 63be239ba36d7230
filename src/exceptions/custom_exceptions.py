"""
Custom exception classes for the GeoStyle feature engine.

This module defines domain-specific exceptions to provide clear error handling
and debugging information throughout the system.
"""

from typing import Optional, Dict, Any


class GeoStyleBaseException(Exception):
    """Base exception class for all GeoStyle exceptions."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class GeoStyleConfigurationError(GeoStyleBaseException):
    """
    Exception raised when configuration loading or validation fails.
    
    This exception is raised when:
    - Configuration files are missing or invalid
    - Environment configuration is malformed
    - Required configuration values are missing
    """
    pass


class GeoStyleValidationError(GeoStyleBaseException):
    """
    Exception raised when data validation fails.
    
    This exception is raised when:
    - Style configuration validation fails
    - Palette entries are missing or malformed
    - Schema validation fails
    """
    pass


class GeoStyleGeometryError(GeoStyleValidationError):
    """
    Exception raised when a feature geometry cannot be interpreted.
    
    Raised by geometry conversion for empty or degenerate coordinates. The
    colorer and the query engine catch it and fall back to safe defaults, so
    it never escapes a public engine operation.
    """
    pass


class GeoStyleProcessingError(GeoStyleBaseException):
    """
    Exception raised when a styling pass fails.
    
    This exception is raised when:
    - Color assignment fails
    - Feature indexing fails
    - Processor state is inconsistent
    """
    pass
