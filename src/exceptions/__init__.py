"""
Custom exceptions for the GeoStyle feature engine.

This module provides domain-specific exception classes for error handling
and debugging throughout the system.
"""

from .custom_exceptions import (
    GeoStyleBaseException,
    GeoStyleConfigurationError,
    GeoStyleValidationError,
    GeoStyleGeometryError,
    GeoStyleProcessingError,
)

__all__ = [
    "GeoStyleBaseException",
    "GeoStyleConfigurationError",
    "GeoStyleValidationError",
    "GeoStyleGeometryError",
    "GeoStyleProcessingError",
]
