"""
GeoStyle Framework Core Package

This package contains the shared infrastructure for the GeoStyle feature
engine: configuration loading, the exception hierarchy, logging utilities
and the module processor interface.
"""

from .interfaces import ModuleProcessor, ProcessingResult, ModuleStatus, ModuleState

__version__ = "1.0.0"
__all__ = ['ModuleProcessor', 'ProcessingResult', 'ModuleStatus', 'ModuleState']
