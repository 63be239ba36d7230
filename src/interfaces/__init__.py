"""GeoStyle Framework Interfaces

This package contains abstract interfaces and base classes for the GeoStyle
framework, providing standardized contracts for all processing modules.
"""

from .module_processor import ModuleProcessor, ProcessingResult, ModuleStatus, ModuleState

__all__ = ['ModuleProcessor', 'ProcessingResult', 'ModuleStatus', 'ModuleState']
