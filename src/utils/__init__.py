"""
Utility modules for the GeoStyle feature engine.

This module provides logging setup and performance helpers used
throughout the system.
"""

from .logging_setup import (
    setup_logging,
    setup_logging_from_config,
    get_logger,
    log_performance,
)

__all__ = ["setup_logging", "setup_logging_from_config", "get_logger", "log_performance"]
