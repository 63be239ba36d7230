"""
Configuration loader for the GeoStyle feature engine.

This module provides the ConfigLoader class that handles loading and validating
JSON configuration files for multi-environment deployments.
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional, List
from functools import lru_cache

from ..exceptions import GeoStyleConfigurationError, GeoStyleValidationError
from ..utils import get_logger


ENVIRONMENT_VARIABLE = "GEOSTYLE_ENV"
DEFAULT_ENVIRONMENT = "development"


class ConfigLoader:
    """
    Configuration loader and validator for the GeoStyle engine.
    
    This class handles loading environment-specific configuration and the
    shared style configuration from JSON files, validating required fields,
    and providing access to the coloring settings consumed by the engine.
    """
    
    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_dir: Directory containing configuration files (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")
    
    @lru_cache(maxsize=2)
    def load_environment_config(self, environment: str) -> Dict[str, Any]:
        """
        Load configuration for a specific environment.
        
        Args:
            environment: Environment name (development/production)
            
        Returns:
            Dictionary containing environment-specific configuration merged with shared config
            
        Raises:
            GeoStyleConfigurationError: If configuration cannot be loaded
            GeoStyleValidationError: If configuration structure is invalid
        """
        env_config_path = self.config_dir / "environment_config.json"
        config_data = self._read_json(env_config_path, "environment configuration")
        
        self._validate_environment_config(config_data, environment)
        
        env_config = dict(config_data["environments"][environment])
        
        shared_config = config_data.get("shared", {})
        for key, value in shared_config.items():
            if key not in env_config:
                env_config[key] = value
            elif isinstance(value, dict) and isinstance(env_config[key], dict):
                # Environment values override shared values key by key
                merged = dict(value)
                merged.update(env_config[key])
                env_config[key] = merged
        
        env_config["_validation"] = config_data.get("validation", {})
        
        self.logger.info(f"Loaded configuration for environment: {environment}")
        return env_config
    
    @lru_cache(maxsize=1)
    def load_style_config(self) -> Dict[str, Any]:
        """
        Load the style configuration (palette, default fill, stroke and marker styles).
        
        Returns:
            Dictionary containing style configuration
            
        Raises:
            GeoStyleConfigurationError: If the style file cannot be loaded
            GeoStyleValidationError: If the style file is invalid
        """
        style_path = self.config_dir / "style_config.json"
        style_data = self._read_json(style_path, "style configuration")
        
        self._validate_style_config(style_data)
        
        self.logger.info(f"Loaded style configuration with {len(style_data['palette'])} palette colors")
        return style_data
    
    def get_palette(self) -> List[str]:
        """Return the ordered palette color tokens."""
        return list(self.load_style_config()["palette"])
    
    def get_coloring_settings(self, environment: str) -> Dict[str, Any]:
        """
        Get the merged coloring settings for an environment.
        
        Palette and default fill come from the style configuration; the
        environment's ``coloring`` section may override any of them.
        
        Args:
            environment: Environment name
            
        Returns:
            Dictionary suitable for building a ColoringConfig
        """
        style_config = self.load_style_config()
        settings: Dict[str, Any] = {
            "palette": list(style_config["palette"]),
            "default_fill_color": style_config["default_fill_color"],
        }
        coloring = self.load_environment_config(environment).get("coloring", {})
        if not isinstance(coloring, dict):
            raise GeoStyleValidationError(
                f"'coloring' section of {environment} configuration must be a mapping",
                {"environment": environment}
            )
        settings.update(coloring)
        return settings
    
    def resolve_environment(self) -> str:
        """
        Resolve the active environment from the GEOSTYLE_ENV variable.
        
        Returns:
            Environment name, defaulting to 'development'
            
        Raises:
            GeoStyleValidationError: If the environment is not supported
        """
        environment = os.getenv(ENVIRONMENT_VARIABLE, DEFAULT_ENVIRONMENT)
        env_config = self.load_environment_config(environment)
        supported = env_config.get("_validation", {}).get("supported_environments")
        
        if supported and environment not in supported:
            raise GeoStyleValidationError(
                f"Environment '{environment}' is not supported",
                {"supported_environments": supported}
            )
        
        return environment
    
    def _read_json(self, path: Path, description: str) -> Dict[str, Any]:
        if not path.exists():
            raise GeoStyleConfigurationError(
                f"{description.capitalize()} file not found: {path}"
            )
        
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise GeoStyleConfigurationError(
                f"Invalid JSON in {description}: {str(e)}"
            )
        except OSError as e:
            raise GeoStyleConfigurationError(
                f"Failed to load {description}: {str(e)}"
            )
    
    def _validate_environment_config(self, config_data: Dict[str, Any], environment: str) -> None:
        """
        Validate environment configuration structure.
        
        Args:
            config_data: Configuration data to validate
            environment: Environment name to validate
            
        Raises:
            GeoStyleValidationError: If configuration is invalid
        """
        if "environments" not in config_data:
            raise GeoStyleValidationError("Missing 'environments' key in configuration")
        
        if environment not in config_data["environments"]:
            available_envs = list(config_data["environments"].keys())
            raise GeoStyleValidationError(
                f"Environment '{environment}' not found. Available: {available_envs}"
            )
        
        env_config = config_data["environments"][environment]
        shared_config = config_data.get("shared", {})
        required_keys = ["logging", "coloring", "processing"]
        
        for key in required_keys:
            if key not in env_config and key not in shared_config:
                raise GeoStyleValidationError(
                    f"Missing required key '{key}' in {environment} configuration"
                )
    
    def _validate_style_config(self, style_data: Dict[str, Any]) -> None:
        """
        Validate style configuration structure.
        
        Args:
            style_data: Style configuration to validate
            
        Raises:
            GeoStyleValidationError: If style configuration is invalid
        """
        palette = style_data.get("palette")
        if not isinstance(palette, list) or not palette:
            raise GeoStyleValidationError("Style configuration needs a non-empty 'palette' list")
        
        bad_entries = [entry for entry in palette if not isinstance(entry, str) or not entry.strip()]
        if bad_entries:
            raise GeoStyleValidationError(
                "Palette entries must be non-empty color strings",
                {"invalid_entries": bad_entries}
            )
        
        if not isinstance(style_data.get("default_fill_color"), str):
            raise GeoStyleValidationError("Missing 'default_fill_color' in style configuration")
        
        for section, required in (("polygon_stroke", ["color", "width"]),
                                  ("marker", ["radius", "fill_color", "stroke_color", "stroke_width"])):
            section_config = style_data.get(section)
            if not isinstance(section_config, dict):
                raise GeoStyleValidationError(f"Missing '{section}' section in style configuration")
            
            for key in required:
                if key not in section_config:
                    raise GeoStyleValidationError(
                        f"Missing required key '{key}' in '{section}' style configuration"
                    )
    
    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_environment_config.cache_clear()
        self.load_style_config.cache_clear()
        self.logger.info("Configuration cache cleared")
