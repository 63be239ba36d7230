"""
Unit tests for ConfigLoader class.

This module contains tests for configuration loading,
validation, and error handling.
"""

import json
import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from src.config import ConfigLoader
from src.exceptions import GeoStyleConfigurationError, GeoStyleValidationError


class TestConfigLoader:
    """Test suite for ConfigLoader class."""
    
    @pytest.fixture
    def temp_config_dir(self):
        """Create a temporary directory for configuration files."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)
    
    @pytest.fixture
    def valid_environment_config(self):
        """Valid environment configuration with shared defaults."""
        return {
            "shared": {
                "coloring": {"fallback_alpha": 0.7},
                "processing": {"slow_operation_threshold_seconds": 5.0}
            },
            "environments": {
                "development": {
                    "logging": {"level": "DEBUG", "format": "standard"},
                    "coloring": {"random_seed": 7},
                    "processing": {"monitor_performance": True}
                },
                "production": {
                    "logging": {"level": "INFO", "format": "json"},
                    "coloring": {"fallback_alpha": 0.5},
                    "processing": {"monitor_performance": False}
                }
            },
            "validation": {
                "supported_environments": ["development", "production"]
            }
        }
    
    @pytest.fixture
    def valid_style_config(self):
        """Valid style configuration for testing."""
        return {
            "palette": ["rgba(31, 119, 180, 0.7)", "rgba(255, 127, 14, 0.7)"],
            "default_fill_color": "rgba(100, 150, 200, 0.5)",
            "polygon_stroke": {"color": "rgba(0, 0, 0, 0.8)", "width": 1},
            "marker": {
                "radius": 6,
                "fill_color": "rgba(255, 0, 0, 1)",
                "stroke_color": "white",
                "stroke_width": 2
            }
        }
    
    @pytest.fixture
    def config_loader(self, temp_config_dir):
        """Create ConfigLoader instance with temporary directory."""
        return ConfigLoader(str(temp_config_dir))
    
    def _write(self, directory: Path, name: str, data) -> None:
        with open(directory / name, 'w') as f:
            json.dump(data, f)
    
    def test_init_default_config_dir(self):
        """Test ConfigLoader initialization with default config directory."""
        loader = ConfigLoader()
        assert loader.config_dir == Path("config")
    
    def test_load_environment_config_success(self, config_loader, temp_config_dir, valid_environment_config):
        """Test successful loading of environment configuration."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        config = config_loader.load_environment_config("development")
        
        assert config["logging"]["level"] == "DEBUG"
        assert config["processing"]["monitor_performance"] is True
        assert config["_validation"]["supported_environments"] == ["development", "production"]
    
    def test_load_environment_config_merges_shared(self, config_loader, temp_config_dir, valid_environment_config):
        """Shared sections are merged key by key with environment overrides winning."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        dev = config_loader.load_environment_config("development")
        prod = config_loader.load_environment_config("production")
        
        assert dev["coloring"] == {"fallback_alpha": 0.7, "random_seed": 7}
        assert prod["coloring"] == {"fallback_alpha": 0.5}
        assert dev["processing"]["slow_operation_threshold_seconds"] == 5.0
    
    def test_load_environment_config_file_not_found(self, config_loader):
        """Test error when environment configuration file is not found."""
        with pytest.raises(GeoStyleConfigurationError) as exc_info:
            config_loader.load_environment_config("development")
        
        assert "not found" in str(exc_info.value)
    
    def test_load_environment_config_invalid_json(self, config_loader, temp_config_dir):
        """Test error when environment configuration has invalid JSON."""
        with open(temp_config_dir / "environment_config.json", 'w') as f:
            f.write("{ invalid json }")
        
        with pytest.raises(GeoStyleConfigurationError) as exc_info:
            config_loader.load_environment_config("development")
        
        assert "Invalid JSON" in str(exc_info.value)
    
    def test_load_environment_config_missing_environment(self, config_loader, temp_config_dir, valid_environment_config):
        """Test error when requested environment is not in configuration."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader.load_environment_config("staging")
        
        assert "Environment 'staging' not found" in str(exc_info.value)
    
    def test_validate_environment_config_missing_environments(self, config_loader):
        """Test validation error when environments key is missing."""
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader._validate_environment_config({}, "development")
        
        assert "Missing 'environments' key" in str(exc_info.value)
    
    def test_validate_environment_config_missing_keys(self, config_loader):
        """Test validation error when required keys are missing."""
        config_data = {
            "environments": {
                "development": {"logging": {"level": "DEBUG"}}
            }
        }
        
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader._validate_environment_config(config_data, "development")
        
        assert "Missing required key 'coloring'" in str(exc_info.value)
    
    def test_validate_environment_config_shared_satisfies_required_keys(self, config_loader):
        """Required sections may live only in the shared block."""
        config_data = {
            "shared": {"coloring": {}, "processing": {}},
            "environments": {"development": {"logging": {}}}
        }
        
        config_loader._validate_environment_config(config_data, "development")
    
    def test_load_style_config_success(self, config_loader, temp_config_dir, valid_style_config):
        """Test successful loading of style configuration."""
        self._write(temp_config_dir, "style_config.json", valid_style_config)
        
        style = config_loader.load_style_config()
        
        assert style["default_fill_color"] == "rgba(100, 150, 200, 0.5)"
        assert config_loader.get_palette() == valid_style_config["palette"]
    
    def test_load_style_config_file_not_found(self, config_loader):
        """Test error when style configuration file is not found."""
        with pytest.raises(GeoStyleConfigurationError):
            config_loader.load_style_config()
    
    def test_style_config_empty_palette(self, config_loader, valid_style_config):
        """An empty palette is rejected."""
        valid_style_config["palette"] = []
        
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader._validate_style_config(valid_style_config)
        
        assert "non-empty 'palette'" in str(exc_info.value)
    
    def test_style_config_blank_palette_entry(self, config_loader, valid_style_config):
        """Blank palette entries are rejected."""
        valid_style_config["palette"].append("  ")
        
        with pytest.raises(GeoStyleValidationError):
            config_loader._validate_style_config(valid_style_config)
    
    def test_style_config_missing_marker_key(self, config_loader, valid_style_config):
        """Marker section must define every required key."""
        del valid_style_config["marker"]["radius"]
        
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader._validate_style_config(valid_style_config)
        
        assert "'radius'" in str(exc_info.value)
    
    def test_get_coloring_settings(self, config_loader, temp_config_dir,
                                   valid_environment_config, valid_style_config):
        """Coloring settings combine the style file with environment overrides."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        self._write(temp_config_dir, "style_config.json", valid_style_config)
        
        settings = config_loader.get_coloring_settings("development")
        
        assert settings["palette"] == valid_style_config["palette"]
        assert settings["default_fill_color"] == "rgba(100, 150, 200, 0.5)"
        assert settings["random_seed"] == 7
        assert settings["fallback_alpha"] == 0.7
    
    def test_get_coloring_settings_rejects_non_mapping(self, config_loader, temp_config_dir,
                                                       valid_environment_config, valid_style_config):
        """A coloring section that is not a mapping is a validation error."""
        valid_environment_config["environments"]["development"]["coloring"] = ["red"]
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        self._write(temp_config_dir, "style_config.json", valid_style_config)
        
        with pytest.raises(GeoStyleValidationError) as exc_info:
            config_loader.get_coloring_settings("development")
        
        assert "must be a mapping" in str(exc_info.value)
    
    def test_resolve_environment_default(self, config_loader, temp_config_dir, valid_environment_config):
        """Without GEOSTYLE_ENV the development environment is used."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        with patch.dict('os.environ', {}, clear=True):
            assert config_loader.resolve_environment() == "development"
    
    def test_resolve_environment_from_variable(self, config_loader, temp_config_dir, valid_environment_config):
        """GEOSTYLE_ENV selects the environment."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        with patch.dict('os.environ', {"GEOSTYLE_ENV": "production"}):
            assert config_loader.resolve_environment() == "production"
    
    def test_resolve_environment_unsupported(self, config_loader, temp_config_dir, valid_environment_config):
        """Configured but unsupported environments are rejected."""
        valid_environment_config["environments"]["sandbox"] = valid_environment_config["environments"]["development"]
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        with patch.dict('os.environ', {"GEOSTYLE_ENV": "sandbox"}):
            with pytest.raises(GeoStyleValidationError):
                config_loader.resolve_environment()
    
    def test_configuration_caching(self, config_loader, temp_config_dir, valid_environment_config):
        """Loaded configuration is cached until clear_cache is called."""
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        first = config_loader.load_environment_config("development")
        
        valid_environment_config["environments"]["development"]["logging"]["level"] = "ERROR"
        self._write(temp_config_dir, "environment_config.json", valid_environment_config)
        
        assert config_loader.load_environment_config("development") is first
        
        config_loader.clear_cache()
        reloaded = config_loader.load_environment_config("development")
        assert reloaded["logging"]["level"] == "ERROR"
