"""
Configuration management for the path router with Pydantic validation
"""

from typing import Any, Dict, Optional, Union
from pathlib import Path
import os
import re

import yaml
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .models import SmoothingMode


# ============================================================================
# Pydantic Models for Configuration Validation
# ============================================================================

class GridConfig(BaseModel):
    """Rasterization settings"""
    cell_size: float = Field(20.0, gt=0, description="World units per grid cell")
    padding: float = Field(40.0, ge=0, description="Room added around the query bounds")
    safety_margin: float = Field(6.0, ge=0, description="Clearance added around each blocking rect")


class SearchConfig(BaseModel):
    """A* search settings"""
    max_iterations: int = Field(20000, gt=0, description="Expansion budget before giving up")
    proximity_weight: float = Field(0.0, ge=0, description="Clutter penalty weight (0 disables the proximity field)")
    proximity_radius_cells: int = Field(3, gt=0, description="Proximity field influence radius in cells")


class SimplifyConfig(BaseModel):
    """Path simplification settings"""
    freehand_tolerance: float = Field(8.0, ge=0, description="Minimum spacing kept on freehand paths")
    route_tolerance: float = Field(3.0, ge=0, description="Minimum spacing kept on routed paths")
    line_of_sight: bool = Field(True, description="Apply line-of-sight reduction to search output")


class SmoothingConfig(BaseModel):
    """Path smoothing settings"""
    mode: SmoothingMode = Field(SmoothingMode.ROUNDED, description="none, rounded or catmull_rom")
    corner_radius: float = Field(12.0, ge=0, description="Rounded-corner radius")
    spline_substeps: int = Field(8, gt=0, description="Catmull-Rom samples per span")
    min_sample_distance: float = Field(0.5, ge=0, description="Catmull-Rom duplicate suppression distance")

    @field_validator('mode', mode='before')
    @classmethod
    def normalize_mode(cls, v):
        """Accept 'catmullRom' / 'Catmull-Rom' spellings"""
        if isinstance(v, str):
            key = v.strip().lower().replace('-', '_')
            if key == 'catmullrom':
                return SmoothingMode.CATMULL_ROM.value
            return key
        return v


class HitTestConfig(BaseModel):
    """Interactive hit-testing settings"""
    path_threshold: float = Field(5.0, gt=0, description="Click distance counted as a path hit at zoom 1")


class RouterConfigModel(BaseModel):
    """Pydantic model for router configuration validation"""
    model_config = ConfigDict(extra='ignore')  # Ignore extra fields in YAML

    version: Optional[Union[int, float, str]] = None
    description: Optional[str] = None

    grid: GridConfig = Field(default_factory=GridConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    simplify: SimplifyConfig = Field(default_factory=SimplifyConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    hit_test: HitTestConfig = Field(default_factory=HitTestConfig)


# ============================================================================
# Environment Variable Substitution
# ============================================================================

def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values

    Supports multiple formats:
    - ${VAR_NAME}
    - $VAR_NAME
    - ${VAR_NAME:-default_value}  (with default)

    Args:
        value: Configuration value (can be str, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        def replace_with_default(match):
            var_name = match.group(1)
            default_value = match.group(3)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default_value is not None:
                return default_value
            raise ValueError(f"Environment variable '{var_name}' is not set and no default value provided")

        value = re.sub(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(:-([^}]*))?\}', replace_with_default, value)

        def replace_simple(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable '{var_name}' is not set")
            return env_value

        return re.sub(r'\$([A-Za-z_][A-Za-z0-9_]*)', replace_simple, value)

    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    return value


# ============================================================================
# RouterConfig Class (wrapper around Pydantic model)
# ============================================================================

class RouterConfig:
    """Routing parameters with validation"""

    def __init__(self, config_dict: Optional[Dict] = None):
        """Initialize from dictionary (parsed from YAML) with Pydantic validation"""
        config_dict = _substitute_env_vars(config_dict or {})

        try:
            self._model = RouterConfigModel(**config_dict)
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {str(e)}") from e

        # Grid
        self.cell_size = self._model.grid.cell_size
        self.padding = self._model.grid.padding
        self.safety_margin = self._model.grid.safety_margin

        # Search
        self.max_iterations = self._model.search.max_iterations
        self.proximity_weight = self._model.search.proximity_weight
        self.proximity_radius_cells = self._model.search.proximity_radius_cells

        # Simplification
        self.freehand_tolerance = self._model.simplify.freehand_tolerance
        self.route_tolerance = self._model.simplify.route_tolerance
        self.line_of_sight = self._model.simplify.line_of_sight

        # Smoothing
        self.smoothing_mode = self._model.smoothing.mode
        self.corner_radius = self._model.smoothing.corner_radius
        self.spline_substeps = self._model.smoothing.spline_substeps
        self.min_sample_distance = self._model.smoothing.min_sample_distance

        # Hit testing
        self.path_threshold = self._model.hit_test.path_threshold

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'RouterConfig':
        """Load configuration from YAML file with validation"""
        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML file: {str(e)}") from e
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        return cls(config_dict)

    def to_dict(self) -> Dict:
        """Convert config back to dictionary"""
        return {
            'grid': {
                'cell_size': self.cell_size,
                'padding': self.padding,
                'safety_margin': self.safety_margin
            },
            'search': {
                'max_iterations': self.max_iterations,
                'proximity_weight': self.proximity_weight,
                'proximity_radius_cells': self.proximity_radius_cells
            },
            'simplify': {
                'freehand_tolerance': self.freehand_tolerance,
                'route_tolerance': self.route_tolerance,
                'line_of_sight': self.line_of_sight
            },
            'smoothing': {
                'mode': self.smoothing_mode.value,
                'corner_radius': self.corner_radius,
                'spline_substeps': self.spline_substeps,
                'min_sample_distance': self.min_sample_distance
            },
            'hit_test': {
                'path_threshold': self.path_threshold
            }
        }
