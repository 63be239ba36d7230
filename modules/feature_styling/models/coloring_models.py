"""Coloring Models for Feature Styling

Pydantic models for colorer configuration and per-pass coloring statistics.
"""

from datetime import datetime
from typing import List, Optional
import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


DEFAULT_PALETTE = [
    'rgba(31, 119, 180, 0.7)',   # blue
    'rgba(255, 127, 14, 0.7)',   # orange
    'rgba(44, 160, 44, 0.7)',    # green
    'rgba(214, 39, 40, 0.7)',    # red
    'rgba(148, 103, 189, 0.7)',  # purple
    'rgba(140, 86, 75, 0.7)',    # brown
    'rgba(227, 119, 194, 0.7)',  # pink
    'rgba(127, 127, 127, 0.7)',  # gray
    'rgba(188, 189, 34, 0.7)',   # olive
    'rgba(23, 190, 207, 0.7)',   # teal
]

DEFAULT_FILL_COLOR = 'rgba(100, 150, 200, 0.5)'


class ColoringConfig(BaseModel):
    """Configuration settings for polygon coloring.
    
    Built from the style configuration merged with the environment's
    ``coloring`` section (see ConfigLoader.get_coloring_settings).
    """
    palette: List[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1,
                               description="Ordered high-contrast palette")
    default_fill_color: str = Field(DEFAULT_FILL_COLOR, description="Neutral fill for uncolored polygons")
    fallback_alpha: float = Field(0.7, ge=0.0, le=1.0, description="Alpha of randomly generated fallback colors")
    random_seed: Optional[int] = Field(None, description="Seed for the fallback color generator")
    
    @field_validator('palette')
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        """Strip palette tokens and drop duplicates while keeping order."""
        cleaned = []
        for color in v:
            color = color.strip()
            if not color:
                raise ValueError("palette entries must be non-empty")
            if color in cleaned:
                logger.warning(f"Duplicate palette color {color} ignored")
                continue
            cleaned.append(color)
        return cleaned


class ColoringResult(BaseModel):
    """Statistics of one coloring pass."""
    feature_count: int = Field(ge=0, description="Polygons considered in the pass")
    cache_valid: bool = Field(..., description="Whether source fingerprints matched the cache")
    pruned_count: int = Field(0, ge=0, description="Cached colors dropped for departed features")
    assigned_count: int = Field(0, ge=0, description="Palette colors newly assigned and cached")
    fallback_count: int = Field(0, ge=0, description="Random colors used because the palette was exhausted")
    reused_count: int = Field(0, ge=0, description="Colors served from the cache")
    rebuilt_at: Optional[datetime] = Field(None, description="Last full cache rebuild")
    duration: float = Field(0.0, ge=0, description="Pass duration in seconds")
    
    def get_summary(self) -> str:
        """Human-readable pass summary."""
        state = "cache hit" if self.cache_valid else "cache rebuilt"
        return (f"Colored {self.feature_count} polygons ({state}): "
                f"{self.reused_count} reused, {self.assigned_count} assigned, "
                f"{self.fallback_count} fallback, {self.pruned_count} pruned "
                f"in {self.duration:.3f}s")
