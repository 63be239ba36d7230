"""Color palette with a random fallback generator."""

import random
from typing import Iterator, Optional, Sequence, Set

from src.exceptions import GeoStyleValidationError
from ..models import DEFAULT_PALETTE


class Palette:
    """Fixed, ordered sequence of high-contrast color tokens.
    
    ``first_available`` walks the palette in order; once every color is
    taken by a neighbor, ``random_color`` produces a fresh RGBA token from
    the injected random source.
    """
    
    def __init__(self, colors: Sequence[str] = DEFAULT_PALETTE, fallback_alpha: float = 0.7):
        if not colors:
            raise GeoStyleValidationError("Palette needs at least one color")
        self.colors = tuple(colors)
        self.fallback_alpha = fallback_alpha
    
    def __len__(self) -> int:
        return len(self.colors)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)
    
    def first_available(self, used: Set[str]) -> Optional[str]:
        """First palette color not in ``used``, or None when exhausted."""
        for color in self.colors:
            if color not in used:
                return color
        return None
    
    def random_color(self, rng: random.Random) -> str:
        """Uniformly random RGBA color; deliberately non-deterministic unless seeded."""
        r = rng.randrange(256)
        g = rng.randrange(256)
        b = rng.randrange(256)
        return f"rgba({r}, {g}, {b}, {self.fallback_alpha})"
