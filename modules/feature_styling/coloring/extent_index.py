"""Bounding-extent neighbor lookup for the polygon colorer.

Two polygons are neighbors when their bounding boxes overlap, touching edges
included. This is a deliberate proxy for adjacency: switching to exact
polygon-edge adjacency changes coloring results.
"""

import logging
from typing import List, Optional, Sequence

from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree

logger = logging.getLogger(__name__)


class ExtentIndex:
    """STR-tree over feature envelopes, addressed by feature position.
    
    Positions without a usable geometry (None) are kept out of the tree:
    they have no neighbors and are nobody's neighbor.
    """
    
    def __init__(self, shapes: Sequence[Optional[BaseGeometry]]):
        self._positions = [position for position, geometry in enumerate(shapes) if geometry is not None]
        self._shapes = shapes
        self._tree = STRtree([shapes[position] for position in self._positions]) if self._positions else None
    
    def __len__(self) -> int:
        return len(self._positions)
    
    def neighbors(self, position: int) -> List[int]:
        """Positions whose envelope overlaps the envelope at ``position``."""
        if self._tree is None or self._shapes[position] is None:
            return []
        
        # Without a predicate STRtree.query compares envelopes only
        hits = self._tree.query(self._shapes[position])
        return sorted(
            self._positions[int(hit)] for hit in hits
            if self._positions[int(hit)] != position
        )
