"""Color cache keyed on source-content fingerprints."""

import logging
from datetime import datetime
from typing import Dict, Iterable, Optional

logger = logging.getLogger(__name__)


class ColorCache:
    """Polygon colors plus the source fingerprints they were computed from.
    
    The cache is owned by whoever builds the colorer and lives as long as
    it does. It is rebuilt in place whenever the sources change and can be
    returned to its never-built state with ``reset``.
    
    Attributes:
        colors: feature id to color token
        source_fingerprints: source position to content fingerprint
        rebuilt_at: time of the last full rebuild, None before the first
    """
    
    def __init__(self):
        self.colors: Dict[str, str] = {}
        self.source_fingerprints: Dict[int, str] = {}
        self.rebuilt_at: Optional[datetime] = None
    
    def __len__(self) -> int:
        return len(self.colors)
    
    def __contains__(self, feature_id: str) -> bool:
        return feature_id in self.colors
    
    def is_valid_for(self, fingerprints: Dict[int, str]) -> bool:
        """True when the cache was built from exactly these sources."""
        if self.rebuilt_at is None:
            return False
        if len(fingerprints) != len(self.source_fingerprints):
            return False
        return all(
            self.source_fingerprints.get(index) == fingerprint
            for index, fingerprint in fingerprints.items()
        )
    
    def rebuild(self, fingerprints: Dict[int, str]) -> None:
        """Drop every color and record the new source fingerprints."""
        self.colors.clear()
        self.source_fingerprints = dict(fingerprints)
        self.rebuilt_at = datetime.now()
        logger.debug(f"Color cache rebuilt for {len(fingerprints)} sources")
    
    def prune(self, keep_ids: Iterable[str]) -> int:
        """Remove colors of features not in ``keep_ids``; returns how many."""
        keep = set(keep_ids)
        stale = [feature_id for feature_id in self.colors if feature_id not in keep]
        for feature_id in stale:
            del self.colors[feature_id]
        return len(stale)
    
    def get(self, feature_id: str) -> Optional[str]:
        return self.colors.get(feature_id)
    
    def set(self, feature_id: str, color: str) -> None:
        self.colors[feature_id] = color
    
    def reset(self) -> None:
        """Forget colors, fingerprints and the rebuild timestamp."""
        self.colors.clear()
        self.source_fingerprints.clear()
        self.rebuilt_at = None
