"""
Collision Resolver
==================

Catch detection between the basket and falling stars.
"""

from __future__ import annotations

from typing import List

from star_catch.catch_core.collector import Collector
from star_catch.catch_core.object_pool import FallingObject


def overlaps(collector: Collector, obj: FallingObject) -> bool:
    """Strict axis-aligned bounding box overlap. Touching edges do not count."""
    return (
        obj.x < collector.right
        and obj.right > collector.x
        and obj.y < collector.bottom
        and obj.bottom > collector.y
    )


class CollisionResolver:
    """Removes caught objects and reports how many were caught."""

    def resolve(self, collector: Collector, objects: List[FallingObject]) -> int:
        """
        Remove every object overlapping the collector.

        Args:
            collector: The basket.
            objects: Live object list, modified in place.

        Returns:
            Number of objects caught this call.
        """
        kept = [obj for obj in objects if not overlaps(collector, obj)]
        caught = len(objects) - len(kept)
        if caught:
            objects[:] = kept
        return caught
