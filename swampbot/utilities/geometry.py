"""Grid range helpers.

Purpose: Chebyshev range and nearest-object queries shared by every executor
Key Decisions: numpy arrays for the batch queries, same metric as the arena's getRangeTo
Limitations: Range only - walkable distance needs the arena's find_path
"""

from typing import Optional, Sequence, TypeVar

import numpy as np

from swampbot.arena import Positioned

T = TypeVar("T", bound=Positioned)


def get_range(a: Positioned, b: Positioned) -> int:
    """Chebyshev distance between two grid objects (symmetric)."""
    return max(abs(a.x - b.x), abs(a.y - b.y))


def _ranges(origin: Positioned, objects: Sequence[Positioned]) -> np.ndarray:
    coords = np.array([(o.x, o.y) for o in objects], dtype=np.int64).reshape(-1, 2)
    return np.abs(coords - np.array([origin.x, origin.y])).max(axis=1)


def closest_by_range(origin: Positioned, objects: Sequence[T]) -> Optional[T]:
    """
    Closest object to origin.

    Ties resolve to the earliest object in the sequence.

    Returns:
        The closest object, or None when objects is empty
    """
    if not objects:
        return None
    return objects[int(np.argmin(_ranges(origin, objects)))]


def in_range(origin: Positioned, objects: Sequence[T], distance: int) -> list[T]:
    """Objects within `distance` cells of origin, in their original order."""
    if not objects:
        return []
    mask = _ranges(origin, objects) <= distance
    return [obj for obj, keep in zip(objects, mask) if keep]
