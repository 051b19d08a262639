"""Cached pathing and single-step movement.

Purpose: Turn "go to X" into one compass move per tick without calling find_path every tick
Key Decisions: One cache entry per creep; the cursor only advances once the creep is seen standing on the step
Limitations: An unreachable goal yields no path forever - callers must pick another goal
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from swampbot.arena import ArenaGame, Creep, Point, Target, get_direction
from swampbot.utilities.geometry import get_range

if TYPE_CHECKING:
    from swampbot.bot import SwampBot

logger = logging.getLogger(__name__)

TargetKey = Union[str, tuple[int, int]]


def target_key(target: Target) -> TargetKey:
    """Identity of a movement goal: the object's id, or its coordinates for bare positions."""
    target_id = getattr(target, "id", None)
    if target_id is not None:
        return target_id
    return (target.x, target.y)


@dataclass
class PathCacheEntry:
    """Memoized route of one creep toward one goal."""

    target: TargetKey
    tick: int
    origin: Point
    path: list[Point] = field(default_factory=list)
    cursor: int = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.path)

    @property
    def expected_position(self) -> Point:
        """Cell the creep should be standing on given the cursor."""
        return self.path[self.cursor - 1] if self.cursor > 0 else self.origin

    def confirm_progress(self, creep: Creep) -> None:
        """Advance past the next step if the creep is standing on it."""
        if not self.exhausted and self.path[self.cursor] == (creep.x, creep.y):
            self.cursor += 1


class PathCache:
    """
    Per-creep route memo plus the movement controller built on it.

    An entry is reused only while:
    - its goal identity matches the requested one
    - fewer than refresh_interval ticks have passed since it was computed
    - its cursor has steps left
    - the creep is within drift_tolerance of the cell the cursor predicts
    Anything else forces a new find_path call before the creep moves.
    """

    def __init__(self, refresh_interval: int, drift_tolerance: int):
        self.refresh_interval = refresh_interval
        self.drift_tolerance = drift_tolerance
        self.entries: dict[str, PathCacheEntry] = {}
        self._moved: set[str] = set()
        self._tick: Optional[int] = None

        # Counters read by the performance monitor
        self.hits = 0
        self.recomputes = 0
        self.failures = 0

    def begin_tick(self, tick: int) -> None:
        self._tick = tick
        self._moved.clear()

    def prune(self, alive_ids: set[str]) -> int:
        """Drop entries of creeps that no longer exist. Returns how many were dropped."""
        dead = [creep_id for creep_id in self.entries if creep_id not in alive_ids]
        for creep_id in dead:
            del self.entries[creep_id]
        return len(dead)

    def is_valid(self, entry: PathCacheEntry, creep: Creep, key: TargetKey, tick: int) -> bool:
        if entry.target != key:
            return False
        if tick - entry.tick >= self.refresh_interval:
            return False
        if entry.exhausted:
            return False
        return get_range(entry.expected_position, creep) <= self.drift_tolerance

    def move_toward(
        self,
        game: ArenaGame,
        creep: Creep,
        target: Target,
        ignore_creeps: bool = False,
    ) -> bool:
        """
        Issue a single-cell move for creep along a cached route to target.

        Args:
            game: Arena used for find_path and the tick counter
            creep: Creep to move
            target: Object with an id, or a bare Point
            ignore_creeps: Path through other creeps (they are expected to move)

        Returns:
            True if a move was issued this call, False otherwise (already moved this tick,
            no path, or already at the goal)
        """
        if creep.id in self._moved:
            return False

        tick = self._tick if self._tick is not None else game.get_ticks()
        key = target_key(target)
        entry = self.entries.get(creep.id)
        if entry is not None:
            entry.confirm_progress(creep)

        if entry is None or not self.is_valid(entry, creep, key, tick):
            path = game.find_path(creep, target, ignore_creeps=ignore_creeps)
            if not path:
                # Unreachable this tick - no move, caller decides next tick
                self.entries.pop(creep.id, None)
                self.failures += 1
                logger.debug(f"No path for {creep.id} to {key}")
                return False

            entry = PathCacheEntry(
                target=key,
                tick=tick,
                origin=Point(creep.x, creep.y),
                path=[Point(step.x, step.y) for step in path],
            )
            entry.confirm_progress(creep)
            self.entries[creep.id] = entry
            self.recomputes += 1
            logger.debug(f"Path for {creep.id} to {key}: {len(entry.path)} steps at tick {tick}")
            if entry.exhausted:
                return False
        else:
            self.hits += 1

        step = entry.path[entry.cursor]
        direction = get_direction(step.x - creep.x, step.y - creep.y)
        if direction is None:
            return False
        creep.move(direction)
        self._moved.add(creep.id)
        return True


def move_toward(bot: "SwampBot", creep: Creep, target: Target, ignore_creeps: bool = False) -> bool:
    """Move creep one step toward target through the bot's path cache."""
    return bot.path_cache.move_toward(bot.game, creep, target, ignore_creeps=ignore_creeps)
