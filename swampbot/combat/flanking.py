"""One-shot flank waypoint selection.

Purpose: Give the fast sub-squad an approach on the other side of the map from the main push
Key Decisions: Read which lateral half the shortest spawn-to-spawn path uses, mirror to the other half near the enemy edge
Limitations: Computed once per game; terrain changes afterwards are ignored
"""

import logging
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from swampbot.arena import Point, Positioned
from swampbot.constants import FLANK_EDGE_MARGIN, FLANK_LATERAL_OFFSET

if TYPE_CHECKING:
    from swampbot.bot import SwampBot

logger = logging.getLogger(__name__)


def compute_flank_waypoint(
    home: Positioned,
    enemy: Positioned,
    path: Optional[Sequence[Positioned]],
    map_width: int,
    map_height: int,
    edge_margin: int = FLANK_EDGE_MARGIN,
    lateral_offset: int = FLANK_LATERAL_OFFSET,
) -> Point:
    """
    Waypoint on the lateral half the shortest path does not use.

    When the spawns are further apart horizontally than vertically the lateral
    halves are north/south of the horizontal center line, otherwise west/east
    of the vertical one. The waypoint sits `lateral_offset` cells into the
    opposite half and `edge_margin` cells from the map edge on the enemy side.

    Args:
        home: Our spawn
        enemy: Enemy spawn
        path: Shortest path between them, or None to fall back to the straight-line midpoint
        map_width: Arena width in cells
        map_height: Arena height in cells

    Returns:
        The waypoint, clamped inside the map
    """
    if path:
        cells = np.array([(p.x, p.y) for p in path])
        mid = cells[len(cells) // 2]
    else:
        mid = np.array([(home.x + enemy.x) / 2, (home.y + enemy.y) / 2])

    center = np.array([map_width / 2, map_height / 2])
    horizontal = abs(enemy.x - home.x) >= abs(enemy.y - home.y)
    # axis along the push, and the lateral axis across it
    push, lateral = (0, 1) if horizontal else (1, 0)
    enemy_pos = (enemy.x, enemy.y)
    home_pos = (home.x, home.y)
    size = (map_width, map_height)

    waypoint = np.zeros(2)
    if enemy_pos[push] >= home_pos[push]:
        waypoint[push] = size[push] - 1 - edge_margin
    else:
        waypoint[push] = edge_margin
    # path on the low half (north / west) -> go high, and the reverse
    side = 1 if mid[lateral] < center[lateral] else -1
    waypoint[lateral] = center[lateral] + side * lateral_offset

    waypoint = np.clip(np.rint(waypoint), 0, np.array(size) - 1)
    return Point(int(waypoint[0]), int(waypoint[1]))


def plan_flank_waypoint(bot: "SwampBot") -> Optional[Point]:
    """
    Flank waypoint for this game, computed on first successful call.

    Returns the cached waypoint once set. Returns None (and tries again next
    call) while either spawn is unknown.
    """
    if bot.flank_waypoint is not None:
        return bot.flank_waypoint

    home, enemy = bot.snapshot.my_spawn, bot.snapshot.enemy_spawn
    if home is None or enemy is None:
        return None

    path = bot.game.find_path(home, enemy, ignore_creeps=True)
    if not path:
        logger.warning("No spawn-to-spawn path for flank planning, using straight-line midpoint")
    bot.flank_waypoint = compute_flank_waypoint(
        home, enemy, path, bot.config.map_width, bot.config.map_height
    )
    logger.info(f"Flank waypoint fixed at {bot.flank_waypoint}")
    return bot.flank_waypoint
