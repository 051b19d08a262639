"""Per-tick cleanup of tables that reference destroyed creeps.

Purpose: Keep every bot-owned table free of dead ids before any decision reads it
Key Decisions: Liveness comes only from the roster snapshot taken at tick start
Limitations: None - pure bookkeeping
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from swampbot.bot import SwampBot

logger = logging.getLogger(__name__)


def prune_dead_units(bot: "SwampBot", alive_ids: set[str]) -> int:
    """
    Remove every entry for a creep id missing from alive_ids.

    Covers the path cache, squad membership / leaders / focus targets and the
    flank stage and retry tracking. alive_ids should hold both sides' creeps.

    Args:
        bot: Bot whose tables are pruned
        alive_ids: Ids of every creep alive this tick

    Returns:
        Number of own creeps found dead this tick
    """
    lost = bot.squads.prune(alive_ids)
    dropped_paths = bot.path_cache.prune(alive_ids)
    stale_flankers = bot.flank_reached - alive_ids
    bot.flank_reached -= stale_flankers
    for creep_id in [c for c in bot.flank_misses if c not in alive_ids]:
        del bot.flank_misses[creep_id]

    # Reserve creeps are not in any squad table - count them from the previous roster
    gone = bot.known_own_ids - alive_ids
    bot.known_own_ids &= alive_ids

    if gone:
        logger.debug(
            f"Pruned {len(gone)} dead creeps: {lost} squad members, "
            f"{dropped_paths} paths, {len(stale_flankers)} flankers"
        )
    return len(gone)
