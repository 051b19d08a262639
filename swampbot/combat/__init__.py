"""Combat package for the arena bot.

Handles movement along cached paths, flank planning and per-creep fighting and healing decisions.
"""

from swampbot.constants import (
    COHESION_RADIUS,
    DETECTION_RADIUS,
    FLANK_REACHED_RADIUS,
    MELEE_RANGE,
    RANGED_RANGE,
)

from swampbot.combat.movement import (
    PathCache,
    PathCacheEntry,
    move_toward,
    target_key,
)

from swampbot.combat.flanking import (
    compute_flank_waypoint,
    plan_flank_waypoint,
)

from swampbot.combat.unit_micro import (
    attack_target,
    strike,
    tend,
    micro_squad_fighter,
    micro_reserve_fighter,
    micro_flanker,
    micro_squad_medic,
    micro_reserve_medic,
)

__all__ = [
    # Constants
    "COHESION_RADIUS",
    "DETECTION_RADIUS",
    "FLANK_REACHED_RADIUS",
    "MELEE_RANGE",
    "RANGED_RANGE",
    # Movement
    "PathCache",
    "PathCacheEntry",
    "move_toward",
    "target_key",
    # Flanking
    "compute_flank_waypoint",
    "plan_flank_waypoint",
    # Unit micro functions
    "attack_target",
    "strike",
    "tend",
    "micro_squad_fighter",
    "micro_reserve_fighter",
    "micro_flanker",
    "micro_squad_medic",
    "micro_reserve_medic",
]
