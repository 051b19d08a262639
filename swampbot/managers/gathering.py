"""Gatherer economy loop and the wall blocking resource access.

Purpose: Keep energy flowing from containers/sources into extensions, the spawn and construction sites
Key Decisions: Retreat to the spawn from any enemy in flee radius (no flee vector); extensions before the spawn; containers before sources
Limitations: Nearest-by-range, not by path - a closer but walled container can still be picked
"""

import logging
from typing import TYPE_CHECKING, Optional

from swampbot.arena import RESOURCE_ENERGY, Creep, ResultCode, Structure, StructureType
from swampbot.combat.movement import move_toward
from swampbot.constants import GATHERER_SAFE_RANGE
from swampbot.utilities.geometry import closest_by_range, get_range, in_range

if TYPE_CHECKING:
    from swampbot.bot import SwampBot

logger = logging.getLogger(__name__)


def _has_stock(structure: Structure) -> bool:
    return structure.store is not None and structure.store.get_used_capacity(RESOURCE_ENERGY) > 0


def _has_room(structure: Structure) -> bool:
    return structure.store is not None and structure.store.get_free_capacity(RESOURCE_ENERGY) > 0


def control_gatherer(bot: "SwampBot", creep: Creep) -> None:
    """
    One tick of a gatherer.

    Priority:
    1. Any enemy within flee radius - retreat to the spawn
    2. Full - build the nearest construction site, else deliver
    3. Otherwise - withdraw from a stocked container, else harvest a source
    """
    snapshot = bot.snapshot
    home = snapshot.my_spawn

    threats = in_range(creep, snapshot.enemy_creeps, bot.config.flee_radius)
    if threats and home is not None and get_range(creep, home) > GATHERER_SAFE_RANGE:
        move_toward(bot, creep, home)
        return

    if creep.store.get_free_capacity(RESOURCE_ENERGY) == 0:
        deliver_energy(bot, creep)
    else:
        collect_energy(bot, creep)


def deliver_energy(bot: "SwampBot", creep: Creep) -> bool:
    """
    Spend a full load: construction sites first, then extensions, then the spawn.

    Returns:
        False when there is nowhere to put the energy
    """
    snapshot = bot.snapshot
    if creep.store.get_used_capacity(RESOURCE_ENERGY) > 0 and snapshot.construction_sites:
        site = closest_by_range(creep, snapshot.construction_sites)
        if creep.build(site) == ResultCode.ERR_NOT_IN_RANGE:
            move_toward(bot, creep, site)
        return True

    extensions = [e for e in snapshot.my_structures(StructureType.EXTENSION) if _has_room(e)]
    target = closest_by_range(creep, extensions)
    if target is None and snapshot.my_spawn is not None and _has_room(snapshot.my_spawn):
        target = snapshot.my_spawn
    if target is None:
        return False

    if creep.transfer(target, RESOURCE_ENERGY) == ResultCode.ERR_NOT_IN_RANGE:
        move_toward(bot, creep, target)
    return True


def collect_energy(bot: "SwampBot", creep: Creep) -> bool:
    """
    Fill up from the nearest stocked container, or harvest the nearest live source.

    Returns:
        False when nothing holds energy
    """
    snapshot = bot.snapshot
    containers = [
        s for s in snapshot.structures if s.structure_type == StructureType.CONTAINER and _has_stock(s)
    ]
    container = closest_by_range(creep, containers)
    if container is not None:
        if creep.withdraw(container, RESOURCE_ENERGY) == ResultCode.ERR_NOT_IN_RANGE:
            move_toward(bot, creep, container)
        return True

    source = closest_by_range(creep, [s for s in snapshot.sources if s.energy > 0])
    if source is not None:
        if creep.harvest(source) == ResultCode.ERR_NOT_IN_RANGE:
            move_toward(bot, creep, source)
        return True
    return False


def select_blocking_wall(bot: "SwampBot") -> Optional[Structure]:
    """
    Wall that encloses a stocked container, closest to our spawn.

    The choice is kept by id while the wall stands and re-made once it is
    gone from the structure snapshot.
    """
    snapshot = bot.snapshot
    if bot.target_wall_id is not None:
        wall = snapshot.structures_by_id.get(bot.target_wall_id)
        if wall is not None:
            return wall
        logger.info(f"Wall {bot.target_wall_id} demolished")
        bot.target_wall_id = None

    home = snapshot.my_spawn
    if home is None:
        return None
    containers = [
        s for s in snapshot.structures if s.structure_type == StructureType.CONTAINER and _has_stock(s)
    ]
    walls = [s for s in snapshot.structures if s.structure_type == StructureType.WALL]
    blocking = [w for w in walls if any(get_range(w, c) == 1 for c in containers)]
    wall = closest_by_range(home, blocking)
    if wall is not None:
        bot.target_wall_id = wall.id
        logger.info(f"Reserve fighters assigned to wall {wall.id} at ({wall.x}, {wall.y})")
    return wall
