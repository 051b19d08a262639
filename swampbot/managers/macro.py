import logging
from typing import TYPE_CHECKING, Optional

from swampbot.arena import BodyPart, Point, ResultCode, StructureType
from swampbot.constants import (
    EXTENSION_OFFSETS,
    FIGHTER_BODY,
    FIGHTER_TARGET,
    GATHERER_BODY,
    GATHERER_TARGET,
    MAX_EXTENSIONS,
    MEDIC_BODY,
    MEDIC_TARGET,
    TOWER_OFFSET,
)
from swampbot.managers.roles import Role

if TYPE_CHECKING:
    from swampbot.bot import SwampBot

logger = logging.getLogger(__name__)


def choose_spawn_body(roster: dict) -> tuple[BodyPart, ...]:
    """
    Next body to spawn from the priority plan.

    Gatherers first, then the opening fighters, then medics, then fighters
    for the rest of the game.

    Args:
        roster: Own creeps grouped by Role

    Returns:
        Body part tuple for the spawn request
    """
    if len(roster.get(Role.GATHERER, [])) < GATHERER_TARGET:
        return GATHERER_BODY
    if len(roster.get(Role.FIGHTER, [])) < FIGHTER_TARGET:
        return FIGHTER_BODY
    if len(roster.get(Role.MEDIC, [])) < MEDIC_TARGET:
        return MEDIC_BODY
    return FIGHTER_BODY


def manage_production(bot: "SwampBot") -> Optional[tuple[BodyPart, ...]]:
    """
    Queue the next creep when the spawn is idle.

    Returns:
        The body requested, or None if the spawn was busy or missing
    """
    spawn = bot.snapshot.my_spawn
    if spawn is None or spawn.is_busy():
        return None

    body = choose_spawn_body(bot.roster)
    result = spawn.spawn_creep(list(body))
    if result != ResultCode.OK:
        logger.debug(f"Spawn request {[p.value for p in body]} refused: {result}")
        return None
    return body


def manage_construction(bot: "SwampBot") -> list[tuple[Point, StructureType]]:
    """
    Request extensions around the spawn and, after the first wave, a tower and rampart.

    Extensions: once a gatherer exists, keep MAX_EXTENSIONS built or planned,
    requesting at most one per tick on the first free offset cell.
    Defenses: once the first squad has deployed and no tower or site exists.

    Returns:
        The (cell, type) pairs requested this tick
    """
    snapshot = bot.snapshot
    home = snapshot.my_spawn
    if home is None:
        return []

    requested: list[tuple[Point, StructureType]] = []
    sites = snapshot.construction_sites

    if bot.roster.get(Role.GATHERER):
        built = snapshot.my_structures(StructureType.EXTENSION)
        planned = [s for s in sites if s.structure_type == StructureType.EXTENSION]
        if len(built) + len(planned) < MAX_EXTENSIONS:
            occupied = {(s.x, s.y) for s in sites} | {(s.x, s.y) for s in snapshot.structures}
            for dx, dy in EXTENSION_OFFSETS:
                cell = Point(home.x + dx, home.y + dy)
                if cell in occupied:
                    continue
                bot.game.create_construction_site(cell.x, cell.y, StructureType.EXTENSION)
                requested.append((cell, StructureType.EXTENSION))
                break

    if bot.deployment.first_deployment_done:
        towers = snapshot.my_structures(StructureType.TOWER)
        if not towers and not sites and not requested:
            tower_cell = Point(home.x + TOWER_OFFSET[0], home.y + TOWER_OFFSET[1])
            bot.game.create_construction_site(tower_cell.x, tower_cell.y, StructureType.TOWER)
            bot.game.create_construction_site(home.x, home.y, StructureType.RAMPART)
            requested.append((tower_cell, StructureType.TOWER))
            requested.append((Point(home.x, home.y), StructureType.RAMPART))

    for cell, kind in requested:
        logger.info(f"Requested {kind.value} at {cell}")
    return requested
