# swampbot/managers/structure_manager.py

from typing import TYPE_CHECKING

from swampbot.arena import ResultCode, StructureType
from swampbot.utilities.geometry import closest_by_range

if TYPE_CHECKING:
    from swampbot.bot import SwampBot


def control_towers(bot: "SwampBot") -> int:
    """
    Fires every ready tower at the enemy creep closest to our spawn.

    Towers on cooldown are skipped. With no spawn left, each tower picks the
    enemy closest to itself.

    Args:
        bot: The bot instance

    Returns:
        int: Number of towers that fired successfully
    """
    enemies = bot.snapshot.enemy_creeps
    if not enemies:
        return 0

    home = bot.snapshot.my_spawn
    fired = 0
    for tower in bot.snapshot.my_structures(StructureType.TOWER):
        if tower.cooldown:
            continue
        target = closest_by_range(home if home is not None else tower, enemies)
        if tower.attack(target) == ResultCode.OK:
            fired += 1
    return fired
