"""Per-creep combat decisions for fighters, medics and flankers.

Purpose: Turn squad / role state into one tick of actions for a single creep
Key Decisions: Each function walks a fixed priority chain and falls through to holding near the base
Limitations: Assumes the squad tables were reconciled earlier in the same tick
"""

from typing import TYPE_CHECKING, Optional, Sequence

from swampbot.arena import BodyPart, Creep, Positioned, ResultCode
from swampbot.combat.flanking import plan_flank_waypoint
from swampbot.combat.movement import move_toward
from swampbot.constants import (
    FLANK_WAYPOINT_RETRIES,
    MEDIC_FOLLOW_DISTANCE,
    MELEE_RANGE,
    RANGED_RANGE,
    RESERVE_HEAL_RADIUS,
)
from swampbot.managers.roles import is_armed
from swampbot.managers.squads import Squad
from swampbot.utilities.geometry import closest_by_range, get_range, in_range

if TYPE_CHECKING:
    from swampbot.bot import SwampBot


def attack_target(creep: Creep, target: Positioned) -> ResultCode:
    """
    Hit target with the best weapon for the current range.

    Melee when adjacent (or when melee is all the creep has), ranged otherwise.
    """
    parts = set(creep.body)
    if BodyPart.ATTACK in parts and (BodyPart.RANGED_ATTACK not in parts or get_range(creep, target) <= MELEE_RANGE):
        return creep.attack(target)
    if BodyPart.RANGED_ATTACK in parts:
        return creep.ranged_attack(target)
    return creep.attack(target)


def strike(creep: Creep, enemies: Sequence[Creep]) -> bool:
    """
    Attack the weakest enemy already within weapon reach.

    Returns:
        True if an attack landed
    """
    reach = RANGED_RANGE if BodyPart.RANGED_ATTACK in creep.body else MELEE_RANGE
    targets = in_range(creep, enemies, reach)
    if not targets:
        return False
    weakest = min(targets, key=lambda e: (e.hits, get_range(creep, e)))
    return attack_target(creep, weakest) == ResultCode.OK


def tend(bot: "SwampBot", medic: Creep, patient: Creep, follow_distance: int = MEDIC_FOLLOW_DISTANCE) -> None:
    """Heal patient at whatever range works and stay within follow_distance of it."""
    distance = get_range(medic, patient)
    if distance <= MELEE_RANGE:
        medic.heal(patient)
    else:
        medic.ranged_heal(patient)
    if distance > follow_distance:
        move_toward(bot, medic, patient)


def hold_near_base(bot: "SwampBot", creep: Creep) -> None:
    home = bot.snapshot.my_spawn
    if home is not None and get_range(creep, home) > bot.config.hold_range:
        move_toward(bot, creep, home)


def _most_wounded(creeps: Sequence[Creep]) -> Optional[Creep]:
    wounded = [c for c in creeps if c.hits < c.hits_max]
    if not wounded:
        return None
    return min(wounded, key=lambda c: c.hits / c.hits_max)


def advance_on_enemy_spawn(bot: "SwampBot", creep: Creep) -> None:
    enemy_spawn = bot.snapshot.enemy_spawn
    if enemy_spawn is None:
        hold_near_base(bot, creep)
        return
    if not is_armed(creep) or attack_target(creep, enemy_spawn) == ResultCode.ERR_NOT_IN_RANGE:
        move_toward(bot, creep, enemy_spawn)


# -- Fighters ----------------------------------------------------------------

def micro_squad_fighter(bot: "SwampBot", creep: Creep, squad: Squad) -> None:
    """
    Deployed fighter of an assault squad.

    1. Too far from the leader: hit whatever is adjacent and close the gap
    2. Focus target set: attack it, or hit nearby enemies while closing in
    3. No target: defend against enemies in reach, otherwise push the enemy spawn
    """
    snapshot = bot.snapshot
    enemies = snapshot.enemy_creeps

    leader = snapshot.creeps_by_id.get(squad.leader_id) if squad.leader_id else None
    if leader is not None and leader.id != creep.id and get_range(creep, leader) > bot.config.cohesion_radius:
        strike(creep, enemies)
        move_toward(bot, creep, leader)
        return

    target = snapshot.creeps_by_id.get(squad.target_id) if squad.target_id else None
    if target is not None:
        if attack_target(creep, target) == ResultCode.ERR_NOT_IN_RANGE:
            strike(creep, enemies)
            move_toward(bot, creep, target)
        return

    if strike(creep, enemies):
        return
    advance_on_enemy_spawn(bot, creep)


def micro_reserve_fighter(bot: "SwampBot", creep: Creep) -> None:
    """
    Undeployed fighter waiting for its wave.

    Self-defense first, then demolish the wall blocking the containers, then hold.
    """
    if strike(creep, bot.snapshot.enemy_creeps):
        return

    wall = bot.snapshot.structures_by_id.get(bot.target_wall_id) if bot.target_wall_id else None
    if wall is not None:
        if attack_target(creep, wall) == ResultCode.ERR_NOT_IN_RANGE:
            move_toward(bot, creep, wall)
        return

    hold_near_base(bot, creep)


def micro_flanker(bot: "SwampBot", creep: Creep, squad: Squad) -> None:
    """
    Member of the fast flanking sub-squad.

    Stage 1 routes through the flank waypoint, stage 2 beelines to the enemy
    spawn. Enemies in reach are hit on the way in both stages. A tick without
    a path to the waypoint is a miss for that tick only; after
    FLANK_WAYPOINT_RETRIES misses in a row the creep moves on to stage 2.
    """
    strike(creep, bot.snapshot.enemy_creeps)

    waypoint = plan_flank_waypoint(bot)
    if waypoint is not None and creep.id not in bot.flank_reached:
        if get_range(creep, waypoint) <= bot.config.flank_reached_radius:
            bot.flank_reached.add(creep.id)
            bot.flank_misses.pop(creep.id, None)
        elif move_toward(bot, creep, waypoint, ignore_creeps=True):
            bot.flank_misses.pop(creep.id, None)
            return
        else:
            misses = bot.flank_misses.get(creep.id, 0) + 1
            if misses < FLANK_WAYPOINT_RETRIES:
                bot.flank_misses[creep.id] = misses
                return
            bot.flank_misses.pop(creep.id, None)
            bot.flank_reached.add(creep.id)

    advance_on_enemy_spawn(bot, creep)


# -- Medics ------------------------------------------------------------------

def micro_squad_medic(bot: "SwampBot", creep: Creep, squad: Squad) -> None:
    """
    Deployed medic.

    Heals the most wounded squadmate; with nobody hurt it keeps healing the
    leader (or the nearest squadmate) to absorb the next hit. When the squad
    is gone it attaches to any other deployed creep, or advances alone.
    """
    snapshot = bot.snapshot
    mates = [
        snapshot.creeps_by_id[m] for m in squad.member_ids if m != creep.id and m in snapshot.creeps_by_id
    ]

    if not mates:
        others = [
            c for c in snapshot.my_creeps if c.id != creep.id and bot.squads.is_deployed(c.id)
        ]
        patient = _most_wounded(others) or closest_by_range(creep, others)
        if patient is not None:
            tend(bot, creep, patient)
        else:
            advance_on_enemy_spawn(bot, creep)
        return

    patient = _most_wounded(mates)
    if patient is None:
        leader = snapshot.creeps_by_id.get(squad.leader_id) if squad.leader_id else None
        patient = leader if leader in mates else closest_by_range(creep, mates)
    tend(bot, creep, patient)


def micro_reserve_medic(bot: "SwampBot", creep: Creep) -> None:
    """
    Undeployed medic guarding the base.

    Heal the most wounded friendly nearby, else intercept threats near the
    spawn, else hold position.
    """
    snapshot = bot.snapshot
    patient = _most_wounded(in_range(creep, snapshot.my_creeps, RESERVE_HEAL_RADIUS))
    if patient is not None:
        tend(bot, creep, patient)
        return

    home = snapshot.my_spawn
    threats = in_range(home, snapshot.enemy_creeps, bot.config.base_defense_radius) if home else []
    if threats:
        closest = closest_by_range(creep, threats)
        if is_armed(creep):
            if attack_target(creep, closest) == ResultCode.ERR_NOT_IN_RANGE:
                move_toward(bot, creep, closest)
        elif get_range(creep, closest) > MELEE_RANGE:
            # Unarmed - body-block the intruder
            move_toward(bot, creep, closest)
        return

    hold_near_base(bot, creep)
