"""Role classification by loadout.

Purpose: Map each creep's body to exactly one behavioral role, fresh every tick
Key Decisions: Pure function with fixed precedence CARRY > HEAL > offensive; no state is stored
Limitations: Looks only at part kinds - damaged parts still count
"""

from enum import Enum
from typing import Iterable, Sequence

from swampbot.arena import OFFENSIVE_PARTS, BodyPart, Creep


class Role(str, Enum):
    GATHERER = "gatherer"
    MEDIC = "medic"
    FIGHTER = "fighter"
    INERT = "inert"


def classify(body: Iterable[BodyPart]) -> Role:
    """
    Role for a loadout.

    Precedence: any CARRY part makes a gatherer, else any HEAL part a medic,
    else any ATTACK / RANGED_ATTACK part a fighter. Anything else is inert
    and gets no behavior.
    """
    parts = set(body)
    if BodyPart.CARRY in parts:
        return Role.GATHERER
    if BodyPart.HEAL in parts:
        return Role.MEDIC
    if parts & OFFENSIVE_PARTS:
        return Role.FIGHTER
    return Role.INERT


def partition_roster(creeps: Sequence[Creep]) -> dict[Role, list[Creep]]:
    """Group creeps by role, keeping roster order inside each group."""
    roster: dict[Role, list[Creep]] = {role: [] for role in Role}
    for creep in creeps:
        roster[classify(creep.body)].append(creep)
    return roster


def is_armed(creep: Creep) -> bool:
    """True when the creep carries at least one offensive part."""
    return any(part in OFFENSIVE_PARTS for part in creep.body)


def move_ratio(creep: Creep) -> float:
    """Share of MOVE parts in the body - higher means faster over rough terrain."""
    if not creep.body:
        return 0.0
    return sum(1 for part in creep.body if part == BodyPart.MOVE) / len(creep.body)
