"""Squad formation, leadership and focus-target designation.

Purpose: Own every squad record and the unit -> squad membership map
Key Decisions: Squads form atomically from a full composition; empty squads are kept (leaderless) until their name is reused
Limitations: Leader succession is by member order, not by position or health
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import cycle
from typing import Iterable, Optional, Sequence

from swampbot.arena import Creep
from swampbot.config import Composition, TargetPolicy
from swampbot.managers.roles import is_armed
from swampbot.utilities.geometry import get_range, in_range

logger = logging.getLogger(__name__)


class SquadKind(str, Enum):
    ASSAULT = "assault"
    FLANK = "flank"


@dataclass
class Squad:
    """A group of deployed fighters and medics with one leader and one focus target."""

    name: str
    composition: Composition
    kind: SquadKind = SquadKind.ASSAULT
    member_ids: list[str] = field(default_factory=list)
    fighter_ids: list[str] = field(default_factory=list)
    leader_id: Optional[str] = None
    target_id: Optional[str] = None
    formed_at: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.member_ids


class SquadManager:
    """
    Squad tables for one game.

    Membership doubles as deployment tracking: a creep is deployed exactly
    when it belongs to a squad.
    """

    def __init__(
        self,
        names: Sequence[str],
        target_policy: TargetPolicy = TargetPolicy.STICKY,
        detection_radius: int = 10,
    ):
        self.squads: dict[str, Squad] = {}
        self.unit_squad: dict[str, str] = {}
        self.target_policy = target_policy
        self.detection_radius = detection_radius
        self.formed_count = 0

        self._pool_size = len(names)
        self._names = cycle(names)
        self._issued = 0

    # -- Lookups -------------------------------------------------------------

    def squad_of(self, unit_id: str) -> Optional[Squad]:
        name = self.unit_squad.get(unit_id)
        return self.squads.get(name) if name is not None else None

    def is_deployed(self, unit_id: str) -> bool:
        return unit_id in self.unit_squad

    def active_squads(self, kind: Optional[SquadKind] = None) -> list[Squad]:
        """Squads with at least one live member, optionally of one kind."""
        return [s for s in self.squads.values() if not s.is_empty and (kind is None or s.kind == kind)]

    # -- Formation -----------------------------------------------------------

    def _next_name(self) -> str:
        """Next name from the cyclic pool that no live squad is using."""
        in_use = {s.name for s in self.squads.values() if not s.is_empty}
        for _ in range(self._pool_size):
            name = next(self._names)
            self._issued += 1
            if name not in in_use:
                return name

        # Every pool name is held by a live squad
        base = next(self._names)
        self._issued += 1
        generation = self._issued // self._pool_size + 1
        name = f"{base}-{generation}"
        while name in in_use:
            generation += 1
            name = f"{base}-{generation}"
        return name

    def form_squad(
        self,
        fighters: Sequence[Creep],
        medics: Sequence[Creep],
        composition: Composition,
        kind: SquadKind = SquadKind.ASSAULT,
        tick: int = 0,
    ) -> Optional[Squad]:
        """
        Form one squad from undeployed creeps, all or nothing.

        The first `composition.fighters` fighters and first `composition.medics`
        medics are taken in the order given; the first fighter leads.

        Args:
            fighters: Undeployed fighters in selection order
            medics: Undeployed medics in selection order
            composition: Quota the squad must fill
            kind: Assault or flank squad
            tick: Current tick, recorded on the squad

        Returns:
            The new squad, or None if either pool is short
        """
        if len(fighters) < composition.fighters or len(medics) < composition.medics:
            return None
        chosen_fighters = list(fighters[: composition.fighters])
        chosen_medics = list(medics[: composition.medics])
        if any(self.is_deployed(c.id) for c in chosen_fighters + chosen_medics):
            return None

        squad = Squad(
            name=self._next_name(),
            composition=composition,
            kind=kind,
            member_ids=[c.id for c in chosen_fighters + chosen_medics],
            fighter_ids=[c.id for c in chosen_fighters],
            leader_id=chosen_fighters[0].id,
            formed_at=tick,
        )
        self.squads[squad.name] = squad
        for member_id in squad.member_ids:
            self.unit_squad[member_id] = squad.name
        self.formed_count += 1

        logger.info(
            f"Squad {squad.name} ({kind.value}) formed at tick {tick}: "
            f"{len(chosen_fighters)} fighters, {len(chosen_medics)} medics, leader {squad.leader_id}"
        )
        return squad

    # -- Upkeep --------------------------------------------------------------

    def prune(self, alive_ids: set[str]) -> int:
        """
        Remove dead creeps from membership, leadership and focus targets.

        alive_ids must cover both sides so that dead enemies drop out of
        focus targets too. Returns the number of member entries removed.
        """
        removed = 0
        for unit_id in [u for u in self.unit_squad if u not in alive_ids]:
            del self.unit_squad[unit_id]
            removed += 1
        for squad in self.squads.values():
            squad.member_ids = [m for m in squad.member_ids if m in alive_ids]
            squad.fighter_ids = [m for m in squad.fighter_ids if m in alive_ids]
            if squad.leader_id is not None and squad.leader_id not in alive_ids:
                squad.leader_id = None
            if squad.target_id is not None and squad.target_id not in alive_ids:
                squad.target_id = None
        return removed

    def reconcile_leader(self, squad: Squad, live_fighter_ids: Iterable[str]) -> Optional[str]:
        """
        Make sure the squad's leader is one of its live deployed fighters.

        Keeps the current leader if valid, otherwise promotes the first surviving
        fighter of the squad, otherwise leaves the squad leaderless.

        Returns:
            The leader id after reconciliation, or None
        """
        live = set(live_fighter_ids)
        candidates = [m for m in squad.fighter_ids if m in live and self.unit_squad.get(m) == squad.name]
        if squad.leader_id in candidates:
            return squad.leader_id

        previous = squad.leader_id
        squad.leader_id = candidates[0] if candidates else None
        if squad.leader_id is not None:
            logger.info(f"Squad {squad.name}: {squad.leader_id} takes over from {previous}")
        elif previous is not None or squad.member_ids:
            logger.info(f"Squad {squad.name} is leaderless ({len(squad.member_ids)} members left)")
        return squad.leader_id

    def designate_target(self, squad: Squad, leader: Creep, enemies: Sequence[Creep]) -> Optional[str]:
        """
        Leader picks the squad's focus target among enemies in detection range.

        Armed enemies come before unarmed ones, then the closest wins. With the
        sticky policy a target that is still in range is kept.

        Args:
            squad: Squad to update
            leader: Must be the squad's current leader, otherwise nothing changes
            enemies: Live enemy creeps

        Returns:
            The focus target id after the update, or None
        """
        if leader.id != squad.leader_id:
            return squad.target_id

        in_reach = in_range(leader, enemies, self.detection_radius)
        if self.target_policy == TargetPolicy.STICKY and squad.target_id is not None:
            if any(e.id == squad.target_id for e in in_reach):
                return squad.target_id

        if not in_reach:
            squad.target_id = None
            return None

        best = min(in_reach, key=lambda e: (not is_armed(e), get_range(leader, e)))
        if best.id != squad.target_id:
            logger.debug(f"Squad {squad.name} focus -> {best.id}")
        squad.target_id = best.id
        return squad.target_id

    def update(self, creeps_by_id: dict[str, Creep], fighter_ids: set[str], enemies: Sequence[Creep]) -> None:
        """Reconcile leaders and refresh focus targets of every live squad."""
        for squad in self.active_squads():
            leader_id = self.reconcile_leader(squad, fighter_ids)
            if leader_id is None:
                squad.target_id = None
                continue
            self.designate_target(squad, creeps_by_id[leader_id], enemies)
