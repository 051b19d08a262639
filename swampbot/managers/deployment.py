"""Wave-based release of reserve fighters and medics into squads.

Purpose: Decide when undeployed creeps stop holding the base and join a new squad
Key Decisions: A wave deploys only when its whole quota is available at once, and only while the spawn is idle
Limitations: No terminal state - squads keep forming as long as reinforcements arrive
"""

import logging
from enum import Enum
from typing import Sequence

from swampbot.arena import Creep
from swampbot.config import BotConfig
from swampbot.managers.roles import move_ratio
from swampbot.managers.squads import Squad, SquadKind, SquadManager

logger = logging.getLogger(__name__)


class DeploymentPhase(str, Enum):
    FIRST_WAVE = "first_wave"
    """Waiting for the opening wave quota"""

    STEADY = "steady"
    """Reinforcement waves (and the flanking sub-squad) form whenever their quota is met"""


class DeploymentSequencer:
    """Phase machine over named waves, run once per tick."""

    def __init__(self, config: BotConfig):
        self.config = config
        self.phase = DeploymentPhase.FIRST_WAVE
        self.waves_deployed = 0
        self.flank_squads_deployed = 0

    @property
    def first_deployment_done(self) -> bool:
        """Read by construction to gate defensive building."""
        return self.phase != DeploymentPhase.FIRST_WAVE

    def step(
        self,
        squads: SquadManager,
        fighters: Sequence[Creep],
        medics: Sequence[Creep],
        production_busy: bool,
        tick: int,
    ) -> list[Squad]:
        """
        Form every squad whose quota the reserve pools can fill this tick.

        Args:
            squads: Squad tables to form into
            fighters: All live fighters this tick (deployed ones are skipped)
            medics: All live medics this tick
            production_busy: True while the spawn is mid-production
            tick: Current tick

        Returns:
            Squads formed this tick, in formation order
        """
        if self.config.wait_for_idle_production and production_busy:
            return []

        reserve_fighters = [f for f in fighters if not squads.is_deployed(f.id)]
        reserve_medics = [m for m in medics if not squads.is_deployed(m.id)]
        formed: list[Squad] = []

        def _take(squad: Squad) -> None:
            formed.append(squad)
            taken = set(squad.member_ids)
            reserve_fighters[:] = [f for f in reserve_fighters if f.id not in taken]
            reserve_medics[:] = [m for m in reserve_medics if m.id not in taken]

        if self.phase == DeploymentPhase.FIRST_WAVE:
            squad = squads.form_squad(reserve_fighters, reserve_medics, self.config.first_wave, SquadKind.ASSAULT, tick)
            if squad is None:
                return formed
            _take(squad)
            self.waves_deployed += 1
            self.phase = DeploymentPhase.STEADY
            logger.info(f"First wave launched at tick {tick} as squad {squad.name}")
            return formed

        while True:
            squad = squads.form_squad(reserve_fighters, reserve_medics, self.config.wave, SquadKind.ASSAULT, tick)
            if squad is None:
                break
            _take(squad)
            self.waves_deployed += 1

        if self.config.flank_enabled and not squads.active_squads(SquadKind.FLANK):
            fastest = sorted(reserve_fighters, key=move_ratio, reverse=True)
            squad = squads.form_squad(fastest, reserve_medics, self.config.flank_wave, SquadKind.FLANK, tick)
            if squad is not None:
                _take(squad)
                self.flank_squads_deployed += 1

        return formed
