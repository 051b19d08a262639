# swampbot/bot.py

import logging
from dataclasses import dataclass, field
from typing import Optional

from swampbot.arena import ArenaGame, ConstructionSite, Creep, Point, Source, Structure, StructureType
from swampbot.combat.flanking import plan_flank_waypoint
from swampbot.combat.movement import PathCache
from swampbot.combat.unit_micro import (
    micro_flanker,
    micro_reserve_fighter,
    micro_reserve_medic,
    micro_squad_fighter,
    micro_squad_medic,
)
from swampbot.config import BotConfig
from swampbot.constants import MONITOR_ALPHA
from swampbot.managers.deployment import DeploymentSequencer
from swampbot.managers.gathering import control_gatherer, select_blocking_wall
from swampbot.managers.lifecycle import prune_dead_units
from swampbot.managers.macro import manage_construction, manage_production
from swampbot.managers.roles import Role, partition_roster
from swampbot.managers.squads import SquadKind, SquadManager
from swampbot.managers.structure_manager import control_towers
from swampbot.utilities.game_report import print_end_game_report, print_periodic_report, print_startup_report
from swampbot.utilities.performance_monitor import PerformanceMonitor

logger = logging.getLogger(__name__)


@dataclass
class TickSnapshot:
    """Roster and world state captured once at the start of a tick."""

    tick: int
    my_creeps: list[Creep] = field(default_factory=list)
    enemy_creeps: list[Creep] = field(default_factory=list)
    structures: list[Structure] = field(default_factory=list)
    sources: list[Source] = field(default_factory=list)
    construction_sites: list[ConstructionSite] = field(default_factory=list)
    my_spawn: Optional[Structure] = None
    enemy_spawn: Optional[Structure] = None
    creeps_by_id: dict[str, Creep] = field(default_factory=dict)
    structures_by_id: dict[str, Structure] = field(default_factory=dict)

    @classmethod
    def capture(cls, game: ArenaGame) -> "TickSnapshot":
        creeps = list(game.get_creeps())
        structures = list(game.get_structures())
        spawns = [s for s in structures if s.structure_type == StructureType.SPAWN]
        return cls(
            tick=game.get_ticks(),
            my_creeps=[c for c in creeps if c.my],
            enemy_creeps=[c for c in creeps if not c.my],
            structures=structures,
            sources=list(game.get_sources()),
            construction_sites=[s for s in game.get_construction_sites() if s.my],
            my_spawn=next((s for s in spawns if s.my), None),
            enemy_spawn=next((s for s in spawns if s.my is False), None),
            creeps_by_id={c.id: c for c in creeps},
            structures_by_id={s.id: s for s in structures},
        )

    @property
    def alive_ids(self) -> set[str]:
        """Ids of every live creep on both sides."""
        return set(self.creeps_by_id)

    def my_structures(self, structure_type: StructureType) -> list[Structure]:
        return [s for s in self.structures if s.my and s.structure_type == structure_type]


class SwampBot:
    """
    Tactical core of the arena bot.

    Owns every piece of state that lives across ticks (path cache, squad
    tables, deployment phase, flank waypoint) and runs the components in
    dependency order once per tick:
    prune -> classify -> deploy / squads -> macro -> flank plan -> creeps -> towers.
    State is reset per game and never persisted.
    """

    def __init__(self, game: ArenaGame, config: Optional[BotConfig] = None):
        self.game = game
        self.config = config or BotConfig()
        self.reset()

    def reset(self) -> None:
        """Start a fresh game: drop every table and counter."""
        config = self.config
        self.path_cache = PathCache(config.path_refresh_interval, config.path_drift_tolerance)
        self.squads = SquadManager(config.squad_names, config.target_policy, config.detection_radius)
        self.deployment = DeploymentSequencer(config)
        self.performance_monitor = PerformanceMonitor(sample_interval=1, alpha=MONITOR_ALPHA)

        self.snapshot: TickSnapshot = TickSnapshot(tick=0)
        self.roster: dict[Role, list[Creep]] = {role: [] for role in Role}
        self.known_own_ids: set[str] = set()

        # Flanking state
        self.flank_waypoint: Optional[Point] = None
        self.flank_reached: set[str] = set()
        self.flank_misses: dict[str, int] = {}

        # Wall blocking the containers, demolished by reserve fighters
        self.target_wall_id: Optional[str] = None

        self._started = False

    def on_start(self) -> None:
        """Runs on the first tick, once the snapshot exists."""
        self._started = True
        print_startup_report(self)

    def on_step(self) -> None:
        """
        Main loop executed each arena tick.
        """
        self.snapshot = snapshot = TickSnapshot.capture(self.game)
        tick = snapshot.tick
        self.path_cache.begin_tick(tick)
        if not self._started:
            self.on_start()

        # Dead ids must be gone before anything reads the tables
        units_lost = prune_dead_units(self, snapshot.alive_ids)

        self.roster = roster = partition_roster(snapshot.my_creeps)
        self.known_own_ids |= {c.id for c in snapshot.my_creeps}

        fighters = roster[Role.FIGHTER]
        production_busy = snapshot.my_spawn.is_busy() if snapshot.my_spawn is not None else False
        self.deployment.step(self.squads, fighters, roster[Role.MEDIC], production_busy, tick)
        self.squads.update(snapshot.creeps_by_id, {f.id for f in fighters}, snapshot.enemy_creeps)

        manage_production(self)
        manage_construction(self)

        if self.squads.active_squads(SquadKind.FLANK):
            plan_flank_waypoint(self)
        select_blocking_wall(self)

        for role in (Role.GATHERER, Role.MEDIC, Role.FIGHTER):
            for creep in roster[role]:
                self._run_creep(creep, role)

        control_towers(self)

        self.performance_monitor.update(tick, self, units_lost)
        print_periodic_report(self, tick)

    def _run_creep(self, creep: Creep, role: Role) -> None:
        """Dispatch one creep to its executor; a failure only costs that creep's tick."""
        squad = self.squads.squad_of(creep.id)
        try:
            if role == Role.GATHERER:
                control_gatherer(self, creep)
            elif role == Role.MEDIC:
                if squad is not None:
                    micro_squad_medic(self, creep, squad)
                else:
                    micro_reserve_medic(self, creep)
            elif role == Role.FIGHTER:
                if squad is None:
                    micro_reserve_fighter(self, creep)
                elif squad.kind == SquadKind.FLANK:
                    micro_flanker(self, creep, squad)
                else:
                    micro_squad_fighter(self, creep, squad)
        except Exception:
            logger.exception(f"Tick {self.snapshot.tick}: {role.value} {creep.id} failed")

    def on_end(self, game_result: str) -> None:
        """
        Called at the end of the game - logs the performance report.
        """
        print_end_game_report(self.performance_monitor, self, game_result)
