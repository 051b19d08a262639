"""
Game Report Utility
Handles presentation and formatting of reports:
- Startup report (called once in on_start)
- Periodic status reports (every report_interval ticks)
- End-game performance report (uses PerformanceMonitor)
"""

import logging

from swampbot.managers.roles import Role
from swampbot.managers.squads import SquadKind

logger = logging.getLogger(__name__)


def print_startup_report(bot) -> None:
    """Log one-time startup report with static game information.

    Args:
        bot: Bot instance
    """
    snapshot = bot.snapshot
    home = snapshot.my_spawn
    enemy = snapshot.enemy_spawn
    lines = [
        "=" * 60,
        "  GAME STARTUP REPORT",
        "=" * 60,
        f"  Map: {bot.config.map_width}x{bot.config.map_height}",
        f"  Home Spawn: {(home.x, home.y) if home else 'unknown'}",
        f"  Enemy Spawn: {(enemy.x, enemy.y) if enemy else 'unknown'}",
        f"  First Wave: {bot.config.first_wave.fighters} fighters + {bot.config.first_wave.medics} medics",
        f"  Waves: {bot.config.wave.fighters} fighters + {bot.config.wave.medics} medics",
        f"  Flanking: {'on' if bot.config.flank_enabled else 'off'}",
        f"  Target Policy: {bot.config.target_policy.value}",
        "=" * 60,
    ]
    logger.info("\n".join(lines))


def print_periodic_report(bot, tick: int) -> bool:
    """Log a status report every report_interval ticks.

    Args:
        bot: Bot instance
        tick: Current tick

    Returns:
        True if a report was written this tick
    """
    if tick == 0 or tick % bot.config.report_interval != 0:
        return False

    roster = bot.roster
    monitor = bot.performance_monitor
    lines = [
        "=" * 60,
        f"  STATUS REPORT tick {tick}",
        "=" * 60,
        f"  Gatherers: {len(roster.get(Role.GATHERER, []))}"
        f"  Fighters: {len(roster.get(Role.FIGHTER, []))}"
        f"  Medics: {len(roster.get(Role.MEDIC, []))}",
        f"  Enemies Visible: {len(bot.snapshot.enemy_creeps)}",
        f"  Deployment Phase: {bot.deployment.phase.value}",
    ]
    for squad in bot.squads.active_squads():
        lines.append(
            f"    {squad.name:<10} {squad.kind.value:<8} members={len(squad.member_ids)}"
            f" leader={squad.leader_id} target={squad.target_id}"
        )
    if bot.squads.active_squads(SquadKind.FLANK):
        lines.append(f"  Flank Waypoint: {bot.flank_waypoint}  reached: {len(bot.flank_reached)}")
    lines.append(
        f"  Path Cache: {monitor.get_cache_hit_rate(bot):.0%} hits"
        f" ({monitor.avg_recomputes_per_tick:.2f} recomputes/tick)"
    )
    lines.append("=" * 60)
    logger.info("\n".join(lines))
    return True


def print_end_game_report(performance_monitor, bot, game_result: str) -> None:
    """Log the end-of-game summary.

    Args:
        performance_monitor: PerformanceMonitor instance
        bot: Bot instance
        game_result: Result reported by the arena (e.g. "victory", "defeat")
    """
    cache = bot.path_cache
    lines = [
        "=" * 60,
        "  END GAME REPORT",
        "=" * 60,
        f"  Result: {game_result}",
        f"  Ticks Played: {performance_monitor.last_tick}",
        f"  Squads Formed: {performance_monitor.squads_formed}",
        f"  Units Lost: {performance_monitor.units_lost}",
        f"  Path Cache: {cache.hits} hits, {cache.recomputes} recomputes, {cache.failures} failures",
        f"  Pathing Efficiency: {performance_monitor.get_efficiency_rating(bot)}",
        "=" * 60,
    ]
    logger.info("\n".join(lines))
