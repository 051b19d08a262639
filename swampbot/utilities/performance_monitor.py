"""
Performance Monitor
Tracks per-tick efficiency metrics for reporting.
Centered on the path cache (how often find_path really runs) plus squad and loss counts.
"""


class PerformanceMonitor:
    """
    Monitors bot performance throughout the game.
    Tracks path cache efficiency and attrition for periodic and end-game reports.
    """

    def __init__(self, sample_interval: int = 1, alpha: float = 0.1):
        """
        Initialize the performance monitor.

        Args:
            sample_interval: How often to sample (in ticks)
            alpha: EMA smoothing factor (0.0-1.0, higher = more weight on recent values)
        """
        self.sample_interval = sample_interval
        self.alpha = alpha

        # Pathing
        self.avg_recomputes_per_tick = 0.0
        self._last_recomputes = 0

        # Attrition
        self.units_lost = 0
        self.squads_formed = 0

        self.samples_taken = 0
        self.last_tick = 0

    def update(self, tick: int, bot, units_lost: int = 0) -> None:
        """
        Update metrics for this tick.

        Args:
            tick: Current arena tick
            bot: Bot instance (to read path cache and squad counters)
            units_lost: Own creeps that died since the previous tick
        """
        self.units_lost += units_lost
        self.squads_formed = bot.squads.formed_count
        self.last_tick = tick

        if tick % self.sample_interval != 0:
            return

        self.samples_taken += 1
        recomputes = bot.path_cache.recomputes
        delta = recomputes - self._last_recomputes
        self._last_recomputes = recomputes
        self.avg_recomputes_per_tick = (
            self.alpha * delta / self.sample_interval +
            (1 - self.alpha) * self.avg_recomputes_per_tick
        )

    @staticmethod
    def get_cache_hit_rate(bot) -> float:
        """
        Share of moves served from a cached path.

        Returns:
            Hit rate in [0, 1], 0.0 before any move
        """
        cache = bot.path_cache
        total = cache.hits + cache.recomputes
        if total == 0:
            return 0.0
        return cache.hits / total

    def get_efficiency_rating(self, bot) -> str:
        """Rating string for the current hit rate (for reports)."""
        rate = self.get_cache_hit_rate(bot)
        if rate >= 0.8:
            return "EXCELLENT"
        elif rate >= 0.6:
            return "GOOD"
        elif rate >= 0.4:
            return "FAIR"
        else:
            return "POOR"
