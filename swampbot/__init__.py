"""Tactical core for a spawn-and-swamp arena bot.

Logic is organized into separate modules for squad management, deployment,
movement, combat micro and the economy loop, coordinated by SwampBot.
"""

from swampbot.bot import SwampBot, TickSnapshot
from swampbot.config import BotConfig, ConfigError, load_config

__all__ = ["SwampBot", "TickSnapshot", "BotConfig", "ConfigError", "load_config"]
