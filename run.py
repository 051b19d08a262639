import logging
import sys
from pathlib import Path
from typing import Optional

from swampbot import BotConfig, SwampBot, load_config

# change if the arena runs the bot from another directory
CONFIG_FILE: str = "config.yml"

_bot: Optional[SwampBot] = None


def setup_logging(config: BotConfig) -> None:
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def loop(game) -> None:
    """
    Entry point the arena calls once per tick.

    The bot and its config are created on the first call and kept for the
    rest of the game.
    """
    global _bot
    if _bot is None:
        config = load_config(Path(CONFIG_FILE))
        setup_logging(config)
        _bot = SwampBot(game, config)
    _bot.on_step()


def end(game_result: str) -> None:
    """Called by the arena when the game is over."""
    global _bot
    if _bot is not None:
        _bot.on_end(game_result)
        _bot = None


def main():
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(CONFIG_FILE)
    config = load_config(config_path)
    setup_logging(config)
    logging.getLogger(__name__).info(f"Config OK: {config}")


# Check the config without starting a game
if __name__ == "__main__":
    main()
