"""Shared fixtures: a small two-spawn arena and a bot wired to it."""

import pytest

from fakes import FakeGame, make_spawn
from swampbot.bot import SwampBot, TickSnapshot
from swampbot.config import BotConfig
from swampbot.managers.roles import partition_roster


@pytest.fixture
def game():
    return FakeGame(
        tick=1,
        structures=[
            make_spawn("spawn-home", 10, 50, my=True),
            make_spawn("spawn-enemy", 90, 50, my=False),
        ],
    )


@pytest.fixture
def config():
    return BotConfig()


@pytest.fixture
def bot(game, config):
    return SwampBot(game, config)


@pytest.fixture
def refresh(bot, game):
    """Capture a snapshot without running the tick loop, as executors expect."""
    def _refresh(tick=None):
        if tick is not None:
            game.tick = tick
        bot.snapshot = TickSnapshot.capture(game)
        bot.roster = partition_roster(bot.snapshot.my_creeps)
        bot.path_cache.begin_tick(game.tick)
        return bot.snapshot

    return _refresh
