"""Unit tests for the path cache and single-step movement."""

from fakes import FakeGame, make_fighter
from swampbot.arena import Direction, Point, get_direction
from swampbot.combat.movement import PathCache, PathCacheEntry, target_key


def _cache(refresh=5, drift=1):
    return PathCache(refresh_interval=refresh, drift_tolerance=drift)


# ===========================================================================
# Helpers
# ===========================================================================

class TestDirection:
    def test_signs_only(self):
        assert get_direction(5, 0) == Direction.RIGHT
        assert get_direction(-3, -7) == Direction.TOP_LEFT
        assert get_direction(0, 2) == Direction.BOTTOM

    def test_zero_offset(self):
        assert get_direction(0, 0) is None


class TestTargetKey:
    def test_object_uses_id(self):
        assert target_key(make_fighter("f1", 3, 4)) == "f1"

    def test_bare_point_uses_coordinates(self):
        assert target_key(Point(10, 10)) == (10, 10)


class TestPathCacheEntry:
    def test_expected_position_starts_at_origin(self):
        entry = PathCacheEntry(target=(1, 1), tick=0, origin=Point(3, 3), path=[Point(2, 2), Point(1, 1)])
        assert entry.expected_position == Point(3, 3)

    def test_cursor_advances_only_on_confirmed_step(self):
        entry = PathCacheEntry(target=(1, 1), tick=0, origin=Point(3, 3), path=[Point(2, 2), Point(1, 1)])
        creep = make_fighter("f", 3, 3)
        entry.confirm_progress(creep)
        assert entry.cursor == 0

        creep.x, creep.y = 2, 2
        entry.confirm_progress(creep)
        entry.confirm_progress(creep)
        assert entry.cursor == 1
        assert entry.expected_position == Point(2, 2)


# ===========================================================================
# Movement controller
# ===========================================================================

class TestMoveToward:
    def test_first_call_computes_and_moves(self):
        game = FakeGame()
        cache = _cache()
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)

        assert cache.move_toward(game, creep, Point(10, 10))
        assert len(game.path_calls) == 1
        assert creep.moves == [Direction.TOP_LEFT]
        assert cache.entries["u"].tick == 100
        assert cache.recomputes == 1

    def test_reuses_path_inside_refresh_interval(self):
        game = FakeGame()
        cache = _cache()
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)
        cache.move_toward(game, creep, Point(10, 10))

        for tick in range(101, 105):
            creep.x -= 1
            creep.y -= 1
            cache.begin_tick(tick)
            assert cache.move_toward(game, creep, Point(10, 10))

        assert len(game.path_calls) == 1
        assert cache.hits == 4
        assert cache.entries["u"].cursor == 4

    def test_stale_entry_is_recomputed(self):
        game = FakeGame()
        cache = _cache(refresh=5)
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)
        cache.move_toward(game, creep, Point(10, 10))

        cache.begin_tick(106)
        cache.move_toward(game, creep, Point(10, 10))
        assert len(game.path_calls) == 2
        assert cache.entries["u"].tick == 106

    def test_target_change_forces_recompute(self):
        game = FakeGame()
        cache = _cache()
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)
        cache.move_toward(game, creep, Point(10, 10))
        cache.begin_tick(101)
        cache.move_toward(game, creep, Point(20, 20))

        assert len(game.path_calls) == 2
        assert cache.entries["u"].target == (20, 20)
        assert creep.moves[-1] == Direction.BOTTOM_RIGHT

    def test_drift_forces_recompute(self):
        game = FakeGame()
        cache = _cache(drift=1)
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)
        cache.move_toward(game, creep, Point(10, 10))

        # Pushed three cells away from the route
        creep.x, creep.y = 15, 18
        cache.begin_tick(101)
        cache.move_toward(game, creep, Point(10, 10))
        assert len(game.path_calls) == 2
        assert cache.entries["u"].origin == Point(15, 18)

    def test_small_drift_is_tolerated(self):
        game = FakeGame()
        cache = _cache(drift=1)
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)
        cache.move_toward(game, creep, Point(10, 10))

        # Last move failed, creep is still on its origin cell
        cache.begin_tick(101)
        assert cache.move_toward(game, creep, Point(10, 10))
        assert len(game.path_calls) == 1
        assert cache.entries["u"].cursor == 0

    def test_exhausted_path_is_recomputed_before_refresh(self):
        game = FakeGame()
        cache = _cache(refresh=50)
        creep = make_fighter("u", 13, 13)
        goal = make_fighter("goal", 10, 10, my=False)

        # Walk the full three-step route to the goal's old cell
        for tick in range(1, 4):
            cache.begin_tick(tick)
            assert cache.move_toward(game, creep, goal)
            creep.x -= 1
            creep.y -= 1
        assert len(game.path_calls) == 1
        assert cache.hits == 2

        # Same goal identity, route used up, well inside the refresh interval
        goal.x, goal.y = 6, 6
        cache.begin_tick(4)
        assert cache.move_toward(game, creep, goal)
        assert len(game.path_calls) == 2
        assert game.path_calls[-1][0] == Point(10, 10)
        assert cache.entries["u"].tick == 4
        assert cache.entries["u"].cursor == 0
        assert creep.moves[-1] == Direction.TOP_LEFT

    def test_exhausted_entry_is_invalid(self):
        cache = _cache(refresh=50)
        entry = PathCacheEntry(target=(1, 1), tick=0, origin=Point(3, 3), path=[Point(2, 2)], cursor=1)
        assert entry.exhausted
        assert not cache.is_valid(entry, make_fighter("u", 2, 2), (1, 1), 1)

    def test_one_move_per_tick(self):
        game = FakeGame()
        cache = _cache()
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)

        assert cache.move_toward(game, creep, Point(10, 10))
        assert not cache.move_toward(game, creep, Point(20, 20))
        assert len(creep.moves) == 1
        assert len(game.path_calls) == 1

    def test_no_path_means_no_move(self):
        game = FakeGame(path_fn=lambda origin, goal: None)
        cache = _cache()
        creep = make_fighter("u", 15, 15)
        cache.begin_tick(100)

        assert not cache.move_toward(game, creep, Point(10, 10))
        assert creep.moves == []
        assert "u" not in cache.entries
        assert cache.failures == 1

    def test_already_at_goal(self):
        game = FakeGame()
        cache = _cache()
        creep = make_fighter("u", 10, 10)
        cache.begin_tick(100)

        assert not cache.move_toward(game, creep, Point(10, 10))
        assert creep.moves == []

    def test_ignore_creeps_is_forwarded(self):
        game = FakeGame()
        cache = _cache()
        cache.begin_tick(1)
        cache.move_toward(game, make_fighter("u", 0, 0), Point(5, 0), ignore_creeps=True)
        assert game.path_calls[0][2] is True

    def test_cursor_never_moves_backwards(self):
        game = FakeGame()
        cache = _cache(refresh=50)
        creep = make_fighter("u", 15, 15)
        seen = []
        for tick in range(100, 106):
            cache.begin_tick(tick)
            cache.move_toward(game, creep, Point(10, 10))
            seen.append(cache.entries["u"].cursor)
            if tick % 2 == 0:
                creep.x -= 1
                creep.y -= 1
        assert seen == sorted(seen)
        assert len(game.path_calls) == 1


class TestPrune:
    def test_dead_entries_dropped(self):
        game = FakeGame()
        cache = _cache()
        cache.begin_tick(1)
        cache.move_toward(game, make_fighter("a", 0, 0), Point(5, 5))
        cache.move_toward(game, make_fighter("b", 0, 0), Point(5, 5))

        assert cache.prune({"a"}) == 1
        assert set(cache.entries) == {"a"}
