# helicave/tests/test_engine.py
"""
Game loop checks: scrolling, windowed generation/pruning, collisions.

Usage (from repo root):
  python -m pytest helicave/tests/test_engine.py
"""
from typing import List

import pytest

from helicave.game.config import COLOR_CRAFT
from helicave.game.controls import ScriptedController
from helicave.game.engine import Game, GameStatus
from helicave.game.geometry import Dimensions, Point
from helicave.game.level import ChannelGen
from helicave.game.objects import Obstacle
from helicave.game.render import RecordingFrameFactory

VIEW = Dimensions(800, 600)


class RecordingGen:
    """Wraps a real generator and remembers which horizons were requested."""

    def __init__(self, inner):
        self.inner = inner
        self.border_calls: List[float] = []
        self.obstacle_calls: List[float] = []

    def generate_borders(self, to):
        self.border_calls.append(to)
        return self.inner.generate_borders(to)

    def generate_obstacles(self, to):
        self.obstacle_calls.append(to)
        return self.inner.generate_obstacles(to)


class FixedGen:
    """Hands out a fixed obstacle list once, then nothing."""

    def __init__(self, obstacles):
        self.pending = list(obstacles)

    def generate_borders(self, to):
        out, self.pending = self.pending, []
        return out

    def generate_obstacles(self, to):
        return []


def make_game(seed=5, controller=None, **kw) -> Game:
    return Game(RecordingFrameFactory(), ChannelGen.for_viewport(VIEW, seed=seed), VIEW,
                controller or ScriptedController(), **kw)


def left_edges(game: Game):
    return [o.bounding_box().start.x for o in game.obstacles]


def test_offset_and_score_advance_by_step():
    game = make_game()
    assert game.offset == 0 and game.score() == 0
    prev = game.offset
    for n in range(1, 1001):
        game.tick()
        assert game.offset == 2 * n
        assert game.offset > prev
        assert game.score() == game.offset // 2 == n
        prev = game.offset


def test_obstacles_sorted_after_every_tick():
    ctl = ScriptedController()
    game = make_game(seed=11, controller=ctl)
    assert left_edges(game) == sorted(left_edges(game))
    for n in range(4000):
        ctl.pressed = (n // 50) % 2 == 0
        game.tick()
        xs = left_edges(game)
        assert xs == sorted(xs), f"unsorted after tick {n + 1}"


def test_pruning_never_drops_visible_obstacles():
    game = make_game(seed=2)
    for _ in range(4000):
        before = {id(o): o for o in game.obstacles}
        offset_at_prune = game.offset
        game.tick()
        after = {id(o) for o in game.obstacles}
        for key, o in before.items():
            if key not in after:
                assert o.bounding_box().end.x < offset_at_prune, \
                    f"pruned {o} at offset {offset_at_prune}"


def test_retained_obstacles_stay_bounded():
    game = make_game(seed=8)
    for _ in range(8000):
        game.tick()
    # ~3 screens of slabs (2 per 100px) plus the floating blocks
    assert len(game.obstacles) <= 3 * (800 // 100) * 2 + 3 * 2
    assert min(left_edges(game)) >= game.offset - 2 * 800


def test_generation_triggers_once_per_viewport_width():
    gen = RecordingGen(ChannelGen.for_viewport(VIEW, seed=1))
    game = Game(RecordingFrameFactory(), gen, VIEW, ScriptedController())
    assert gen.border_calls == [800], "first screen is generated up front"
    game.tick()
    assert gen.border_calls == [800, 1600]
    assert gen.obstacle_calls == [1600]
    for _ in range(399):
        game.tick()
    assert game.offset == 800
    assert gen.border_calls == [800, 1600]
    game.tick()
    assert gen.border_calls == [800, 1600, 2400]
    assert gen.obstacle_calls == [1600, 2400]


def test_terrain_covers_screen_ahead():
    game = make_game(seed=4)
    for _ in range(3000):
        game.tick()
        assert max(left_edges(game)) >= game.offset + 800 - 100


def test_craft_drifts_down_without_input():
    game = make_game(seed=9)
    start = game.craft.position
    assert start == Point(400, 300)
    for _ in range(300):
        game.tick()
    assert game.craft.position.y - start.y == 300
    assert game.craft.position.x - start.x == 600


def test_collision_on_edge_touch_vs_overlap():
    block = Obstacle(Point(500, 290), Dimensions(50, 40))
    game = Game(RecordingFrameFactory(), FixedGen([block]), VIEW, ScriptedController())
    assert not game.has_collided()

    game.craft.position = Point(480, 300)   # craft right edge == block left edge
    assert game.craft.bounding_box().end.x == block.bounding_box().start.x
    assert not game.has_collided()
    assert game.status is GameStatus.RUNNING

    game.craft.position = Point(481, 300)
    assert game.has_collided()
    assert game.status is GameStatus.COLLIDED


def test_ticks_are_ignored_once_collided():
    block = Obstacle(Point(380, 280), Dimensions(60, 60))
    game = Game(RecordingFrameFactory(), FixedGen([block]), VIEW, ScriptedController())
    assert game.has_collided()
    offset, pos, trail = game.offset, game.craft.position, len(game.craft.trail)
    for _ in range(10):
        game.tick()
    assert (game.offset, game.craft.position, len(game.craft.trail)) == (offset, pos, trail)
    assert game.has_collided()
    game.draw()  # still renders the final state
    assert game.frame_factory.last.calls


def test_draw_translates_and_orders_objects():
    game = make_game(seed=6)
    for _ in range(50):
        game.tick()
    game.draw()
    frame = game.frame_factory.last
    assert frame.cleared
    assert frame.offset == game.offset
    n_trail = len(game.craft.trail)
    assert len(frame.calls) == n_trail + 1 + len(game.obstacles)
    craft_call = frame.calls[n_trail]
    assert craft_call.color == COLOR_CRAFT
    assert craft_call.x == 400, "craft stays at the middle of the screen"
    first = game.obstacles[0]
    assert frame.calls[n_trail + 1].x == first.position.x - game.offset


def test_trail_is_bounded_to_screen():
    game = make_game(seed=3)
    for _ in range(1000):
        game.tick()
    assert len(game.craft.trail) == (400 + 20) // 2
    # oldest kept point is still (just) on screen
    assert game.craft.trail[0].x + 20 >= game.offset

    full = make_game(seed=3, keep_full_trail=True)
    for _ in range(1000):
        full.tick()
    assert len(full.craft.trail) == 1000


@pytest.mark.parametrize("dims", [Dimensions(0, 600), Dimensions(800, 0), Dimensions(801, 600)])
def test_rejects_bad_viewport(dims):
    with pytest.raises(ValueError):
        Game(RecordingFrameFactory(), FixedGen([]), dims, ScriptedController())
