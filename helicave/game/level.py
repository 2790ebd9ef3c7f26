# helicave/game/level.py
from __future__ import annotations
import logging
import random
from typing import List, Protocol

from .config import (
    SLAB_W, GAP_STEP, GAP_FLIP_CHANCE, FLOATING_PER_SCREEN, FLOATING_W, FLOATING_H,
    INITIAL_GAP_RATIO, MIN_GAP_RATIO
)
from .geometry import Dimensions, Point
from .objects import Obstacle

logger = logging.getLogger(__name__)


class ObstacleGenerator(Protocol):
    def generate_borders(self, to: float) -> List[Obstacle]:
        ...

    def generate_obstacles(self, to: float) -> List[Obstacle]:
        ...


class ChannelGen:
    """
    Generates an endless channel of top/bottom border slabs plus free-floating
    blocks, left to right in world x.

    The gap between the borders follows a clamped random walk: every slab it
    shrinks or widens by `gap_step`, and the trend reverses with probability
    `flip_chance`. The widest gap is `initial_gap`.
    """

    def __init__(self,
                 dims: Dimensions,
                 initial_gap: float,
                 min_gap: float,
                 seed: int | None = None,
                 slab_w: float = SLAB_W,
                 gap_step: float = GAP_STEP,
                 flip_chance: float = GAP_FLIP_CHANCE,
                 floating_per_screen: int = FLOATING_PER_SCREEN,
                 floating_dims: Dimensions = Dimensions(FLOATING_W, FLOATING_H)):
        if dims.width <= 0 or dims.height <= 0:
            raise ValueError("viewport width/height must be > 0")
        if min_gap <= 0:
            raise ValueError("min_gap must be > 0")
        if min_gap > initial_gap:
            raise ValueError("min_gap must not exceed initial_gap")
        if initial_gap > dims.height:
            raise ValueError("initial_gap must fit in the viewport height")
        if slab_w <= 0:
            raise ValueError("slab_w must be > 0")
        if not 0.0 <= flip_chance <= 1.0:
            raise ValueError("flip_chance must be in [0, 1]")
        if floating_per_screen < 1:
            raise ValueError("floating_per_screen must be >= 1")
        if floating_dims.width <= 0 or floating_dims.height <= 0:
            raise ValueError("floating obstacle width/height must be > 0")

        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

        self.dims = dims
        self.max_gap = initial_gap
        self.min_gap = min_gap
        self.slab_w = slab_w
        self.gap_step = gap_step
        self.flip_chance = flip_chance
        self.floating_per_screen = floating_per_screen
        self.floating_dims = floating_dims

        self.cursor = 0.0        # x of the next border slab
        self.gap = initial_gap
        self.direction = 1       # +1 narrows the gap, -1 widens it

    @classmethod
    def for_viewport(cls, dims: Dimensions, seed: int | None = None) -> "ChannelGen":
        """Default tuning: gap walks between half and 90% of the screen height."""
        return cls(dims, dims.height * INITIAL_GAP_RATIO, dims.height * MIN_GAP_RATIO, seed=seed)

    def _next_gap(self) -> float:
        if self.rng.random() < self.flip_chance:
            self.direction *= -1
        gap = self.gap - self.direction * self.gap_step
        return min(self.max_gap, max(gap, self.min_gap))

    def generate_borders(self, to: float) -> List[Obstacle]:
        """Emit top/bottom slab pairs until the cursor reaches `to`."""
        obstacles: List[Obstacle] = []
        h = self.dims.height
        while self.cursor < to:
            self.gap = self._next_gap()
            slab_h = (h - self.gap) / 2
            slab = Dimensions(self.slab_w, slab_h)
            obstacles.append(Obstacle(Point(self.cursor, 0), slab))
            obstacles.append(Obstacle(Point(self.cursor, h - slab_h), slab))
            self.cursor += self.slab_w
        if obstacles:
            logger.debug("borders up to x=%s: %d slabs, gap=%s", self.cursor, len(obstacles) // 2, self.gap)
        return obstacles

    def generate_obstacles(self, to: float) -> List[Obstacle]:
        """
        Spread `floating_per_screen` blocks evenly over [to - width, to), each
        at a random height. Does not touch the border cursor, so the same
        horizon must not be requested twice.
        """
        spacing = self.dims.width / self.floating_per_screen
        top_max = max(0.0, self.dims.height - self.floating_dims.height)
        x0 = to - self.dims.width
        return [
            Obstacle(Point(x0 + i * spacing, self.rng.uniform(0.0, top_max)), self.floating_dims)
            for i in range(self.floating_per_screen)
        ]
