# helicave/game/engine.py
from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional, Tuple

from .config import STEP, CRAFT_SIZE
from .controls import Controller
from .geometry import Dimensions, Point
from .level import ObstacleGenerator
from .objects import Craft, Obstacle, collides_with
from .render import FrameFactory

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    RUNNING = "running"
    COLLIDED = "collided"


def _left_edge(o: Obstacle) -> float:
    return o.bounding_box().start.x


class Game:
    """
    Owns the scroll offset, the obstacle list, the craft and the generator.

    Terrain is generated in batches: every time the offset crosses a multiple
    of the viewport width, two widths of lookahead are requested and anything
    fully behind the offset is dropped. The driver calls tick() then draw()
    once per cycle and stops once has_collided() reports True.
    """

    def __init__(self,
                 frame_factory: FrameFactory,
                 generator: ObstacleGenerator,
                 dims: Dimensions,
                 controller: Controller,
                 keep_full_trail: bool = False):
        if dims.width <= 0 or dims.height <= 0:
            raise ValueError("viewport width/height must be > 0")
        if dims.width % STEP != 0:
            raise ValueError(f"viewport width must be a multiple of the scroll step ({STEP})")
        self.frame_factory = frame_factory
        self.generator = generator
        self.dims = dims

        # Enough trail to cover the screen behind the craft; older points are off-screen.
        trail_limit: Optional[int] = None
        if not keep_full_trail:
            trail_limit = int((dims.width / 2 + CRAFT_SIZE) // STEP)

        self.offset = 0
        self.status = GameStatus.RUNNING
        self._obstacles: List[Obstacle] = list(generator.generate_borders(dims.width))
        self.craft = Craft(Point(dims.width / 2, dims.height / 2), controller, trail_limit=trail_limit)

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return tuple(self._obstacles)

    def tick(self):
        if self.status is GameStatus.COLLIDED:
            logger.debug("tick ignored at offset=%d: game already collided", self.offset)
            return

        if self.offset % self.dims.width == 0:
            to = self.offset + 2 * self.dims.width
            batch = self.generator.generate_borders(to) + self.generator.generate_obstacles(to)
            self._obstacles.extend(batch)
            # nearly sorted already; the floating blocks interleave with the slabs
            self._obstacles.sort(key=_left_edge)
            pruned = self._prune_behind()
            logger.debug("offset=%d generated=%d pruned=%d retained=%d",
                         self.offset, len(batch), pruned, len(self._obstacles))

        self.offset += STEP
        self.craft.advance(STEP)

    def _prune_behind(self) -> int:
        """Drop the leading run of obstacles whose right edge is behind the offset."""
        i = 0
        while i < len(self._obstacles) and self._obstacles[i].bounding_box().end.x < self.offset:
            i += 1
        del self._obstacles[:i]
        return i

    def has_collided(self) -> bool:
        if self.status is GameStatus.COLLIDED:
            return True
        for obstacle in self._obstacles:
            if collides_with(self.craft, obstacle):
                self.status = GameStatus.COLLIDED
                logger.debug("collision at offset=%d score=%d", self.offset, self.score())
                return True
        return False

    def draw(self):
        frame = self.frame_factory.new_frame(self.offset)
        frame.clear()
        self.craft.draw(frame)
        for obstacle in self._obstacles:
            obstacle.draw(frame)

    def score(self) -> int:
        return self.offset // STEP
